"""Client for the Thinkscope API and its local progress state."""

from thinkscope.client.api import ThinkscopeAPIError, ThinkscopeClient
from thinkscope.client.state import ProgressStore, ToggleAction, ToggleOutcome, ToggleState


__all__ = [
    "ProgressStore",
    "ThinkscopeAPIError",
    "ThinkscopeClient",
    "ToggleAction",
    "ToggleOutcome",
    "ToggleState",
]
