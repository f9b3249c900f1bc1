"""Authentication module exports."""

from thinkscope.auth.context import AuthContext, CurrentAuth


__all__ = [
    "AuthContext",
    "CurrentAuth",
]
