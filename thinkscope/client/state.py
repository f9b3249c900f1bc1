"""Client-side completion state with optimistic toggles.

``ProgressStore`` keeps the set of completed problem ids the way the server
reports them: canonical ids as strings, catalog numbers as ints. Subscribers
are notified only about the ids they asked for.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from thinkscope.progress.schemas import AllProgressResponse, ToggleResponse


logger = logging.getLogger(__name__)

ProblemKey = str | int
Listener = Callable[[ProblemKey, bool], None]


class ProgressAPI(Protocol):
    """The part of ``ThinkscopeClient`` the store talks to."""

    async def all_progress(self) -> AllProgressResponse: ...

    async def toggle(self, problem_id: str) -> ToggleResponse: ...

    async def toggle_number(self, problem_number: int) -> ToggleResponse: ...


class ToggleState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class ToggleAction:
    """One optimistic toggle: IDLE -> PENDING -> COMMITTED or ROLLED_BACK."""

    def __init__(self, problem_id: ProblemKey) -> None:
        self.problem_id = problem_id
        self.state = ToggleState.IDLE
        self.previous: bool | None = None

    def _expect(self, state: ToggleState) -> None:
        if self.state is not state:
            msg = f"Cannot leave {self.state.value} toggle for {self.problem_id} from here"
            raise RuntimeError(msg)

    def begin(self, previous: bool) -> bool:
        """Remember the value being replaced and return the optimistic one."""
        self._expect(ToggleState.IDLE)
        self.previous = previous
        self.state = ToggleState.PENDING
        return not previous

    def commit(self) -> None:
        self._expect(ToggleState.PENDING)
        self.state = ToggleState.COMMITTED

    def rollback(self) -> bool:
        """Return the value to restore."""
        self._expect(ToggleState.PENDING)
        self.state = ToggleState.ROLLED_BACK
        return bool(self.previous)


@dataclass(frozen=True)
class ToggleOutcome:
    problem_id: ProblemKey
    state: ToggleState
    previous: bool
    current: bool
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.state is ToggleState.COMMITTED


@dataclass
class _Subscription:
    callback: Listener
    problem_ids: frozenset[ProblemKey] | None

    def wants(self, problem_id: ProblemKey) -> bool:
        return self.problem_ids is None or problem_id in self.problem_ids


class ProgressStore:
    """Completed-id set shared by every view of a client."""

    def __init__(self, api: ProgressAPI) -> None:
        self._api = api
        self._completed: set[ProblemKey] = set()
        self._subscriptions: list[_Subscription] = []

    @staticmethod
    def _key(problem_id: object) -> ProblemKey:
        # Catalog numbers stay ints, everything else is compared as a string
        if isinstance(problem_id, int) and not isinstance(problem_id, bool):
            return problem_id
        return str(problem_id)

    @property
    def completed(self) -> frozenset[ProblemKey]:
        return frozenset(self._completed)

    def is_completed(self, problem_id: object) -> bool:
        return self._key(problem_id) in self._completed

    def subscribe(self, callback: Listener, problem_ids: Iterable[object] | None = None) -> Callable[[], None]:
        """Register ``callback`` for changes to ``problem_ids`` (all ids when None).

        Returns a handle that removes the subscription; calling it twice is
        harmless.
        """
        scope = None if problem_ids is None else frozenset(self._key(pid) for pid in problem_ids)
        subscription = _Subscription(callback=callback, problem_ids=scope)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def _notify(self, problem_id: ProblemKey) -> None:
        completed = problem_id in self._completed
        for subscription in list(self._subscriptions):
            if subscription.wants(problem_id):
                subscription.callback(problem_id, completed)

    def _set(self, problem_id: ProblemKey, completed: bool) -> None:
        if completed:
            self._completed.add(problem_id)
        else:
            self._completed.discard(problem_id)

    async def refresh(self) -> set[ProblemKey]:
        """Replace the local set with the server's and notify changed ids."""
        snapshot = await self._api.all_progress()
        fresh = {self._key(pid) for pid in snapshot.completed_problems}
        changed = self._completed ^ fresh
        self._completed = fresh
        for problem_id in sorted(changed, key=str):
            self._notify(problem_id)
        return changed

    async def toggle(self, problem_id: object) -> ToggleOutcome:
        """Flip ``problem_id`` locally, then confirm it with the server.

        On failure the previous value is restored and the error is returned
        in the outcome rather than raised. A failed re-sync after the server
        accepted the toggle keeps the committed value and reports the error.
        """
        key = self._key(problem_id)
        action = ToggleAction(key)
        previous = key in self._completed

        self._set(key, action.begin(previous))
        self._notify(key)

        try:
            if isinstance(key, int):
                response = await self._api.toggle_number(key)
            else:
                response = await self._api.toggle(key)
        except Exception as e:
            self._set(key, action.rollback())
            self._notify(key)
            logger.warning("Toggle of %s failed, restored previous state: %s", key, e)
            return ToggleOutcome(key, action.state, previous, previous, error=e)

        action.commit()
        try:
            changed = await self.refresh()
        except Exception as e:
            # The server applied the toggle; only the re-sync failed
            self._set(key, response.is_completed)
            self._notify(key)
            logger.warning("Toggle of %s committed but re-sync failed: %s", key, e)
            return ToggleOutcome(key, action.state, previous, response.is_completed, error=e)

        if key not in changed:
            self._notify(key)
        return ToggleOutcome(key, action.state, previous, key in self._completed)
