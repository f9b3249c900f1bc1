"""ProgressStore against an in-memory fake of the API."""

import pytest

from thinkscope.client import ProgressStore, ThinkscopeAPIError, ToggleAction, ToggleState
from thinkscope.progress.schemas import AllProgressResponse, ToggleResponse


P1 = "00000000-0000-0000-0000-000000000001"
P2 = "00000000-0000-0000-0000-000000000002"


class FakeAPI:
    """Server-side state kept in a set; ``fail`` makes the next toggle raise."""

    def __init__(self, completed=()) -> None:
        self.completed = set(completed)
        self.fail: Exception | None = None
        self.fail_refresh: Exception | None = None
        self.calls: list[object] = []

    async def all_progress(self) -> AllProgressResponse:
        if self.fail_refresh is not None:
            raise self.fail_refresh
        ids = sorted(self.completed, key=str)
        return AllProgressResponse(completed_problems=ids, total=len(ids), completed=len(ids))

    async def _flip(self, key) -> ToggleResponse:
        self.calls.append(key)
        if self.fail is not None:
            error, self.fail = self.fail, None
            raise error
        self.completed ^= {key}
        return ToggleResponse(problem_id=key, is_completed=key in self.completed)

    async def toggle(self, problem_id: str) -> ToggleResponse:
        return await self._flip(problem_id)

    async def toggle_number(self, problem_number: int) -> ToggleResponse:
        return await self._flip(problem_number)


class TestToggleAction:
    def test_commit_path(self) -> None:
        action = ToggleAction(P1)
        assert action.state is ToggleState.IDLE
        assert action.begin(previous=False) is True
        assert action.state is ToggleState.PENDING
        action.commit()
        assert action.state is ToggleState.COMMITTED

    def test_rollback_returns_previous_value(self) -> None:
        action = ToggleAction(P1)
        action.begin(previous=True)
        assert action.rollback() is True
        assert action.state is ToggleState.ROLLED_BACK

    def test_cannot_commit_twice(self) -> None:
        action = ToggleAction(P1)
        action.begin(previous=False)
        action.commit()
        with pytest.raises(RuntimeError):
            action.commit()

    def test_cannot_rollback_before_begin(self) -> None:
        with pytest.raises(RuntimeError):
            ToggleAction(P1).rollback()


class TestProgressStore:
    @pytest.mark.asyncio
    async def test_refresh_loads_server_set(self) -> None:
        store = ProgressStore(FakeAPI({P1, 7}))
        changed = await store.refresh()
        assert changed == {P1, 7}
        assert store.is_completed(P1)
        assert store.is_completed(7)
        assert not store.is_completed(P2)

    @pytest.mark.asyncio
    async def test_toggle_commits_and_notifies_optimistically(self) -> None:
        api = FakeAPI()
        store = ProgressStore(api)
        seen: list[tuple[object, bool]] = []
        store.subscribe(lambda pid, done: seen.append((pid, done)))

        outcome = await store.toggle(P1)

        assert outcome.ok
        assert outcome.state is ToggleState.COMMITTED
        assert (outcome.previous, outcome.current) == (False, True)
        assert outcome.error is None
        assert store.is_completed(P1)
        # optimistic notification first, then the confirmation after re-sync
        assert seen == [(P1, True), (P1, True)]

    @pytest.mark.asyncio
    async def test_failed_toggle_restores_previous_value(self) -> None:
        api = FakeAPI({P1})
        store = ProgressStore(api)
        await store.refresh()
        seen: list[tuple[object, bool]] = []
        store.subscribe(lambda pid, done: seen.append((pid, done)))

        api.fail = ThinkscopeAPIError(409, "Progress entry already exists", "CONFLICT")
        outcome = await store.toggle(P1)

        assert not outcome.ok
        assert outcome.state is ToggleState.ROLLED_BACK
        assert outcome.previous is True
        assert outcome.current is True
        assert isinstance(outcome.error, ThinkscopeAPIError)
        assert outcome.error.code == "CONFLICT"
        assert store.is_completed(P1)
        assert seen == [(P1, False), (P1, True)]

    @pytest.mark.asyncio
    async def test_numeric_ids_use_numbered_toggle(self) -> None:
        api = FakeAPI()
        store = ProgressStore(api)

        outcome = await store.toggle(3)

        assert outcome.current is True
        assert api.calls == [3]
        assert store.completed == frozenset({3})

    @pytest.mark.asyncio
    async def test_scoped_subscribers_only_hear_their_ids(self) -> None:
        store = ProgressStore(FakeAPI())
        p1_events: list[bool] = []
        p2_events: list[bool] = []
        store.subscribe(lambda _pid, done: p1_events.append(done), problem_ids=[P1])
        store.subscribe(lambda _pid, done: p2_events.append(done), problem_ids=[P2])

        await store.toggle(P1)

        assert p1_events
        assert p2_events == []

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_notifications(self) -> None:
        store = ProgressStore(FakeAPI())
        events: list[bool] = []
        unsubscribe = store.subscribe(lambda _pid, done: events.append(done))

        unsubscribe()
        unsubscribe()
        await store.toggle(P1)

        assert events == []

    @pytest.mark.asyncio
    async def test_commit_resyncs_changes_made_elsewhere(self) -> None:
        api = FakeAPI()
        store = ProgressStore(api)
        seen: list[tuple[object, bool]] = []
        store.subscribe(lambda pid, done: seen.append((pid, done)), problem_ids=[P2])

        # another device completed P2 meanwhile
        api.completed.add(P2)
        await store.toggle(P1)

        assert store.completed == frozenset({P1, P2})
        assert seen == [(P2, True)]

    @pytest.mark.asyncio
    async def test_failed_resync_still_reports_commit(self) -> None:
        api = FakeAPI()
        store = ProgressStore(api)
        seen: list[tuple[object, bool]] = []
        store.subscribe(lambda pid, done: seen.append((pid, done)))

        api.fail_refresh = ThinkscopeAPIError(500, "Internal server error", "INTERNAL_ERROR")
        outcome = await store.toggle(5)

        assert outcome.state is ToggleState.COMMITTED
        assert (outcome.previous, outcome.current) == (False, True)
        assert isinstance(outcome.error, ThinkscopeAPIError)
        assert outcome.error.status_code == 500
        assert store.is_completed(5)
        assert api.completed == {5}
        assert seen == [(5, True), (5, True)]
