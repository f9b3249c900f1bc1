"""Async HTTP client for the Thinkscope API."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from uuid import UUID

import httpx
from pydantic import BaseModel

from thinkscope.auth.schemas import AuthPayload
from thinkscope.problems.schemas import ProblemDetailResponse, ProblemResponse
from thinkscope.progress.schemas import (
    AllProgressResponse,
    StatsResponse,
    ToggleResponse,
    TopicProgressResponse,
)
from thinkscope.schemas import Envelope, ListEnvelope
from thinkscope.topics.schemas import TopicResponse
from thinkscope.users.schemas import UserResponse


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ThinkscopeAPIError(Exception):
    """A request answered with the failure envelope."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f"{status_code}: {message}")


class ThinkscopeClient:
    """Thin wrapper over ``httpx.AsyncClient`` that unwraps response envelopes.

    The bearer token is remembered after ``signup`` or ``login`` and sent with
    every later request. Pass ``transport`` to talk to an in-process app.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> ThinkscopeClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = await self._http.request(method, path, json=json, headers=headers)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error or not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            code = body.get("error") if isinstance(body, dict) else None
            logger.debug("%s %s failed with %s", method, path, response.status_code)
            raise ThinkscopeAPIError(response.status_code, message or response.reason_phrase, code)

        return body

    async def _get(self, path: str, envelope: type[ModelT]) -> ModelT:
        return envelope.model_validate(await self._request("GET", path))

    async def _authenticate(self, path: str, payload: dict[str, Any]) -> AuthPayload:
        body = await self._request("POST", path, json=payload)
        auth = Envelope[AuthPayload].model_validate(body).data
        self.token = auth.token
        return auth

    # Auth

    async def signup(self, name: str, email: str, password: str) -> AuthPayload:
        return await self._authenticate("/api/auth/signup", {"name": name, "email": email, "password": password})

    async def login(self, email: str, password: str) -> AuthPayload:
        return await self._authenticate("/api/auth/login", {"email": email, "password": password})

    async def me(self) -> UserResponse:
        return (await self._get("/api/auth/me", Envelope[UserResponse])).data

    # Catalog

    async def list_topics(self) -> list[TopicResponse]:
        return (await self._get("/api/topics", ListEnvelope[TopicResponse])).data

    async def list_problems(self, topic_id: UUID | str) -> list[ProblemResponse]:
        return (await self._get(f"/api/topics/{topic_id}/problems", ListEnvelope[ProblemResponse])).data

    async def get_problem(self, problem_id: UUID | str) -> ProblemDetailResponse:
        return (await self._get(f"/api/problems/{problem_id}", Envelope[ProblemDetailResponse])).data

    # Progress

    async def toggle(self, problem_id: UUID | str) -> ToggleResponse:
        body = await self._request("POST", "/api/progress/toggle", json={"problemId": str(problem_id)})
        return Envelope[ToggleResponse].model_validate(body).data

    async def toggle_number(self, problem_number: int) -> ToggleResponse:
        body = await self._request("POST", "/api/progress/toggle-number", json={"problemId": problem_number})
        return Envelope[ToggleResponse].model_validate(body).data

    async def all_progress(self) -> AllProgressResponse:
        return (await self._get("/api/progress/all", Envelope[AllProgressResponse])).data

    async def stats(self) -> StatsResponse:
        return (await self._get("/api/progress/stats", Envelope[StatsResponse])).data

    async def topic_progress(self, topic_id: UUID | str) -> TopicProgressResponse:
        return (await self._get(f"/api/progress/topic/{topic_id}", Envelope[TopicProgressResponse])).data
