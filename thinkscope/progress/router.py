"""Progress tracking API endpoints."""

import logging

from fastapi import APIRouter

from thinkscope.auth import CurrentAuth
from thinkscope.progress.aggregator import ProgressAggregator
from thinkscope.progress.schemas import (
    AllProgressResponse,
    NumberedToggleRequest,
    StatsResponse,
    ToggleRequest,
    ToggleResponse,
    TopicProgressResponse,
)
from thinkscope.progress.service import ProgressService
from thinkscope.schemas import Envelope
from thinkscope.validators import validate_problem_number, validate_uuid


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.post("/toggle")
async def toggle_problem_completion(body: ToggleRequest, auth: CurrentAuth) -> Envelope[ToggleResponse]:
    """Toggle completion of a problem.

    The first toggle creates the record as completed; later ones flip it.
    """
    problem_id = validate_uuid(body.problem_id, "problemId", "problem")
    service = ProgressService(auth.session)
    result = await service.toggle(auth.user_id, problem_id)
    return Envelope[ToggleResponse](data=ToggleResponse.model_validate(result))


@router.post("/toggle-number")
async def toggle_problem_by_number(body: NumberedToggleRequest, auth: CurrentAuth) -> Envelope[ToggleResponse]:
    """Toggle completion of a problem addressed by its integer id."""
    problem_number = validate_problem_number(body.problem_id)
    service = ProgressService(auth.session)
    result = await service.toggle_number(auth.user_id, problem_number)
    return Envelope[ToggleResponse](data=ToggleResponse.model_validate(result))


@router.get("/all")
async def get_all_progress(auth: CurrentAuth) -> Envelope[AllProgressResponse]:
    """Get every completed problem id of the user."""
    snapshot = await ProgressAggregator(auth.session).all_progress(auth.user_id)
    return Envelope[AllProgressResponse](data=AllProgressResponse.model_validate(snapshot))


@router.get("/stats")
async def get_user_stats(auth: CurrentAuth) -> Envelope[StatsResponse]:
    """Get the user's overall progress statistics."""
    stats = await ProgressAggregator(auth.session).overall_stats(auth.user_id)
    return Envelope[StatsResponse](data=StatsResponse.model_validate(stats))


@router.get("/topic/{topic_id}")
async def get_topic_progress(topic_id: str, auth: CurrentAuth) -> Envelope[TopicProgressResponse]:
    """Get the user's progress for a specific topic."""
    parsed_topic_id = validate_uuid(topic_id, "topicId", "topic")
    progress = await ProgressAggregator(auth.session).topic_progress(auth.user_id, parsed_topic_id)
    return Envelope[TopicProgressResponse](data=TopicProgressResponse.model_validate(progress))
