"""Topic API endpoints."""

from fastapi import APIRouter

from thinkscope.auth import CurrentAuth
from thinkscope.problems.schemas import ProblemResponse
from thinkscope.problems.service import ProblemService
from thinkscope.progress.aggregator import ProgressAggregator
from thinkscope.schemas import ListEnvelope
from thinkscope.topics.schemas import TopicResponse
from thinkscope.validators import validate_uuid


router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("")
async def list_topics(auth: CurrentAuth) -> ListEnvelope[TopicResponse]:
    """Get all topics with the user's progress, in display order."""
    topics = await ProgressAggregator(auth.session).topics_with_progress(auth.user_id)
    return ListEnvelope[TopicResponse].of([TopicResponse.from_progress(item) for item in topics])


@router.get("/{topic_id}/problems")
async def list_topic_problems(topic_id: str, auth: CurrentAuth) -> ListEnvelope[ProblemResponse]:
    """Get the problems of a topic with the user's completion status."""
    parsed_topic_id = validate_uuid(topic_id, "topicId", "topic")
    problems = await ProblemService(auth.session).list_problems(auth.user_id, parsed_topic_id)
    return ListEnvelope[ProblemResponse].of(
        [ProblemResponse.from_problem(item.problem, item.is_completed) for item in problems]
    )
