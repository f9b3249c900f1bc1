"""Problem API endpoints."""

from fastapi import APIRouter

from thinkscope.auth import CurrentAuth
from thinkscope.problems.schemas import ProblemDetailResponse
from thinkscope.problems.service import ProblemService
from thinkscope.schemas import Envelope
from thinkscope.validators import validate_uuid


router = APIRouter(prefix="/api/problems", tags=["problems"])


@router.get("/{problem_id}")
async def get_problem(problem_id: str, auth: CurrentAuth) -> Envelope[ProblemDetailResponse]:
    """Get a single problem with the user's completion status."""
    parsed_problem_id = validate_uuid(problem_id, "problemId", "problem")
    item = await ProblemService(auth.session).get_problem(auth.user_id, parsed_problem_id)
    return Envelope[ProblemDetailResponse](data=ProblemDetailResponse.from_problem(item.problem, item.is_completed))
