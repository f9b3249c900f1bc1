"""Import every model so SQLAlchemy registers it on ``Base.metadata``."""

from thinkscope.problems.models import Difficulty, Problem
from thinkscope.progress.models import NumberedProgress, Progress
from thinkscope.topics.models import Topic
from thinkscope.users.models import User


__all__ = ["Difficulty", "NumberedProgress", "Problem", "Progress", "Topic", "User"]
