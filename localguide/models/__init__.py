"""Expose models so their tables register on ``Base.metadata``."""

from localguide.models.helpful_vote import HelpfulVote  # noqa: F401
from localguide.models.review import Review  # noqa: F401
