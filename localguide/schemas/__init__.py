"""Expose schemas for easier import."""

from localguide.schemas.place import (  # noqa: F401
    MessageOut,
    PlaceMutationResult,
    RealtimeUpdateIn,
    RealtimeUpdateResult,
)
from localguide.schemas.review import (  # noqa: F401
    HelpfulVoteResult,
    ReviewCreated,
    ReviewDeleteIn,
    ReviewOut,
)
from localguide.schemas.social import (  # noqa: F401
    SocialPost,
    SocialPosts,
    StoreSocialPostsOut,
    SweepSummary,
)
