"""Import every feature model so they register on ``Base.metadata``."""

from forum_service.features.comments.models import Comment
from forum_service.features.posts.models import Post
from forum_service.features.reports.models import Report, ReportReason, ReportStatus
from forum_service.features.tags.models import Tag, post_tags
from forum_service.features.users.models import User

__all__ = ["Comment", "Post", "Report", "ReportReason", "ReportStatus", "Tag", "User", "post_tags"]
