"""FastAPI dependencies for route handlers."""

from forum_service.core.dependencies.database import SessionDep, get_db_session
from forum_service.core.dependencies.pagination import cursor_plan, offset_plan

__all__ = ["SessionDep", "cursor_plan", "get_db_session", "offset_plan"]
