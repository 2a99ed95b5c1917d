from .auth import AuthService
from .profile import ProfileService
from .session import SessionGuard
from .task_query import TaskQueryEngine, TaskQueryParams, parse_query_params
from .tasks import TaskService

__all__ = [
    "AuthService",
    "ProfileService",
    "SessionGuard",
    "TaskQueryEngine",
    "TaskQueryParams",
    "TaskService",
    "parse_query_params",
]
