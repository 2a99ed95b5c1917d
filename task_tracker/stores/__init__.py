from .tasks import TaskStore
from .users import UserStore

__all__ = ["TaskStore", "UserStore"]
