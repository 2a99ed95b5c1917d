from .task import Task, TaskPriority, TaskStatus
from .user import User, UserRole

# Export all models for easy importing
__all__ = ["Task", "TaskPriority", "TaskStatus", "User", "UserRole"]
