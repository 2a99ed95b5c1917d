import logging

from ..errors import NotFoundError
from ..models import Task, User
from ..schemas.task import TaskCreate, TaskUpdate
from ..stores import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    """Create, read, update and delete for tasks owned by the caller."""

    def __init__(self, tasks: TaskStore) -> None:
        self.tasks = tasks

    def create(self, user: User, data: TaskCreate) -> Task:
        task = Task(**data.model_dump(), user_id=user.id)
        self.tasks.add(task)
        logger.info("User %s created task %s", user.id, task.id)
        return task

    def get(self, user: User, task_id: str) -> Task:
        # A task owned by someone else is reported exactly like a missing one.
        task = self.tasks.get(task_id)
        if task is None or task.user_id != user.id:
            raise NotFoundError("Task not found")
        return task

    def update(self, user: User, task_id: str, changes: TaskUpdate) -> Task:
        task = self.get(user, task_id)

        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(task, field, value)

        self.tasks.save(task)
        logger.info("User %s updated task %s", user.id, task.id)
        return task

    def delete(self, user: User, task_id: str) -> None:
        task = self.get(user, task_id)
        self.tasks.delete(task)
        logger.info("User %s deleted task %s", user.id, task_id)
