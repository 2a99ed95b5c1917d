import logging
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..errors import StoreError
from ..models import Task, TaskStatus
from ..time_utils import utc_now

logger = logging.getLogger(__name__)


class TaskStore:
    """Durable task collection, always queried through an owner id."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def query_for_owner(self, owner_id: str) -> Query:
        return self.db.query(Task).filter(Task.user_id == owner_id)

    def all(self, query: Query) -> list:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            logger.error("Task query failed: %s", exc)
            raise StoreError() from exc

    def get(self, task_id: str) -> Optional[Task]:
        try:
            return self.db.query(Task).filter(Task.id == task_id).first()
        except SQLAlchemyError as exc:
            logger.error("Task lookup failed: %s", exc)
            raise StoreError() from exc

    def count_by_status(self, owner_id: str) -> Dict[TaskStatus, int]:
        try:
            rows = (
                self.db.query(Task.status, func.count(Task.id))
                .filter(Task.user_id == owner_id)
                .group_by(Task.status)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.error("Task status count failed: %s", exc)
            raise StoreError() from exc
        return {TaskStatus(status): count for status, count in rows}

    def add(self, task: Task) -> Task:
        return self._commit(task)

    def save(self, task: Task) -> Task:
        task.updated_at = utc_now()
        return self._commit(task)

    def delete(self, task: Task) -> None:
        try:
            self.db.delete(task)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Task %s delete failed: %s", task.id, exc)
            raise StoreError() from exc

    def _commit(self, task: Task) -> Task:
        try:
            self.db.add(task)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Task %s write failed: %s", task.id, exc)
            raise StoreError() from exc
        self.db.refresh(task)
        return task
