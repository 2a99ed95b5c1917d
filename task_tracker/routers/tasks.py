from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskStats, TaskUpdate
from ..schemas.user import MessageResponse
from ..services import TaskQueryEngine, TaskService, parse_query_params
from ..stores import TaskStore
from .auth import get_current_user

router = APIRouter()


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the current user's tasks with optional search, filtering and sorting."""
    params = parse_query_params(
        search=search, status=status, priority=priority, sort_by=sort_by, order=order
    )
    return TaskQueryEngine(TaskStore(db)).list_tasks(current_user, params)


@router.get("/tasks/stats", response_model=TaskStats)
def get_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Count the current user's tasks per status."""
    return TaskQueryEngine(TaskStore(db)).stats(current_user)


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new task owned by the current user."""
    return TaskService(TaskStore(db)).create(current_user, task)


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService(TaskStore(db)).get(current_user, task_id)


@router.put("/tasks/{task_id}", response_model=TaskSchema)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a specific task. Only the fields sent are changed."""
    return TaskService(TaskStore(db)).update(current_user, task_id, task_update)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a specific task."""
    TaskService(TaskStore(db)).delete(current_user, task_id)
    return {"success": True, "message": "Task deleted"}
