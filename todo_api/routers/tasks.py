from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlmodel import Session

from ..database import get_db
from ..schemas.task import TaskRead
from ..services.task_store import TaskStore
from ..validation import parse_task_id, validate_create, validate_update

router = APIRouter()


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


def _task_id(raw: str) -> int:
    return parse_task_id(raw).unwrap("The given task ID is not valid")


@router.get("/tasks", response_model=List[TaskRead])
def list_tasks(store: TaskStore = Depends(get_task_store)):
    """Get all tasks, newest first."""
    return store.list_tasks()


@router.post("/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: Any = Body(None),
    store: TaskStore = Depends(get_task_store),
):
    """Create a new task from ``{title, description?, dueDate?}``."""
    data = validate_create(payload).unwrap()
    return store.create_task(data)


@router.get("/tasks/{task_id}", response_model=TaskRead)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    return store.get_task(_task_id(task_id))


@router.put("/tasks/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    payload: Any = Body(None),
    store: TaskStore = Depends(get_task_store),
):
    """Apply a partial update; omitted fields keep their stored value."""
    task_pk = _task_id(task_id)
    data = validate_update(payload).unwrap("The update data does not meet the requirements")
    return store.update_task(task_pk, data)


@router.patch("/tasks/{task_id}/toggle", response_model=TaskRead)
def toggle_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Flip ``isDone`` on a task."""
    return store.toggle_task(_task_id(task_id))


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    store.delete_task(_task_id(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
