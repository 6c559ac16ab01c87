import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..errors import NotFoundError, StorageError
from ..models import Task, utcnow
from ..schemas.task import CreateTaskInput, UpdateTaskInput

logger = logging.getLogger(__name__)

# Largest value an INTEGER primary key can hold; bigger ids cannot exist.
MAX_TASK_ID = 2**63 - 1


class TaskStore:
    """CRUD over the ``tasks`` table through an injected session.

    Inputs are expected to have passed ``todo_api.validation`` already.
    Database faults are rolled back and surface as ``StorageError``.
    """

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, message: str) -> StorageError:
        logger.exception(message)
        self.session.rollback()
        return StorageError(message)

    def list_tasks(self) -> List[Task]:
        """All tasks, most recently created first."""
        try:
            query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
            return list(self.session.exec(query).all())
        except SQLAlchemyError as exc:
            raise self._fail("The tasks could not be loaded") from exc

    def get_task(self, task_id: int) -> Task:
        if task_id > MAX_TASK_ID:
            raise NotFoundError(task_id)
        try:
            task = self.session.get(Task, task_id)
        except SQLAlchemyError as exc:
            raise self._fail("The task could not be loaded") from exc
        if task is None:
            raise NotFoundError(task_id)
        return task

    def create_task(self, data: CreateTaskInput) -> Task:
        now = utcnow()
        task = Task(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            is_done=False,
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as exc:
            raise self._fail("The task could not be created") from exc
        logger.info("Created task %s", task.id)
        return task

    def update_task(self, task_id: int, data: UpdateTaskInput) -> Task:
        """Merge the fields set on ``data`` into the stored task.

        Unset fields keep their stored value. ``description`` and ``due_date``
        set to None are cleared; ``is_done`` only ever flips to a given bool.
        """
        task = self.get_task(task_id)

        for field, value in data.changes().items():
            setattr(task, field, value)
        task.updated_at = max(utcnow(), task.created_at)

        try:
            self.session.add(task)
            self.session.commit()
            self.session.refresh(task)
        except SQLAlchemyError as exc:
            raise self._fail("The task could not be updated") from exc
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(data.changes())) or "no fields")
        return task

    def toggle_task(self, task_id: int) -> Task:
        task = self.get_task(task_id)
        return self.update_task(task_id, UpdateTaskInput(is_done=not task.is_done))

    def delete_task(self, task_id: int) -> None:
        task = self.get_task(task_id)
        try:
            self.session.delete(task)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("The task could not be deleted") from exc
        logger.info("Deleted task %s", task_id)
