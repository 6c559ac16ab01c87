#!/usr/bin/env python
"""Insert a few sample tasks into the configured database."""
import logging
from datetime import timedelta

from todo_api.config import DATABASE_URL, LOG_LEVEL
from todo_api.database import create_db_engine, create_session_factory, create_tables
from todo_api.logging_setup import setup_logging
from todo_api.models import utcnow
from todo_api.schemas.task import CreateTaskInput, UpdateTaskInput
from todo_api.services.task_store import TaskStore

logger = logging.getLogger("todo_api.seed")


def seed(database_url: str = DATABASE_URL) -> None:
    engine = create_db_engine(database_url)
    create_tables(engine)
    session_factory = create_session_factory(engine)

    now = utcnow()
    samples = [
        (CreateTaskInput(title="First task", description="This is a sample task",
                         due_date=now + timedelta(hours=24)), False),
        (CreateTaskInput(title="Second task", description="Another task for testing",
                         due_date=now + timedelta(hours=48)), True),
        (CreateTaskInput(title="Third task", description="And a third one"), False),
    ]

    logger.info("Seeding sample tasks...")
    with session_factory() as session:
        store = TaskStore(session)
        for data, done in samples:
            task = store.create_task(data)
            if done:
                store.update_task(task.id, UpdateTaskInput(is_done=True))
    engine.dispose()
    logger.info("Seeding finished!")


if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    seed()
