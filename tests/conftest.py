# tests/conftest.py

from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session

from todo_api.database import create_db_engine, create_session_factory, create_tables
from todo_api.main import create_app
from todo_api.services.task_store import TaskStore


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.sqlite3'}"


@pytest.fixture()
def app(database_url: str) -> FastAPI:
    return create_app(database_url=database_url, cors_origins=["http://localhost:5173"])


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # Entering the context runs the startup hook, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def session(database_url: str) -> Iterator[Session]:
    engine = create_db_engine(database_url)
    create_tables(engine)
    session_factory = create_session_factory(engine)
    with session_factory() as db:
        yield db
    engine.dispose()


@pytest.fixture()
def store(session: Session) -> TaskStore:
    return TaskStore(session)
