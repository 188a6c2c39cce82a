# tests/conftest.py

import os

# Must be set before task_manager.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["EXPOSE_ERROR_DETAILS"] = "false"

from datetime import date, datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from task_manager.core.database import Base, SessionLocal, engine, get_db_session
from task_manager.core.security import create_access_token, hash_password
from task_manager.main import app
from task_manager.models import AuditLog, Task, User

DEFAULT_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client() -> TestClient:
    # Not entered as a context manager; tables come from reset_database
    return TestClient(app)


@pytest.fixture()
def db():
    session = SessionLocal()
    yield session
    session.close()


def create_user(name: str, email: str, role: str = "user", password: str = DEFAULT_PASSWORD) -> SimpleNamespace:
    with get_db_session() as session:
        user = User(name=name, email=email, role=role, password_hash=hash_password(password))
        session.add(user)
        session.flush()
        user_id = user.id

    token = create_access_token(user_id, role)
    return SimpleNamespace(
        id=user_id,
        name=name,
        email=email,
        role=role,
        headers={"Authorization": f"Bearer {token}"},
    )


def create_task(user_id: int, **fields) -> int:
    values = {
        "title": "Write report",
        "description": "Quarterly numbers",
        "status": 1,
        "priority": 2,
        "due_date": date(2025, 1, 15),
    }
    values.update(fields)
    with get_db_session() as session:
        task = Task(user_id=user_id, created_at=datetime.utcnow(), **values)
        session.add(task)
        session.flush()
        return task.id


def audit_entries(**criteria):
    with SessionLocal() as session:
        return session.query(AuditLog).filter_by(**criteria).order_by(AuditLog.id).all()


@pytest.fixture()
def admin() -> SimpleNamespace:
    return create_user("Admin", "admin@example.com", role="admin")


@pytest.fixture()
def alice() -> SimpleNamespace:
    return create_user("Alice", "alice@example.com")


@pytest.fixture()
def bob() -> SimpleNamespace:
    return create_user("Bob", "bob@example.com")
