import pytest
from fastapi.testclient import TestClient

from task_api.config import load_settings
from task_api.main import create_app
from task_api.repository import TaskStoreError


@pytest.fixture
def settings(tmp_path):
    return load_settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'tasks.db'}",
        SERVICE_NAME="task-service-test",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


class FailingRepository:
    """Stands in for a database that rejects every statement."""

    async def create(self, task):
        raise TaskStoreError("connection refused")

    async def list(self):
        raise TaskStoreError("connection refused")

    async def get(self, task_id):
        raise TaskStoreError("connection refused")

    async def update(self, task_id, title, description):
        raise TaskStoreError("connection refused")

    async def delete(self, task_id):
        raise TaskStoreError("connection refused")


@pytest.fixture
def failing_repository():
    return FailingRepository()
