import logging
import uuid

import pytest
import sqlalchemy
from fastapi.testclient import TestClient

from task_api.main import create_app


def _drop_tasks_table(settings):
    engine = sqlalchemy.create_engine(settings.sync_database_url)
    with engine.begin() as conn:
        conn.execute(sqlalchemy.text("DROP TABLE tasks"))
    engine.dispose()


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("post", "/tasks", {"title": "a", "description": "b"}),
        ("get", "/tasks", None),
        ("get", f"/tasks/{uuid.uuid4()}", None),
        ("put", f"/tasks/{uuid.uuid4()}", {"title": "a", "description": "b"}),
        ("delete", f"/tasks/{uuid.uuid4()}", None),
    ],
)
def test_missing_table_collapses_to_empty_500(client, settings, caplog, method, path, body):
    _drop_tasks_table(settings)
    caplog.set_level(logging.ERROR, logger="task_api")

    kwargs = {"json": body} if body is not None else {}
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 500
    assert response.content == b""
    assert any(r.name == "task_api.repository" for r in caplog.records)


LEGACY_ID = uuid.UUID("6f1c2f64-8a43-4c47-9d1e-3b1c4b7a9e10")


@pytest.fixture
def legacy_row_settings(settings):
    engine = sqlalchemy.create_engine(settings.sync_database_url)
    with engine.begin() as conn:
        conn.execute(
            sqlalchemy.text(
                "CREATE TABLE tasks ("
                " id CHAR(32) PRIMARY KEY,"
                " title TEXT NOT NULL,"
                " description TEXT NOT NULL,"
                " status VARCHAR(16) NOT NULL,"
                " created_at DATETIME NOT NULL,"
                " updated_at DATETIME NOT NULL)"
            )
        )
        conn.execute(
            sqlalchemy.text(
                "INSERT INTO tasks VALUES (:id, 'legacy', 'row', 'Todo',"
                " '2024-05-01 12:00:00.000000', '2024-05-01 12:00:00.000000')"
            ),
            {"id": LEGACY_ID.hex},
        )
    engine.dispose()
    return settings


def test_undecodable_status_lists_as_empty_500(legacy_row_settings, caplog):
    caplog.set_level(logging.ERROR, logger="task_api")

    with TestClient(create_app(legacy_row_settings)) as client:
        response = client.get("/tasks")

    assert response.status_code == 500
    assert response.content == b""
    assert any("Failed to list tasks" in r.getMessage() for r in caplog.records)


def test_undecodable_status_reads_as_empty_500(legacy_row_settings):
    with TestClient(create_app(legacy_row_settings)) as client:
        response = client.get(f"/tasks/{LEGACY_ID}")

    assert response.status_code == 500
    assert response.content == b""
