import logging

import sqlalchemy
from databases import Database
from sqlalchemy import (
    MetaData,
    Table,
    Column,
    String,
    Text,
    DateTime,
    Uuid,
    CheckConstraint,
)

from task_api.config import Settings
from task_api.models import STORED_STATUS_VALUES

logger = logging.getLogger(__name__)

# Metadata
metadata = MetaData()

# -----------------------------
# Tables
# -----------------------------
tasks = Table(
    "tasks",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True),
    Column("title", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("status", String(16), nullable=False, server_default="todo"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint(
        "status IN ({})".format(", ".join(f"'{v}'" for v in STORED_STATUS_VALUES)),
        name="ck_tasks_status",
    ),
)


def build_database(settings: Settings) -> Database:
    # Async database (used by FastAPI routes)
    return Database(settings.database_url, **settings.pool_options())


def ensure_schema(settings: Settings) -> None:
    """
    Create the tasks table when missing and patch tables created before the
    status column existed. create_all() does not alter existing tables.
    """
    engine = sqlalchemy.create_engine(settings.sync_database_url)
    try:
        metadata.create_all(bind=engine)
        ensure_schema_compatibility(engine)
    finally:
        engine.dispose()


def ensure_schema_compatibility(engine: sqlalchemy.Engine) -> None:
    columns = {c["name"] for c in sqlalchemy.inspect(engine).get_columns("tasks")}
    if "status" in columns:
        return

    logger.info("Adding missing status column to legacy tasks table")
    with engine.begin() as conn:
        conn.execute(
            sqlalchemy.text(
                "ALTER TABLE tasks ADD COLUMN status VARCHAR(16) NOT NULL DEFAULT 'todo'"
            )
        )
