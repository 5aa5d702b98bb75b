# task_api/repository.py
import logging
import uuid
from typing import List, Optional

from databases import Database

from task_api.db import tasks
from task_api.models import Task, utcnow

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Any database-layer failure. Collapsed to a 500 by the API."""


class TaskRepository:
    """
    One SQL statement per operation against the tasks table.
    """

    def __init__(self, database: Database):
        self.database = database

    async def create(self, task: Task) -> Task:
        query = tasks.insert().values(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.to_db(),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
        try:
            await self.database.execute(query)
        except Exception as exc:
            logger.exception("Failed to insert task | id=%s", task.id)
            raise TaskStoreError(str(exc)) from exc
        return task

    async def list(self) -> List[Task]:
        try:
            rows = await self.database.fetch_all(tasks.select())
            return [Task.from_record(r) for r in rows]
        except Exception as exc:
            logger.exception("Failed to list tasks")
            raise TaskStoreError(str(exc)) from exc

    async def get(self, task_id: uuid.UUID) -> Optional[Task]:
        try:
            row = await self.database.fetch_one(
                tasks.select().where(tasks.c.id == task_id)
            )
            return Task.from_record(row) if row else None
        except Exception as exc:
            logger.exception("Failed to fetch task | id=%s", task_id)
            raise TaskStoreError(str(exc)) from exc

    async def update(self, task_id: uuid.UUID, title: str, description: str) -> bool:
        """Returns False when no row matched."""
        query = (
            tasks.update()
            .where(tasks.c.id == task_id)
            .values(title=title, description=description, updated_at=utcnow())
            .returning(tasks.c.id)
        )
        try:
            row = await self.database.fetch_one(query)
        except Exception as exc:
            logger.exception("Failed to update task | id=%s", task_id)
            raise TaskStoreError(str(exc)) from exc
        return row is not None

    async def delete(self, task_id: uuid.UUID) -> bool:
        """Returns False when no row matched."""
        query = tasks.delete().where(tasks.c.id == task_id).returning(tasks.c.id)
        try:
            row = await self.database.fetch_one(query)
        except Exception as exc:
            logger.exception("Failed to delete task | id=%s", task_id)
            raise TaskStoreError(str(exc)) from exc
        return row is not None

    async def ping(self) -> str:
        if not self.database.is_connected:
            return "disconnected"
        try:
            # lightweight query to verify DB responsiveness
            await self.database.execute("SELECT 1")
        except Exception:
            logger.exception("Database health probe failed")
            return "error"
        return "connected"
