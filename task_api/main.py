# main.py
import sys
import time

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from task_api.config import ConfigurationError, Settings, load_settings
from task_api.db import build_database, ensure_schema
from task_api.logger import configure_logging, logger, sanitize_arg
from task_api.repository import TaskRepository, TaskStoreError
from task_api.routes import health, tasks


def create_app(settings: Settings) -> FastAPI:
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(title="Task Service", version="1.0.0")

    database = build_database(settings)
    app.state.settings = settings
    app.state.database = database
    app.state.repository = TaskRepository(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------
    # Request logging
    # -----------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            sanitize_arg(request.url.path),
            response.status_code,
            elapsed_ms,
        )
        return response

    # -----------------------------
    # Error handling
    # -----------------------------
    @app.exception_handler(TaskStoreError)
    async def task_store_error_handler(request: Request, exc: TaskStoreError):
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # -----------------------------
    # Application lifecycle
    # -----------------------------
    @app.on_event("startup")
    async def startup():
        ensure_schema(settings)
        logger.info("Schema ensured for tasks table")
        await database.connect()
        logger.info("Database pool connected")

    @app.on_event("shutdown")
    async def shutdown():
        await database.disconnect()
        logger.info("Application shutting down")

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])

    return app


def run() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Startup aborted: %s", exc)
        sys.exit(1)

    uvicorn.run(create_app(settings), host=settings.APP_HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
