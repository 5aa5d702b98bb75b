from task_api.routes import health, tasks

__all__ = ["health", "tasks"]
