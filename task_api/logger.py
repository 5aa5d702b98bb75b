import logging
import os
from pathlib import Path

# ----------------- Logger Setup -----------------
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

logger = logging.getLogger("task_api")


def configure_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the service logger once each."""
    logger.setLevel(level.upper())

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    if log_file:
        path = Path(os.path.abspath(log_file))
        attached = {
            h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)
        }
        if str(path) not in attached:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger


# ----------------- Helpers -----------------
def sanitize_arg(arg):
    """Skip long payloads in logs."""
    if isinstance(arg, str) and len(arg) > 200:
        return f"<{type(arg).__name__} content skipped>"
    return arg
