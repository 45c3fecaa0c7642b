# app/core/logger.py
from loguru import logger
import sys
import os

from app.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | {name}:{function}:{line} - {message}"

# Outside a request (cron ticks, startup) there is no request id
NO_REQUEST_ID = "-"

def setup_logging(log_dir: str, debug: bool = False) -> None:
    """Replace all sinks: console, rotating app log and error log under log_dir"""
    os.makedirs(log_dir, exist_ok=True)

    logger.remove()
    logger.configure(extra={"request_id": NO_REQUEST_ID})

    logger.add(
        sys.stdout,
        colorize=True,
        format=CONSOLE_FORMAT,
        level="DEBUG" if debug else "INFO"
    )

    # Everything, including per-user sync details
    logger.add(
        os.path.join(log_dir, "snapscape.log"),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level="DEBUG"
    )

    logger.add(
        os.path.join(log_dir, "error.log"),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level="ERROR"
    )

LOG_DIR = settings.log_dir
setup_logging(LOG_DIR, settings.debug)
