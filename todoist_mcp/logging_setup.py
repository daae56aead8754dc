"""
Todoist MCP - Logging Setup

Logs go to stderr (stdout carries the MCP stdio protocol) and, when
LOG_FILE is set, to that file as well.
"""

import logging
from pathlib import Path
from typing import Optional

from todoist_mcp.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure root logging from settings (arguments override)."""
    level_name = (level or settings.LOG_LEVEL).upper()
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    path = log_file or settings.LOG_FILE
    if path:
        log_path = Path(path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
