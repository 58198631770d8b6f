"""Logging configuration for the herb traceability service."""

import logging
from datetime import datetime
from pathlib import Path

from herbtrace.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Ledger notifications are logged by herbtrace.events; rejected writes by the services
LEDGER_LOGGERS = ("herbtrace", "herbtrace.events", "herbtrace.services", "herbtrace.routes")


def setup_logging(log_dir: Path | str = LOG_DIR) -> Path:
    """Configure file and console handlers. Returns the log file path.

    Calling it again (reloads, test sessions importing the app) does not stack
    duplicate handlers on the root logger.
    """
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"herbtrace-{datetime.now().strftime('%Y-%m-%d')}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, LOG_LEVEL))
    if any(
        isinstance(h, logging.FileHandler)
        and Path(h.baseFilename).resolve() == log_file.resolve()
        for h in root_logger.handlers
    ):
        return log_file

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    file_handler = logging.FileHandler(log_file)
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        handler.setLevel(logging.INFO)
        root_logger.addHandler(handler)

    # SQL echo and aiosqlite's per-statement debug lines drown out ledger events
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    for name in LEDGER_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)

    logging.info(f"Logging initialized - file: {log_file}")
    return log_file
