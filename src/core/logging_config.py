"""Logging configuration for EduTrack.

Console output plus a rotating log file, both at the level given by
``LOG_LEVEL``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config import LOG_DIR, LOG_FILE_NAME, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name. Defaults to ``LOG_LEVEL``.
        log_dir: Directory for the log file. Defaults to ``LOG_DIR``.
        max_file_size: Size in bytes before the log file is rotated.
        backup_count: Number of rotated files to keep.
    """
    level = (level or LOG_LEVEL).upper()
    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Quiet noisy libraries unless debugging
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info("Logging initialized - Level: %s, Dir: %s", level, log_dir)
