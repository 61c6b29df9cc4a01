"""Logging service"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from ..config import settings

LOG_TYPES = ("error", "info")


class LogService:
    """Centralized logging service"""

    def __init__(self, log_dir: Path = None):
        self.log_dir = log_dir or settings.LOGS_DIR
        self.log_dir.mkdir(exist_ok=True, parents=True)

        # Setup loggers
        self.error_logger = self._setup_logger("error", logging.WARNING)
        self.info_logger = self._setup_logger("info", logging.INFO)

    def _setup_logger(self, name: str, level: int) -> logging.Logger:
        """Setup a logger with rotating file handler"""
        logger = logging.getLogger(f"flixvault.{name}")
        logger.setLevel(level)

        # Prevent duplicate handlers
        if logger.handlers:
            return logger

        # Create rotating file handler (10MB max, 3 backups)
        log_file = self.log_dir / f"{name}.log"
        handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
        )

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def error(self, message: str, exc_info: bool = False):
        """Log error message"""
        self.error_logger.error(message, exc_info=exc_info)

    def warning(self, message: str):
        """Log warning message (kept with errors)"""
        self.error_logger.warning(message)

    def info(self, message: str):
        """Log info message"""
        self.info_logger.info(message)

    def get_logs(self, log_type: str = "error", limit: int = 100) -> List[str]:
        """Read last N lines from log file"""
        if log_type not in LOG_TYPES:
            raise ValueError(f"Unknown log type: {log_type}")

        log_file = self.log_dir / f"{log_type}.log"

        if not log_file.exists():
            return []

        try:
            with open(log_file, "r") as f:
                lines = [line.rstrip("\n") for line in f.readlines()]
                return lines[-limit:] if len(lines) > limit else lines
        except OSError as e:
            self.error(f"Failed to read log file {log_type}: {e}")
            return []


# Global log service instance
log_service = LogService()
