import logging
from logging.handlers import RotatingFileHandler
import os

from .request_id_filter import RequestIdFilter

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(request_id)s - %(message)s"
DISCORD_LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] - %(message)s"

LOGGING_DIR = "logs"
MAX_LOG_SIZE_BYTES = 1024 * 1024 * 1024  # 1GB

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_log_level(level: str) -> int:
    return LOG_LEVELS.get(level.lower(), logging.INFO)


def setup_discord_logging(is_verbose: bool, log_dir: str):
    """discord.py is chatty at INFO; keep it at WARNING unless verbose."""
    discord_logger = logging.getLogger("discord")
    discord_logger.setLevel(logging.DEBUG if is_verbose else logging.WARNING)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "discord.log"),
        maxBytes=MAX_LOG_SIZE_BYTES,
        backupCount=5,
    )
    file_handler.setFormatter(logging.Formatter(DISCORD_LOG_FORMAT))
    discord_logger.addHandler(file_handler)


def setup_application_logging(
    level: int, request_id_filter: RequestIdFilter, log_dir: str
):
    logger = logging.getLogger("responsebot")
    logger.setLevel(level)

    # File handler for application logs
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "application.log"),
        maxBytes=MAX_LOG_SIZE_BYTES,
        backupCount=5,
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.addFilter(request_id_filter)
    logger.addHandler(file_handler)

    # Console handler for immediate feedback
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter(LOG_FORMAT))
    ch.addFilter(request_id_filter)
    logger.addHandler(ch)


def setup_logging(
    level: str,
    request_id_filter: RequestIdFilter,
    log_dir: str = LOGGING_DIR,
    is_verbose: bool = False,
):
    """Configure logging for the application and the discord library"""
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    resolved = logging.DEBUG if is_verbose else resolve_log_level(level)
    setup_application_logging(resolved, request_id_filter, log_dir)
    setup_discord_logging(is_verbose, log_dir)
