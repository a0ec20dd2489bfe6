# app/core/logging.py
import sys

from loguru import logger

from app.core.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | "
    "{name}:{function} | {message}"
)


def resolve_level(settings: Settings) -> str:
    """DEBUG=true 時一律 DEBUG，否則用 LOG_LEVEL。"""
    return "DEBUG" if settings.DEBUG else settings.LOG_LEVEL


def setup_logging(settings: Settings):
    logger.remove()
    logger.add(sys.stdout, level=resolve_level(settings),
               backtrace=True, diagnose=False, format=LOG_FORMAT)
    return logger
