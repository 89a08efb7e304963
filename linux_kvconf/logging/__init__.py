"""Module de logging."""

from linux_kvconf.logging.base import Logger
from linux_kvconf.logging.levels import level_from_store, parse_log_level
from linux_kvconf.logging.file_logger import FileLogger
from linux_kvconf.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)

__all__ = [
    "Logger",
    "FileLogger",
    "parse_log_level",
    "level_from_store",
    "SecurityEvent",
    "SecurityEventType",
    "SecurityLogger",
]
