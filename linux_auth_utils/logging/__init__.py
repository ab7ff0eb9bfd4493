"""Module de logging."""

from linux_auth_utils.logging.base import Logger
from linux_auth_utils.logging.file_logger import FileLogger
from linux_auth_utils.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)

__all__ = [
    "Logger",
    "FileLogger",
    "SecurityEvent",
    "SecurityEventType",
    "SecurityLogger",
]
