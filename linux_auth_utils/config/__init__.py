"""Lecture des fichiers de configuration TOML et JSON."""

from linux_auth_utils.config.loader import (
    SUPPORTED_SUFFIXES,
    ConfigFileLoader,
    ConfigLoader,
    FileConfigLoader,
    validate_with_schema,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigFileLoader",
    "validate_with_schema",
    "SUPPORTED_SUFFIXES",
]
