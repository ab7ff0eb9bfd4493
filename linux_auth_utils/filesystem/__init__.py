"""Module de gestion du fichier d'authentification."""

from linux_auth_utils.filesystem.base import AuthFileManager
from linux_auth_utils.filesystem.linux import LinuxAuthFileManager
from linux_auth_utils.filesystem.lock import FILE_MODE, open_locked

__all__ = [
    "AuthFileManager",
    "LinuxAuthFileManager",
    "open_locked",
    "FILE_MODE",
]
