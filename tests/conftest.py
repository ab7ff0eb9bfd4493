"""Fixtures partagees par les tests."""

import builtins
import errno
from unittest.mock import MagicMock

import pytest

from linux_auth_utils.credentials import Argon2PasswordHasher


class FullDiskFile:
    """Fichier dont les donnees ecrites ne peuvent jamais etre videes.

    Les ecritures restent en attente ; flush et close echouent avec
    ENOSPC tant qu'il reste des donnees en attente, comme sur un
    disque plein.
    """

    def __init__(self, handle):
        self._handle = handle
        self._pending = False

    def __getattr__(self, name):
        return getattr(self._handle, name)

    def write(self, data):
        self._pending = True
        return len(data)

    def writelines(self, lines):
        self._pending = True

    def truncate(self, size=None):
        self._pending = True
        return 0

    def flush(self):
        if self._pending:
            raise OSError(errno.ENOSPC, "No space left on device")

    def close(self):
        self._handle.close()
        if self._pending:
            raise OSError(errno.ENOSPC, "No space left on device")


@pytest.fixture
def mock_logger():
    """Fixture pour creer un mock de logger."""
    return MagicMock()


@pytest.fixture
def fast_hasher():
    """Hasher Argon2id a cout minimal pour accelerer les tests."""
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def full_disk(monkeypatch):
    """Les fichiers ouverts en ecriture sous verrou simulent ENOSPC."""
    real_open = builtins.open

    def opener(path, mode="r", *args, **kwargs):
        handle = real_open(path, mode, *args, **kwargs)
        return handle if mode == "r" else FullDiskFile(handle)

    monkeypatch.setattr(
        "linux_auth_utils.filesystem.lock.open", opener, raising=False
    )
