"""Tests pour le module filesystem."""

import os
import stat
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from linux_auth_utils.errors import (
    FileCloseError,
    FileConfigurationError,
    FileLockError,
    FileOpenError,
    FileWriteError,
    NoFileError,
    NoFilenameError,
)
from linux_auth_utils.filesystem import (
    FILE_MODE,
    AuthFileManager,
    LinuxAuthFileManager,
    open_locked,
)


@pytest.fixture
def mock_logger():
    """Fixture pour creer un mock de logger."""
    return MagicMock()


@pytest.fixture
def manager(mock_logger):
    """Fixture pour creer un gestionnaire de fichier."""
    return LinuxAuthFileManager(logger=mock_logger)


def _mode(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


class TestLinuxAuthFileManager:
    """Tests pour LinuxAuthFileManager."""

    def test_implements_interface(self, manager):
        assert isinstance(manager, AuthFileManager)

    def test_no_file_initially(self, manager):
        assert manager.current_file() is None

    def test_set_file_creates_owner_only_file(self, manager, tmp_path):
        path = tmp_path / "passwd"

        result = manager.set_file(str(path))

        assert result
        assert result.message == "Fichier valide"
        assert result.value == path
        assert path.exists()
        assert _mode(path) == FILE_MODE
        assert manager.current_file() == path

    def test_set_file_keeps_existing_content(self, manager, tmp_path):
        path = tmp_path / "passwd"
        path.write_text("alice\thash\t|\n")

        assert manager.set_file(path)
        assert path.read_text() == "alice\thash\t|\n"
        assert _mode(path) == FILE_MODE

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_set_file_without_name(self, manager, path):
        result = manager.set_file(path)

        assert not result
        assert isinstance(result.error, NoFilenameError)
        assert result.message == "Aucun nom de fichier"

    def test_set_file_missing_directory(self, manager, tmp_path):
        result = manager.set_file(tmp_path / "absent" / "passwd")

        assert not result
        assert isinstance(result.error, FileOpenError)
        assert "n'existe pas" in result.message
        assert manager.current_file() is None

    def test_set_file_failure_keeps_previous_binding(
        self, manager, tmp_path
    ):
        first = tmp_path / "passwd"
        manager.set_file(first)

        assert not manager.set_file(tmp_path / "absent" / "passwd")
        assert manager.current_file() == first

    def test_chmod_failure_is_only_a_warning(
        self, manager, mock_logger, tmp_path
    ):
        path = tmp_path / "passwd"
        with patch("os.chmod", side_effect=PermissionError("refuse")):
            result = manager.set_file(path)

        assert result
        mock_logger.log_warning.assert_called_once()
        assert "permissions" in mock_logger.log_warning.call_args[0][0]

    def test_remove_file(self, manager, tmp_path):
        path = tmp_path / "passwd"
        manager.set_file(path)

        result = manager.remove_file()

        assert result
        assert result.message == "Fichier de mots de passe supprime"
        assert result.value == path
        assert not path.exists()
        assert manager.current_file() is None

    def test_remove_file_without_binding(self, manager):
        result = manager.remove_file()

        assert not result
        assert isinstance(result.error, NoFileError)
        assert result.message == "Aucun fichier valide a supprimer"

    def test_remove_file_already_deleted(self, manager, tmp_path):
        path = tmp_path / "passwd"
        manager.set_file(path)
        path.unlink()

        assert not manager.remove_file()

    def test_clear_file(self, manager, tmp_path):
        path = tmp_path / "passwd"
        path.write_text("alice\thash\t|\n")
        manager.set_file(path)

        result = manager.clear_file()

        assert result
        assert result.message == "Fichier vide"
        assert path.read_text() == ""
        assert manager.current_file() == path

    def test_clear_file_twice(self, manager, tmp_path):
        path = tmp_path / "passwd"
        manager.set_file(path)

        assert manager.clear_file()
        assert manager.clear_file()
        assert path.read_text() == ""

    def test_clear_file_without_binding(self, manager):
        result = manager.clear_file()

        assert not result
        assert result.message.startswith("Aucun fichier valide a vider")

    def test_validate_file(self, manager, tmp_path):
        path = tmp_path / "passwd"
        manager.set_file(path)

        result = manager.validate_file()

        assert result
        assert result.message == "Fichier d'auth OK"

    def test_validate_explicit_path(self, manager, tmp_path):
        other = tmp_path / "other"
        other.write_text("")

        assert manager.validate_file(other)
        assert not manager.validate_file(tmp_path / "missing")

    def test_validate_file_without_binding(self, manager):
        result = manager.validate_file()

        assert not result
        assert result.message == "Fichier d'auth non valide"

    def test_require_file(self, manager, tmp_path):
        with pytest.raises(NoFileError, match="check_id: aucun fichier"):
            manager.require_file("check_id")

        path = tmp_path / "passwd"
        manager.set_file(path)
        assert manager.require_file("check_id") == path

        path.unlink()
        with pytest.raises(NoFileError, match="fichier d'auth absent"):
            manager.require_file("check_id")

    def test_bind_initial(self, manager, tmp_path):
        path = tmp_path / "passwd"

        assert manager.bind_initial(path) == path
        assert manager.current_file() == path

    def test_bind_initial_failure_raises(self, manager, tmp_path):
        with pytest.raises(FileConfigurationError):
            manager.bind_initial(tmp_path / "absent" / "passwd")

    def test_bind_initial_on_directory_raises(self, manager, tmp_path):
        with pytest.raises(FileConfigurationError):
            manager.bind_initial(tmp_path)


class TestOpenLocked:
    """Tests pour open_locked."""

    def test_reads_lines_verbatim(self, tmp_path):
        path = tmp_path / "passwd"
        path.write_bytes(b"alice\thash\t|\r\nbob\th\xff\t|\n")

        with open_locked(path) as handle:
            lines = handle.readlines()

        assert lines[0] == "alice\thash\t|\r\n"
        assert "".join(lines).encode("utf-8", "surrogateescape") == (
            b"alice\thash\t|\r\nbob\th\xff\t|\n"
        )

    def test_creates_file_in_append_mode(self, tmp_path):
        path = tmp_path / "passwd"

        with open_locked(path, "a+", exclusive=True) as handle:
            handle.write("x")

        assert path.read_text() == "x"
        assert _mode(path) == FILE_MODE

    def test_open_failure(self, tmp_path):
        with pytest.raises(FileOpenError, match="check_id: impossible"):
            with open_locked(tmp_path / "missing", operation="check_id"):
                pass

    def test_lock_failure_closes_handle(self, tmp_path):
        path = tmp_path / "passwd"
        path.write_text("")

        with patch(
            "linux_auth_utils.filesystem.lock.fcntl.flock",
            side_effect=OSError(11, "Resource temporarily unavailable"),
        ):
            with pytest.raises(FileLockError, match="en ecriture"):
                with open_locked(path, "r+", exclusive=True):
                    pass

    def test_handle_closed_after_block(self, tmp_path):
        path = Path(tmp_path / "passwd")
        path.write_text("")

        with open_locked(path) as handle:
            pass

        assert handle.closed

    def test_block_error_wins_over_close_error(self, tmp_path, full_disk):
        path = tmp_path / "passwd"
        path.write_text("alice\th1\t|\n")

        with pytest.raises(FileWriteError, match="echec d'ecriture"):
            with open_locked(path, "r+", exclusive=True) as handle:
                handle.write("bob\th2\t|\n")
                raise FileWriteError("reset_pwd: echec d'ecriture")

    def test_close_error_after_clean_block(self, tmp_path, full_disk):
        path = tmp_path / "passwd"
        path.write_text("")

        with pytest.raises(FileCloseError, match="impossible de fermer"):
            with open_locked(path, "r+", exclusive=True) as handle:
                handle.write("bob\th2\t|\n")
