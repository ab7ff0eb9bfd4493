"""Implementation Linux du cycle de vie du fichier d'authentification."""

import os
import threading
from pathlib import Path
from typing import Optional, Union

from linux_auth_utils.errors.exceptions import (
    FileConfigurationError,
    FileOpenError,
    FileWriteError,
    NoFileError,
    NoFilenameError,
)
from linux_auth_utils.filesystem.base import AuthFileManager
from linux_auth_utils.filesystem.lock import FILE_MODE
from linux_auth_utils.logging.base import Logger
from linux_auth_utils.responses import (
    AuthResult,
    confirm,
    reject,
    returns_result,
)
from linux_auth_utils.validation import PathCheckerPermission


class LinuxAuthFileManager(AuthFileManager):
    """
    Gestion Linux du fichier d'authentification actif.

    Les fichiers crees sont restreints au proprietaire (0600). Un
    echec de chmod est journalise mais n'empeche pas l'utilisation
    du fichier.

    Attributes:
        _path: Chemin actif ou None.
        _logger: Logger optionnel.
        _file_mode: Permissions appliquees au fichier.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        file_mode: int = FILE_MODE,
    ) -> None:
        """
        Initialise le gestionnaire sans fichier actif.

        Args:
            logger: Logger optionnel (injection de dependance)
            file_mode: Permissions du fichier (defaut: 0600)
        """
        self._path: Optional[Path] = None
        self._logger = logger
        self._file_mode = file_mode
        self._mutex = threading.RLock()

    def bind_initial(self, path: Union[str, Path]) -> Path:
        """
        Lie le fichier fourni a la construction du store.

        Seule operation autorisee a lever : sans fichier utilisable,
        il n'existe pas de mode degrade.

        Args:
            path: Chemin du fichier d'authentification

        Returns:
            Le chemin actif

        Raises:
            FileConfigurationError: Si le fichier ne peut etre ouvert
                ou cree
        """
        file_path = Path(path)
        try:
            self._open_or_create(file_path)
        except (OSError, ValueError) as exc:
            raise FileConfigurationError(
                f"Impossible d'ouvrir ou de creer le fichier d'auth "
                f"({file_path}) : {exc}"
            ) from exc
        self._restrict_permissions(file_path)
        with self._mutex:
            self._path = file_path
        return file_path

    @returns_result
    def set_file(self, path: Union[str, Path]) -> AuthResult:
        """
        Cree ou ouvre un fichier et en fait le fichier actif.

        Args:
            path: Chemin du fichier

        Returns:
            AuthResult dont la valeur est le chemin actif
        """
        if path is None or not str(path).strip():
            raise NoFilenameError("Aucun nom de fichier")

        file_path = Path(path)
        try:
            self._open_or_create(file_path)
        except (OSError, ValueError) as exc:
            raise FileOpenError(
                f"Impossible d'ouvrir ou de creer le fichier d'auth "
                f"({file_path}) : {exc}"
            ) from exc
        self._restrict_permissions(file_path)

        if not self._is_valid(file_path):
            return reject("Fichier invalide", error=NoFileError())

        self._path = file_path
        if self._logger:
            self._logger.log_info(f"Fichier d'auth actif : {file_path}")
        return confirm("Fichier valide", value=file_path)

    @returns_result
    def remove_file(self) -> AuthResult:
        """
        Supprime le fichier actif et efface la liaison.

        Returns:
            AuthResult dont la valeur est le chemin supprime
        """
        file_path = self._path
        if file_path is None or not file_path.exists():
            raise NoFileError("Aucun fichier valide a supprimer")

        try:
            file_path.unlink()
        except OSError as exc:
            raise FileWriteError(
                f"Impossible de supprimer le fichier : {exc}"
            ) from exc

        self._path = None
        if self._logger:
            self._logger.log_info(f"Fichier d'auth supprime : {file_path}")
        return confirm("Fichier de mots de passe supprime", value=file_path)

    @returns_result
    def clear_file(self) -> AuthResult:
        """Remplace le fichier actif par un fichier vide au meme chemin."""
        removed = self.remove_file()
        if not removed:
            return reject(
                f"Aucun fichier valide a vider : {removed.message}",
                error=removed.error,
            )

        created = self.set_file(removed.value)
        if not created:
            return reject(
                f"Fichier non vide : {created.message}",
                error=created.error,
            )
        return confirm("Fichier vide", value=removed.value)

    def current_file(self) -> Optional[Path]:
        """Retourne le chemin actif ou None."""
        return self._path

    @returns_result
    def validate_file(
        self,
        path: Optional[Union[str, Path]] = None
    ) -> AuthResult:
        """
        Verifie qu'un fichier existe et est lisible.

        Args:
            path: Chemin a verifier (fichier actif si None)
        """
        file_path = Path(path) if path else self._path
        if file_path is not None and self._is_valid(file_path):
            return confirm("Fichier d'auth OK", value=file_path)
        raise NoFileError("Fichier d'auth non valide")

    def require_file(self, operation: str) -> Path:
        """
        Retourne le fichier actif ou leve NoFileError.

        Args:
            operation: Nom de l'operation, repris dans le message

        Raises:
            NoFileError: Si aucun fichier n'est actif ou s'il a disparu
        """
        file_path = self._path
        if file_path is None:
            raise NoFileError(f"{operation}: aucun fichier d'auth")
        if not file_path.exists():
            raise NoFileError(
                f"{operation}: fichier d'auth absent ({file_path})"
            )
        return file_path

    def _open_or_create(self, file_path: Path) -> None:
        """Ouvre le fichier pour confirmer l'acces ou le cree vide."""
        if file_path.exists():
            with open(file_path, "r", encoding="utf-8"):
                pass
            return
        PathCheckerPermission([str(file_path)]).validate()
        fd = os.open(file_path, os.O_WRONLY | os.O_CREAT, self._file_mode)
        os.close(fd)

    def _restrict_permissions(self, file_path: Path) -> None:
        try:
            os.chmod(file_path, self._file_mode)
        except OSError as exc:
            if self._logger:
                self._logger.log_warning(
                    f"Impossible de restreindre les permissions de "
                    f"{file_path} : {exc}"
                )

    @staticmethod
    def _is_valid(file_path: Path) -> bool:
        return file_path.is_file() and os.access(file_path, os.R_OK)
