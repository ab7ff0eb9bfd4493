"""Interface abstraite pour la gestion du fichier d'authentification."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from linux_auth_utils.responses import AuthResult


class AuthFileManager(ABC):
    """Interface pour le cycle de vie du fichier actif.

    Le gestionnaire est le seul proprietaire du chemin actif :
    set_file et remove_file sont les seuls mutateurs.
    """

    @abstractmethod
    def set_file(self, path: Union[str, Path]) -> AuthResult:
        """
        Cree ou ouvre un fichier et en fait le fichier actif.

        Args:
            path: Chemin du fichier

        Returns:
            AuthResult dont la valeur est le chemin actif
        """
        pass

    @abstractmethod
    def remove_file(self) -> AuthResult:
        """
        Supprime le fichier actif et efface la liaison.

        Returns:
            AuthResult dont la valeur est le chemin supprime
        """
        pass

    @abstractmethod
    def clear_file(self) -> AuthResult:
        """Remplace le fichier actif par un fichier vide au meme chemin."""
        pass

    @abstractmethod
    def current_file(self) -> Optional[Path]:
        """Retourne le chemin actif ou None."""
        pass

    @abstractmethod
    def validate_file(
        self,
        path: Optional[Union[str, Path]] = None
    ) -> AuthResult:
        """
        Verifie qu'un fichier existe et est lisible.

        Args:
            path: Chemin a verifier (fichier actif si None)
        """
        pass
