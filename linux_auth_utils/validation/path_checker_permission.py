"""Validateur des permissions d'ecriture sur les repertoires parents."""

import os
from pathlib import Path

from linux_auth_utils.validation.base import Validator


class PathCheckerPermission(Validator):
    """Verifie que le repertoire parent d'un fichier accepte l'ecriture.

    Utilise avant la creation d'un fichier d'authentification pour
    distinguer un repertoire absent d'un refus de permission.

    Leve des exceptions standard (ValueError, PermissionError) ; le
    gestionnaire de fichier les convertit en FileOpenError.
    """

    def __init__(self, paths: list[str]) -> None:
        """Initialise le validateur avec une liste de chemins.

        Args:
            paths: Liste de chemins de fichiers a valider.
        """
        self.paths = paths

    def validate(self) -> None:
        """Valide les permissions d'ecriture de tous les chemins.

        Raises:
            ValueError: Si un repertoire parent n'existe pas.
            PermissionError: Si un repertoire parent n'est pas accessible
                en ecriture.
        """
        for path in self.paths:
            self._validate_permission(path)

    def _validate_permission(self, path: str) -> None:
        parent = Path(path).resolve().parent

        if not parent.is_dir():
            raise ValueError(
                f"Le repertoire {parent} n'existe pas."
            )

        if not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Permissions insuffisantes pour ecrire dans {parent}."
            )
