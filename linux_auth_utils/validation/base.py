"""Interface abstraite pour la validation."""

from abc import ABC, abstractmethod


class Validator(ABC):
    """
    Validateur d'une valeur capturee a la construction.

    Les implementations levent une exception de la taxonomie
    (ValidationError) ou une exception standard pour les chemins.
    """

    @abstractmethod
    def validate(self) -> None:
        """
        Leve une exception si la valeur est refusee.

        Raises:
            ValidationError: Identifiant ou mot de passe invalide
            ValueError: Repertoire parent absent
            PermissionError: Repertoire parent non inscriptible
        """
        pass
