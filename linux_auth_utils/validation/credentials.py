"""Fonctions de validation des identifiants et des mots de passe.

Regles appliquees avant toute operation du store :
    - identifiant : 2 a 32 caracteres parmi [A-Za-z0-9._@-]
      (accepte les adresses e-mail)
    - mot de passe : 8 a 72 caracteres, contenu libre

La borne haute du mot de passe est celle de bcrypt ; elle est
conservee meme avec un hasher Argon2 pour que les hash existants
restent verifiables.
"""

import re
from typing import Optional

from linux_auth_utils.errors.exceptions import (
    EmptyValueError,
    InvalidCharactersError,
    LengthOutOfRangeError,
)
from linux_auth_utils.validation.base import Validator

MIN_ID_LENGTH = 2
MAX_ID_LENGTH = 32
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72

_ID_ALLOWED_CHARS = re.compile(r'[a-zA-Z0-9._@-]+')


def validate_id(user_id: Optional[str]) -> str:
    """Valide un identifiant utilisateur.

    Args:
        user_id: Identifiant a valider.

    Returns:
        L'identifiant valide.

    Raises:
        EmptyValueError: Si l'identifiant est absent ou vide.
        LengthOutOfRangeError: Si la longueur sort de [2, 32].
        InvalidCharactersError: Si un caractere n'est pas autorise.
    """
    if not user_id:
        raise EmptyValueError("L'ID ne peut pas etre vide")
    if not MIN_ID_LENGTH <= len(user_id) <= MAX_ID_LENGTH:
        raise LengthOutOfRangeError(
            f"L'ID doit contenir entre {MIN_ID_LENGTH} "
            f"et {MAX_ID_LENGTH} caracteres"
        )
    if not _ID_ALLOWED_CHARS.fullmatch(user_id):
        raise InvalidCharactersError(
            "L'ID contient des caracteres invalides"
        )
    return user_id


def validate_password(
    password: Optional[str],
    min_length: int = MIN_PASSWORD_LENGTH,
    max_length: int = MAX_PASSWORD_LENGTH,
) -> str:
    """Valide un mot de passe.

    Args:
        password: Mot de passe a valider.
        min_length: Longueur minimale.
        max_length: Longueur maximale (limite de l'algorithme de hash).

    Returns:
        Le mot de passe valide.

    Raises:
        EmptyValueError: Si le mot de passe est absent ou vide.
        LengthOutOfRangeError: Si la longueur sort des bornes.
    """
    if not password:
        raise EmptyValueError("Le mot de passe ne peut pas etre vide")
    if not min_length <= len(password) <= max_length:
        raise LengthOutOfRangeError(
            f"Le mot de passe doit contenir entre {min_length} "
            f"et {max_length} caracteres"
        )
    return password


class IdentifierValidator(Validator):
    """Validateur injectable pour un identifiant."""

    def __init__(self, user_id: Optional[str]) -> None:
        self.user_id = user_id

    def validate(self) -> None:
        validate_id(self.user_id)


class PasswordValidator(Validator):
    """Validateur injectable pour un mot de passe.

    Attributes:
        password: Mot de passe a valider.
        max_length: Borne haute, derivee du hasher utilise.
    """

    def __init__(
        self,
        password: Optional[str],
        max_length: int = MAX_PASSWORD_LENGTH,
    ) -> None:
        self.password = password
        self.max_length = max_length

    def validate(self) -> None:
        validate_password(self.password, max_length=self.max_length)
