"""Format des enregistrements du fichier d'authentification.

Une ligne par identifiant :

    <id><SEP><hash><SEP>|\n

Le marqueur ``|`` final signale une ligne complete ; une ligne dont
le hash contient le separateur produit plus de trois champs et n'est
pas consideree comme bien formee. La recherche se fait par decoupage
explicite sur le separateur et comparaison exacte, jamais par
expression reguliere.
"""

import string
from dataclasses import dataclass
from typing import Optional

DEFAULT_SEPARATOR = "\t"
RECORD_MARKER = "|"

# Caracteres d'identifiant, de hash (argon2, bcrypt), marqueur et fins
# de ligne : aucun ne peut servir de separateur.
_FORBIDDEN_SEPARATORS = frozenset(
    string.ascii_letters + string.digits + "._@-$=,+/" + RECORD_MARKER + "\r\n"
)


def validate_separator(separator: str) -> str:
    """Valide un separateur de champs.

    Args:
        separator: Separateur candidat.

    Returns:
        Le separateur valide.

    Raises:
        ValueError: Si le separateur n'est pas un caractere unique
            disjoint des caracteres d'identifiant et de hash.
    """
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(
            f"Le separateur doit etre un caractere unique : {separator!r}"
        )
    if separator in _FORBIDDEN_SEPARATORS:
        raise ValueError(
            f"Separateur interdit (caractere d'ID, de hash ou de "
            f"fin de ligne) : {separator!r}"
        )
    return separator


def line_id(line: str, separator: str = DEFAULT_SEPARATOR) -> Optional[str]:
    """Retourne le champ identifiant d'une ligne.

    Args:
        line: Ligne brute du fichier.
        separator: Separateur de champs.

    Returns:
        Le premier champ, ou None si la ligne ne contient pas le
        separateur.
    """
    head, found, _ = line.partition(separator)
    return head if found else None


@dataclass(frozen=True)
class Record:
    """Enregistrement (identifiant, hash de mot de passe).

    Attributes:
        user_id: Identifiant utilisateur.
        password_hash: Hash du mot de passe.
    """

    user_id: str
    password_hash: str

    def to_line(self, separator: str = DEFAULT_SEPARATOR) -> str:
        """Serialise l'enregistrement en ligne terminee par newline."""
        return separator.join(
            (self.user_id, self.password_hash, RECORD_MARKER)
        ) + "\n"

    @classmethod
    def from_line(
        cls,
        line: str,
        separator: str = DEFAULT_SEPARATOR,
    ) -> Optional["Record"]:
        """Analyse une ligne bien formee.

        Args:
            line: Ligne brute du fichier.
            separator: Separateur de champs.

        Returns:
            L'enregistrement, ou None si la ligne est mal formee.
        """
        fields = line.rstrip("\r\n").split(separator)
        if len(fields) != 3 or fields[2] != RECORD_MARKER:
            return None
        user_id, password_hash, _ = fields
        if not user_id or not password_hash:
            return None
        return cls(user_id=user_id, password_hash=password_hash)
