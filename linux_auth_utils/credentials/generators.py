"""Capacite de generation de valeurs aleatoires.

Fournit des jetons, identifiants et phrases de passe independants
du fichier d'authentification (jetons de session, cles d'API...).
Les generateurs ne levent pas d'exception : un echec se traduit par
un GeneratedValue dont la valeur est None.
"""

import secrets
import string
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

from linux_auth_utils.logging.base import Logger

ALPHANUMERIC = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 13
CRYPT_TOKEN_LENGTH = 11
DEFAULT_WORD_FILE = "/usr/share/dict/web2"


@dataclass(frozen=True)
class GeneratedValue:
    """Valeur generee accompagnee d'un message.

    Attributes:
        value: Valeur generee, ou None en cas d'echec.
        message: Description du resultat.
    """

    value: Optional[str]
    message: str


def _coerce_count(value: Any, default: int) -> int:
    """Retourne value si c'est un entier positif, default sinon."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, str) and value.isdigit() and int(value) > 0:
        return int(value)
    return default


class RandomGenerator(ABC):
    """Interface des generateurs de valeurs aleatoires."""

    @abstractmethod
    def gen_uuid(self) -> GeneratedValue:
        """Genere un UUID."""
        pass  # pragma: no cover

    @abstractmethod
    def gen_random_token(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
    ) -> GeneratedValue:
        """Genere un jeton alphanumerique."""
        pass  # pragma: no cover

    @abstractmethod
    def gen_crypt_token(self) -> GeneratedValue:
        """Genere un jeton court de 11 caracteres."""
        pass  # pragma: no cover

    @abstractmethod
    def gen_random_string(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
        charset: Optional[str] = None,
    ) -> GeneratedValue:
        """Genere une chaine depuis un jeu de caracteres."""
        pass  # pragma: no cover

    @abstractmethod
    def gen_word_phrase(
        self,
        num_words: int = 4,
        min_chars: int = 4,
        max_chars: int = 7,
        word_sep: str = "",
    ) -> GeneratedValue:
        """Genere une phrase de passe de plusieurs mots."""
        pass  # pragma: no cover


class SecretsRandomGenerator(RandomGenerator):
    """Generateur base sur le module secrets (CSPRNG du systeme).

    Les phrases de passe sont tirees d'un dictionnaire systeme ; si
    le fichier est illisible, des mots aleatoires en minuscules sont
    generes a la place.

    Attributes:
        _word_file: Chemin du dictionnaire.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        word_file: Union[str, Path] = DEFAULT_WORD_FILE,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le generateur.

        Args:
            word_file: Dictionnaire, un mot par ligne.
            logger: Logger optionnel (injection de dependance).
        """
        self._word_file = Path(word_file)
        self._logger = logger
        self._random = secrets.SystemRandom()

    def gen_uuid(self) -> GeneratedValue:
        return GeneratedValue(str(uuid.uuid4()), "UUID genere.")

    def gen_random_token(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
    ) -> GeneratedValue:
        length = _coerce_count(length, DEFAULT_TOKEN_LENGTH)
        token = self._draw(ALPHANUMERIC, length)
        return GeneratedValue(
            token, f"Jeton aleatoire genere ({length} caracteres)."
        )

    def gen_crypt_token(self) -> GeneratedValue:
        token = self._draw(ALPHANUMERIC, CRYPT_TOKEN_LENGTH)
        return GeneratedValue(token, "Jeton crypt genere.")

    def gen_random_string(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
        charset: Optional[str] = None,
    ) -> GeneratedValue:
        length = _coerce_count(length, DEFAULT_TOKEN_LENGTH)
        alphabet = charset if charset and charset.strip() else ALPHANUMERIC
        return GeneratedValue(
            self._draw(alphabet, length),
            f"Chaine aleatoire generee ({length} caracteres).",
        )

    def gen_word_phrase(
        self,
        num_words: int = 4,
        min_chars: int = 4,
        max_chars: int = 7,
        word_sep: str = "",
    ) -> GeneratedValue:
        """Genere une phrase de passe a partir du dictionnaire.

        Les mots commencant par une majuscule (noms propres) sont
        ecartes ; chaque mot retenu est capitalise.

        Args:
            num_words: Nombre de mots (defaut 4).
            min_chars: Longueur minimale d'un mot (defaut 4).
            max_chars: Longueur maximale d'un mot (defaut 7).
            word_sep: Separateur entre les mots (defaut "").

        Returns:
            GeneratedValue avec la phrase, ou None si aucun mot
            n'est disponible.
        """
        num_words = _coerce_count(num_words, 4)
        min_chars = _coerce_count(min_chars, 4)
        max_chars = _coerce_count(max_chars, 7)
        if max_chars < min_chars:
            max_chars = min_chars

        words = self._load_words(min_chars, max_chars)
        used_fallback = words is None
        if used_fallback:
            if self._logger:
                self._logger.log_warning(
                    f"gen_word_phrase: dictionnaire illisible "
                    f"({self._word_file}), mots aleatoires utilises"
                )
            words = [
                self._draw(
                    string.ascii_lowercase,
                    self._random.randint(min_chars, max_chars),
                )
                for _ in range(num_words)
            ]

        if not words:
            return GeneratedValue(
                None, "Aucun mot disponible pour generer la phrase."
            )

        if len(words) >= num_words:
            chosen = self._random.sample(words, num_words)
        else:
            chosen = self._random.choices(words, k=num_words)
        phrase = (word_sep or "").join(w.capitalize() for w in chosen)

        message = (
            "Phrase generee (mode de secours)."
            if used_fallback
            else "Phrase generee depuis le dictionnaire."
        )
        return GeneratedValue(phrase, message)

    def _load_words(
        self,
        min_chars: int,
        max_chars: int,
    ) -> Optional[List[str]]:
        """Charge les mots eligibles, None si le fichier est illisible."""
        try:
            with open(self._word_file, "r", encoding="utf-8",
                      errors="replace") as f:
                lines = f.read().splitlines()
        except OSError:
            return None
        return [
            word for word in lines
            if min_chars <= len(word) <= max_chars
            and not word[:1].isupper()
        ]

    @staticmethod
    def _draw(alphabet: str, length: int) -> str:
        return "".join(secrets.choice(alphabet) for _ in range(length))
