"""Capacite de hachage des mots de passe.

Les nouveaux hash sont produits avec Argon2id (argon2-cffi). Les hash
bcrypt herites ($2a$, $2b$, $2y$) restent verifiables ; les remplacer
par un hash Argon2 a la prochaine ecriture est laisse a l'appelant
(voir needs_rehash).
"""

from abc import ABC, abstractmethod
from typing import Optional

import bcrypt
from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from linux_auth_utils.logging.base import Logger

DEFAULT_TIME_COST = 3
DEFAULT_MEMORY_COST = 65536
DEFAULT_PARALLELISM = 4

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


class PasswordHasher(ABC):
    """Interface de hachage et de verification de mots de passe.

    Attributes:
        max_password_length: Longueur maximale acceptee par
            l'algorithme ; le store la reporte sur la validation.
    """

    max_password_length: int = 72

    @abstractmethod
    def hash(self, secret: str) -> str:
        """Retourne le hash d'un mot de passe.

        Args:
            secret: Mot de passe en clair.

        Returns:
            Chaine de hash autoportante (sel inclus).
        """
        pass  # pragma: no cover

    @abstractmethod
    def verify(self, secret: str, password_hash: str) -> bool:
        """Verifie un mot de passe contre un hash.

        Ne leve jamais pour un hash mal forme.

        Args:
            secret: Mot de passe candidat.
            password_hash: Hash stocke.

        Returns:
            True si le mot de passe correspond.
        """
        pass  # pragma: no cover

    @abstractmethod
    def needs_rehash(self, password_hash: str) -> bool:
        """Indique si le hash doit etre recalcule."""
        pass  # pragma: no cover


class Argon2PasswordHasher(PasswordHasher):
    """Argon2id pour les nouveaux hash, bcrypt en verification seule.

    Attributes:
        _hasher: Instance argon2.PasswordHasher configuree.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        time_cost: int = DEFAULT_TIME_COST,
        memory_cost: int = DEFAULT_MEMORY_COST,
        parallelism: int = DEFAULT_PARALLELISM,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le hasher.

        Args:
            time_cost: Nombre d'iterations Argon2.
            memory_cost: Memoire en KiB.
            parallelism: Nombre de lanes.
            logger: Logger optionnel (injection de dependance).
        """
        self._hasher = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._logger = logger

    def hash(self, secret: str) -> str:
        return self._hasher.hash(secret)

    def verify(self, secret: str, password_hash: str) -> bool:
        if password_hash.startswith(BCRYPT_PREFIXES):
            return self._verify_bcrypt(secret, password_hash)
        try:
            return self._hasher.verify(password_hash, secret)
        except VerificationError:
            return False
        except InvalidHashError:
            if self._logger:
                self._logger.log_warning(
                    "Hash stocke dans un format non reconnu"
                )
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Les hash bcrypt et les parametres Argon2 obsoletes l'exigent."""
        if password_hash.startswith(BCRYPT_PREFIXES):
            return True
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError:
            return True

    def _verify_bcrypt(self, secret: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                secret.encode("utf-8"),
                password_hash.encode("ascii"),
            )
        except ValueError:
            return False
