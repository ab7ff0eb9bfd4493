"""Configuration du store d'authentification.

La configuration peut provenir d'une section ``[auth]`` d'un fichier
TOML ou JSON :

    [auth]
    file = "/var/lib/monapp/passwd"
    separator = "\\t"
    log_file = "/var/log/monapp/auth.log"
    argon2_time_cost = 3

ou des variables d'environnement ``AUTH_STORE_*``, eventuellement
chargees depuis un fichier .env (python-dotenv) :

    AUTH_STORE_FILE=/var/lib/monapp/passwd
    AUTH_STORE_LOG_LEVEL=WARNING
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from linux_auth_utils.config import ConfigFileLoader, ConfigLoader
from linux_auth_utils.credentials.generators import DEFAULT_WORD_FILE
from linux_auth_utils.credentials.hasher import (
    DEFAULT_MEMORY_COST,
    DEFAULT_PARALLELISM,
    DEFAULT_TIME_COST,
)
from linux_auth_utils.credentials.records import (
    DEFAULT_SEPARATOR,
    validate_separator,
)

ENV_PREFIX = "AUTH_STORE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_SEPARATOR_ESCAPES = {"\\t": "\t", "\\x1f": "\x1f", "\\x1e": "\x1e"}


class AuthStoreConfig(BaseModel):
    """Parametres du store d'authentification.

    Attributes:
        file: Fichier d'authentification (None = pas de fichier).
        no_file: Mode utilitaires seulement, sans fichier.
        separator: Separateur de champs (un caractere).
        log_file: Fichier de log optionnel.
        log_level: Niveau de log.
        argon2_time_cost: Iterations Argon2.
        argon2_memory_cost: Memoire Argon2 en KiB.
        argon2_parallelism: Lanes Argon2.
        word_file: Dictionnaire des phrases de passe.
    """

    model_config = {"extra": "forbid"}

    file: Optional[str] = None
    no_file: bool = False
    separator: str = DEFAULT_SEPARATOR
    log_file: Optional[str] = None
    log_level: str = "INFO"
    argon2_time_cost: int = Field(DEFAULT_TIME_COST, ge=1)
    argon2_memory_cost: int = Field(DEFAULT_MEMORY_COST, ge=8)
    argon2_parallelism: int = Field(DEFAULT_PARALLELISM, ge=1)
    word_file: str = DEFAULT_WORD_FILE

    @field_validator("separator", mode="before")
    @classmethod
    def check_separator(cls, v: str) -> str:
        if isinstance(v, str):
            v = _SEPARATOR_ESCAPES.get(v, v)
        return validate_separator(v)

    @field_validator("file")
    @classmethod
    def check_file(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le chemin du fichier ne peut pas etre vide")
        return v

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Niveau de log inconnu : {v!r}")
        return level

    def logging_config(self) -> dict:
        """Retourne la section logging attendue par FileLogger."""
        return {"logging": {"level": self.log_level}}

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "AuthStoreConfig":
        """Construit la configuration depuis l'environnement.

        Les variables deja presentes dans l'environnement ont priorite
        sur le fichier .env (override=False).

        Args:
            dotenv_path: Fichier .env optionnel.
            prefix: Prefixe des variables (defaut "AUTH_STORE_").

        Returns:
            Configuration validee.

        Raises:
            pydantic.ValidationError: Si une valeur est invalide.
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path=dotenv_path, override=False)
        data = {}
        for name in cls.model_fields:
            value = os.environ.get(f"{prefix}{name.upper()}")
            if value:
                data[name] = value
        return cls.model_validate(data)


class AuthStoreConfigLoader(ConfigFileLoader[AuthStoreConfig]):
    """Chargeur de configuration pour AuthStoreConfig.

    Lit la section ``[auth]`` d'un fichier TOML ou JSON.

    Attributes:
        DEFAULT_SECTION: Nom de la section par defaut ("auth").

    Example:
        >>> loader = AuthStoreConfigLoader("config/app.toml")
        >>> config = loader.load()
        >>> store = CredentialStore.from_config(config)
    """

    DEFAULT_SECTION: str = "auth"

    def __init__(
        self,
        config_path: str | Path,
        config_loader: ConfigLoader | None = None
    ) -> None:
        super().__init__(config_path, config_loader)

    def load(self, section: str | None = None) -> AuthStoreConfig:
        """Charge et retourne un AuthStoreConfig.

        Args:
            section: Nom de la section. Par defaut "auth".

        Raises:
            KeyError: Si la section n'existe pas.
            pydantic.ValidationError: Si une valeur est invalide.
        """
        data = self._get_section(section or self.DEFAULT_SECTION)
        return AuthStoreConfig.model_validate(data)
