"""Lecture des fichiers de configuration (TOML ou JSON).

Deux niveaux :

- ConfigLoader / FileConfigLoader lisent un fichier entier et
  retournent un dict brut, ou une instance pydantic si un schema est
  fourni ;
- ConfigFileLoader[T] extrait une section (``auth``, ou une section
  imbriquee ``monapp.auth``) et la convertit en objet type.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")

SUPPORTED_SUFFIXES = (".toml", ".json")


class ConfigLoader(ABC):
    """Interface de lecture d'un fichier de configuration."""

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Lit un fichier de configuration.

        Args:
            config_path: Fichier a lire
            schema: Modele pydantic optionnel

        Returns:
            Le contenu brut, ou une instance de schema si fourni
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Lecture TOML (tomllib) ou JSON selon l'extension du fichier.
    """

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Lit le fichier et le valide eventuellement avec un schema.

        Args:
            config_path: Fichier .toml ou .json
            schema: Sous-classe de pydantic.BaseModel, optionnelle

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si l'extension n'est pas geree
            TypeError: Si schema n'est pas un modele pydantic
            pydantic.ValidationError: Si le contenu ne respecte pas
                le schema
        """
        data = self._read(Path(config_path))
        if schema is None:
            return data
        return validate_with_schema(data, schema)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration non trouve: {path}"
            )
        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Extension non supportee: {suffix}. "
                "Utilisez .toml ou .json"
            )
        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)


def validate_with_schema(data: Dict[str, Any], schema: type) -> Any:
    """Construit une instance pydantic a partir d'un dict.

    Raises:
        TypeError: Si schema n'est pas une sous-classe de BaseModel.
    """
    if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
        raise TypeError(
            f"Le schema doit etre une sous-classe de "
            f"pydantic.BaseModel, recu: {schema}"
        )
    return schema.model_validate(data)


class ConfigFileLoader(ABC, Generic[T]):
    """Base des chargeurs qui lisent une section d'un fichier.

    Le fichier est lu une seule fois, a la construction. Les noms de
    section peuvent etre pointes pour atteindre une table imbriquee :
    ``"monapp.auth"`` designe ``[monapp.auth]`` en TOML ou
    ``{"monapp": {"auth": {...}}}`` en JSON.

    Example:
        >>> class AuthLoader(ConfigFileLoader[AuthStoreConfig]):
        ...     def load(self, section=None):
        ...         return AuthStoreConfig.model_validate(
        ...             self._get_section(section or "auth")
        ...         )
    """

    def __init__(
        self,
        config_path: str | Path,
        config_loader: ConfigLoader | None = None
    ) -> None:
        """
        Args:
            config_path: Fichier .toml ou .json.
            config_loader: Lecteur injectable (FileConfigLoader par
                defaut).
        """
        loader = config_loader or FileConfigLoader()
        self._config: dict[str, Any] = loader.load(config_path)

    @property
    def config(self) -> dict[str, Any]:
        """Contenu brut du fichier."""
        return self._config

    def _get_section(self, section: str) -> dict[str, Any]:
        """Retourne la table designee par un nom, eventuellement pointe.

        Raises:
            KeyError: Si une composante du nom n'existe pas ou ne
                designe pas une table.
        """
        current: Any = self._config
        for part in section.split("."):
            if not isinstance(current, dict) or part not in current:
                available = (
                    list(current.keys()) if isinstance(current, dict) else []
                )
                raise KeyError(
                    f"Section '{section}' non trouvee dans le fichier. "
                    f"Sections disponibles: {available}"
                )
            current = current[part]
        if not isinstance(current, dict):
            raise KeyError(f"'{section}' n'est pas une section")
        return current

    @abstractmethod
    def load(self, section: str | None = None) -> T:
        """Construit l'objet de configuration depuis une section."""
        pass
