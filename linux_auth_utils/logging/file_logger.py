"""Logger fichier pour le store d'authentification."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from linux_auth_utils.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_FILE_MODE = 0o600


class FileLogger(Logger):
    """
    Logger qui ecrit dans un fichier, avec sortie console optionnelle.

    Le journal contient des identifiants et des chemins : un fichier
    cree par ce logger est restreint au proprietaire (0600). Un seul
    logging.Logger est associe a chaque fichier, sans propagation, et
    chaque message est flushe immediatement.

    Attributes:
        log_file: Chemin du journal.
        logger: logging.Logger sous-jacent.
        handler: Handler fichier.
    """

    def __init__(
        self,
        log_file: str,
        config: Optional[Dict[str, Any]] = None,
        console_output: bool = False
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log
            config: Dictionnaire optionnel avec une section "logging"
                    (cles supportees: level, format)
            console_output: Ecrire aussi sur la sortie d'erreur
        """
        self.log_file = log_file
        settings = (config or {}).get("logging", {})
        level = getattr(
            logging, str(settings.get("level", "INFO")).upper(), logging.INFO
        )
        formatter = logging.Formatter(settings.get("format", DEFAULT_FORMAT))

        self.logger = logging.getLogger(f"linux_auth_utils:{log_file}")
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            self.handler = self.logger.handlers[0]
            return

        self.handler = self._open_private(log_file)
        self.handler.setLevel(level)
        self.handler.setFormatter(formatter)
        self.logger.addHandler(self.handler)

        if console_output:
            console = logging.StreamHandler()
            console.setLevel(level)
            console.setFormatter(formatter)
            self.logger.addHandler(console)

    @classmethod
    def from_config(cls, config: Any, console_output: bool = False):
        """
        Cree un logger depuis un AuthStoreConfig.

        Args:
            config: Configuration portant log_file et logging_config()

        Returns:
            Un FileLogger, ou None si aucun log_file n'est configure
        """
        if not config.log_file:
            return None
        return cls(
            config.log_file,
            config=config.logging_config(),
            console_output=console_output,
        )

    @staticmethod
    def _open_private(log_file: str) -> logging.FileHandler:
        """Ouvre le journal, en le creant en 0600 s'il n'existe pas."""
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_new = not path.exists()
        handler = logging.FileHandler(log_file, encoding="utf-8")
        if is_new:
            try:
                os.chmod(log_file, LOG_FILE_MODE)
            except OSError:
                pass  # journal utilisable meme sans restriction
        return handler

    def _emit(self, level: int, message: str) -> None:
        self.logger.log(level, message)
        if self.handler:
            self.handler.flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self._emit(logging.INFO, message)

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self._emit(logging.WARNING, message)

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self._emit(logging.ERROR, message)

    def close(self) -> None:
        """Ferme et detache les handlers de ce logger."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
