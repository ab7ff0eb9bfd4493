"""Logging structure des evenements de securite.

Ce module fournit les primitives pour tracer les evenements
d'authentification (verification de mot de passe, creation,
reinitialisation et suppression d'identifiants, changement de
fichier actif) via une interface typee et une sortie JSON structuree.

SecurityLogger depend de l'abstraction Logger, non d'une
implementation concrete.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from linux_auth_utils.logging.base import Logger


class SecurityEventType(StrEnum):
    """Types d'evenements de securite tracables."""

    AUTH_SUCCESS = "auth.success"
    AUTH_FAILURE = "auth.failure"
    ACCESS_DENIED = "access.denied"
    DATA_MODIFICATION = "data.modification"
    CONFIG_CHANGE = "config.change"


@dataclass(frozen=True)
class SecurityEvent:
    """Evenement de securite structure pour audit trail.

    Attributes:
        event_type: Type d'evenement (SecurityEventType).
        resource: Ressource concernee (chemin du fichier d'auth).
        details: Contexte additionnel (jamais de secret).
        severity: Niveau de severite (info, warning, error, critical).
        user_id: Identifiant concerne par l'operation.
        timestamp: Horodatage ISO 8601 UTC (auto-genere).
    """

    event_type: SecurityEventType
    resource: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    user_id: str | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


# Cles de details jamais ecrites en clair dans le journal.
REDACTED_KEYS = frozenset({"password", "password_hash", "hash", "secret"})
REDACTED = "***"


def _redact(details: dict[str, Any]) -> dict[str, Any]:
    return {
        key: REDACTED if key.lower() in REDACTED_KEYS else value
        for key, value in details.items()
    }


class SecurityLogger:
    """Journal d'audit des operations d'authentification.

    Chaque evenement est serialise en une ligne JSON et transmis au
    Logger injecte : ``warning`` pour les echecs d'authentification,
    ``error``/``critical`` pour les refus, ``info`` sinon. Les cles de
    details listees dans REDACTED_KEYS sont masquees.

    Utilisation :
        audit = SecurityLogger(file_logger)
        audit.log_event(SecurityEvent(
            event_type=SecurityEventType.AUTH_FAILURE,
            resource="/var/lib/app/passwd",
            details={"operation": "check_pwd"},
            severity="warning",
            user_id="alice",
        ))
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def log_event(self, event: SecurityEvent) -> None:
        """Journalise un evenement.

        Args:
            event: Evenement a tracer.
        """
        payload: dict[str, Any] = {
            "security_event": str(event.event_type),
            "timestamp": event.timestamp,
            "resource": event.resource,
            "severity": event.severity,
            "details": _redact(event.details),
        }
        if event.user_id is not None:
            payload["user_id"] = event.user_id

        self._route(event.severity)(
            json.dumps(payload, ensure_ascii=False, default=str)
        )

    def _route(self, severity: str):
        if severity in ("error", "critical"):
            return self._logger.log_error
        if severity == "warning":
            return self._logger.log_warning
        return self._logger.log_info
