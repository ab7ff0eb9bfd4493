"""Protocole de reponse (drapeau + message) des operations publiques."""

from linux_auth_utils.responses.result import (
    AuthResult,
    confirm,
    reject,
    reply,
    returns_result,
)

__all__ = [
    "AuthResult",
    "confirm",
    "reject",
    "reply",
    "returns_result",
]
