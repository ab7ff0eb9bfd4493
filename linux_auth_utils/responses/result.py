"""Protocole de reponse commun a toutes les operations publiques.

Chaque operation retourne un AuthResult : un drapeau de succes, un
message lisible et, selon l'operation, une valeur (identifiant,
hash, chemin, jeton genere...). Le drapeau seul s'obtient par
bool(result) :

    if store.check_pwd("alice", "password123"):
        ...
    result = store.set_pwd("alice", "password123")
    print(result.ok, result.message, result.value)
"""

import functools
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from linux_auth_utils.errors.exceptions import ApplicationError

DEFAULT_CONFIRM_MESSAGE = "Confirmation auth"
DEFAULT_REJECT_MESSAGE = "Rejet auth"

F = TypeVar("F", bound=Callable[..., "AuthResult"])


@dataclass(frozen=True)
class AuthResult:
    """Resultat d'une operation d'authentification.

    Attributes:
        ok: True si l'operation a reussi.
        message: Message lisible (succes ou cause de l'echec).
        value: Charge utile optionnelle de l'operation.
        error: Exception de la taxonomie en cas d'echec.
    """

    ok: bool
    message: str
    value: Any = None
    error: Optional[ApplicationError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def from_error(cls, error: ApplicationError) -> "AuthResult":
        """Construit un resultat en echec depuis une exception metier.

        Args:
            error: Exception de la taxonomie.

        Returns:
            AuthResult en echec portant le message de l'exception.
        """
        return cls(
            ok=False,
            message=str(error) or DEFAULT_REJECT_MESSAGE,
            error=error,
        )


def confirm(
    message: str = DEFAULT_CONFIRM_MESSAGE,
    value: Any = None,
) -> AuthResult:
    """Retourne un resultat en succes."""
    return AuthResult(ok=True, message=message or DEFAULT_CONFIRM_MESSAGE,
                      value=value)


def reject(
    message: str = DEFAULT_REJECT_MESSAGE,
    error: Optional[ApplicationError] = None,
) -> AuthResult:
    """Retourne un resultat en echec."""
    return AuthResult(ok=False, message=message or DEFAULT_REJECT_MESSAGE,
                      error=error)


def reply(
    ok: Any,
    message: Optional[str] = None,
    value: Any = None,
) -> AuthResult:
    """Retourne un resultat dont le succes suit la verite de ok.

    Args:
        ok: Valeur interpretee comme booleen.
        message: Message optionnel ; un message par defaut est choisi
            selon le succes.
        value: Charge utile optionnelle.
    """
    flag = bool(ok)
    if not message:
        message = DEFAULT_CONFIRM_MESSAGE if flag else DEFAULT_REJECT_MESSAGE
    return AuthResult(ok=flag, message=message, value=value)


def returns_result(method: F) -> F:
    """Convertit les exceptions d'une methode publique en AuthResult.

    La methode decoree s'execute sous le verrou ``_mutex`` de
    l'instance s'il existe. Les ApplicationError deviennent des
    resultats en echec ; toute autre exception est journalisee via
    ``_logger`` puis convertie, aucune exception ne remonte a
    l'appelant.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        mutex = getattr(self, "_mutex", None)
        with mutex if mutex is not None else nullcontext():
            try:
                return method(self, *args, **kwargs)
            except ApplicationError as exc:
                return AuthResult.from_error(exc)
            except Exception as exc:
                logger = getattr(self, "_logger", None)
                if logger:
                    logger.log_error(
                        f"{method.__name__}: erreur inattendue "
                        f"{type(exc).__name__}: {exc}"
                    )
                return reject(
                    f"{method.__name__}: erreur inattendue : {exc}"
                )

    return wrapper  # type: ignore[return-value]
