"""Ouverture de fichiers sous verrou consultatif (flock).

Le verrou est pris sur le descripteur ouvert et libere a la
fermeture du fichier, apres le dernier flush : un autre processus
respectant la meme discipline ne voit jamais une reecriture
partielle.
"""

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Union

from linux_auth_utils.errors.exceptions import (
    FileCloseError,
    FileLockError,
    FileOpenError,
)

FILE_MODE = 0o600


def _private_opener(path: str, flags: int) -> int:
    """Opener qui cree les fichiers absents en 0600."""
    return os.open(path, flags, FILE_MODE)


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


@contextmanager
def open_locked(
    path: Union[str, Path],
    mode: str = "r",
    exclusive: bool = False,
    operation: str = "auth",
) -> Iterator[IO[str]]:
    """Ouvre un fichier texte et le verrouille pour la duree du bloc.

    Les lignes sont lues et ecrites sans traduction de fin de ligne
    et avec ``surrogateescape`` pour que les lignes non modifiees
    soient reecrites a l'identique, octet pour octet.

    Args:
        path: Chemin du fichier.
        mode: Mode d'ouverture ("r", "r+", "a+").
        exclusive: Verrou exclusif (ecriture) si True, partage sinon.
        operation: Nom de l'operation, repris dans les messages.

    Yields:
        Le fichier ouvert et verrouille.

    Raises:
        FileOpenError: Si l'ouverture echoue.
        FileLockError: Si le verrouillage echoue.
        FileCloseError: Si la fermeture echoue apres un bloc sans
            erreur.
    """
    try:
        handle = open(
            path,
            mode,
            encoding="utf-8",
            errors="surrogateescape",
            newline="",
            opener=_private_opener,
        )
    except OSError as exc:
        raise FileOpenError(
            f"{operation}: impossible d'ouvrir le fichier d'auth : "
            f"{_reason(exc)}"
        ) from exc

    try:
        fcntl.flock(
            handle.fileno(),
            fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH,
        )
    except OSError as exc:
        handle.close()
        kind = "en ecriture" if exclusive else "en lecture"
        raise FileLockError(
            f"{operation}: impossible de verrouiller le fichier {kind} : "
            f"{_reason(exc)}"
        ) from exc

    try:
        yield handle
    except BaseException:
        # Une erreur du bloc prime sur un echec de fermeture.
        try:
            handle.close()
        except OSError:
            pass
        raise

    try:
        handle.close()
    except OSError as exc:
        raise FileCloseError(
            f"{operation}: impossible de fermer le fichier : "
            f"{_reason(exc)}"
        ) from exc
