"""Store d'identifiants sur fichier plat.

Ce module fournit CredentialStore : une table (identifiant, hash)
persistee dans un fichier unique, une ligne par enregistrement.

Chaque operation de lecture prend un verrou partage (flock) sur le
fichier ; chaque mutation prend un verrou exclusif, relit tout le
fichier, le reecrit entierement puis relache le verrou a la
fermeture. Un verrou local (RLock) serialise en plus les threads du
meme processus.

Apres construction, aucune methode publique ne leve : toutes
retournent un AuthResult.

Exemple d'utilisation :

    store = CredentialStore(file="/var/lib/monapp/passwd")
    store.set_pwd("alice", "password123")
    if store.check_pwd("alice", "password123"):
        ...
    result = store.reset_pwd("alice", "newpw12345")
    print(result.ok, result.message)
"""

import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Callable, Iterator, List, Optional, Tuple, Union

from linux_auth_utils.credentials.config import AuthStoreConfig
from linux_auth_utils.credentials.generators import (
    DEFAULT_TOKEN_LENGTH,
    GeneratedValue,
    RandomGenerator,
    SecretsRandomGenerator,
)
from linux_auth_utils.credentials.hasher import (
    Argon2PasswordHasher,
    PasswordHasher,
)
from linux_auth_utils.credentials.records import (
    DEFAULT_SEPARATOR,
    Record,
    line_id,
    validate_separator,
)
from linux_auth_utils.errors.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    FileLockError,
    FileOpenError,
    FileWriteError,
    InvalidPasswordError,
    NoFileError,
    RecordNotFoundError,
    UserNotFoundError,
)
from linux_auth_utils.filesystem import LinuxAuthFileManager, open_locked
from linux_auth_utils.logging.base import Logger
from linux_auth_utils.logging.file_logger import FileLogger
from linux_auth_utils.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)
from linux_auth_utils.responses import (
    AuthResult,
    confirm,
    reject,
    reply,
    returns_result,
)
from linux_auth_utils.validation import (
    MAX_PASSWORD_LENGTH,
    validate_id,
    validate_password,
)

Transform = Callable[[List[str]], Tuple[List[str], int]]


class CredentialStore:
    """Table d'identifiants persistee dans un fichier plat verrouille.

    Attributes:
        _files: Gestionnaire du fichier actif.
        _hasher: Capacite de hachage injectee.
        _generator: Capacite de generation aleatoire injectee.
        _separator: Separateur de champs.
        _logger: Logger optionnel.
        _security: SecurityLogger derive du logger, ou None.
        _mutex: Verrou local serialisant les threads du processus.
    """

    def __init__(
        self,
        file: Optional[Union[str, Path]] = None,
        no_file: bool = False,
        hasher: Optional[PasswordHasher] = None,
        generator: Optional[RandomGenerator] = None,
        logger: Optional[Logger] = None,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialise le store.

        Sans fichier (ou avec no_file=True), le store est construit
        mais les operations d'authentification echouent jusqu'a
        l'appel de set_file().

        Args:
            file: Fichier d'authentification a ouvrir ou creer.
            no_file: Mode utilitaires seulement.
            hasher: Capacite de hachage (defaut: Argon2PasswordHasher).
            generator: Capacite de generation
                (defaut: SecretsRandomGenerator).
            logger: Logger optionnel (injection de dependance).
            separator: Separateur de champs (defaut: tabulation).

        Raises:
            FileConfigurationError: Si le fichier fourni ne peut etre
                ouvert ou cree.
            ConfigurationError: Si le separateur est invalide.
        """
        try:
            self._separator = validate_separator(separator)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        self._logger = logger
        self._security = SecurityLogger(logger) if logger else None
        self._hasher = hasher or Argon2PasswordHasher(logger=logger)
        self._generator = generator or SecretsRandomGenerator(logger=logger)
        self._files = LinuxAuthFileManager(logger=logger)
        self._mutex = threading.RLock()

        if no_file:
            self._warn(
                "Utilitaires seulement ; pas de verification d'ID "
                "ni de mot de passe"
            )
            return
        if not file:
            self._warn(
                "Aucun fichier d'auth fourni pour les verifications "
                "d'ID et de mot de passe"
            )
            return

        self._files.bind_initial(file)

    @classmethod
    def from_config(
        cls,
        config: AuthStoreConfig,
        logger: Optional[Logger] = None,
        hasher: Optional[PasswordHasher] = None,
        generator: Optional[RandomGenerator] = None,
    ) -> "CredentialStore":
        """Cree un store depuis un AuthStoreConfig.

        Args:
            config: Configuration validee (AuthStoreConfig).
            logger: Logger optionnel ; sinon un FileLogger si
                log_file est configure.
            hasher: Hasher optionnel ; sinon construit depuis les
                parametres Argon2 de la configuration.
            generator: Generateur optionnel ; sinon construit avec le
                dictionnaire de la configuration.

        Raises:
            FileConfigurationError: Si le fichier configure ne peut
                etre ouvert ou cree.
        """
        if logger is None:
            logger = FileLogger.from_config(config)
        if hasher is None:
            hasher = Argon2PasswordHasher(
                time_cost=config.argon2_time_cost,
                memory_cost=config.argon2_memory_cost,
                parallelism=config.argon2_parallelism,
                logger=logger,
            )
        if generator is None:
            generator = SecretsRandomGenerator(
                word_file=config.word_file,
                logger=logger,
            )
        return cls(
            file=config.file,
            no_file=config.no_file,
            hasher=hasher,
            generator=generator,
            logger=logger,
            separator=config.separator,
        )

    @property
    def separator(self) -> str:
        """Separateur de champs du fichier."""
        return self._separator

    @property
    def max_password_length(self) -> int:
        """Borne haute des mots de passe, limitee par le hasher."""
        return min(MAX_PASSWORD_LENGTH, self._hasher.max_password_length)

    # ------------------------------------------------------------------
    # Validations
    # ------------------------------------------------------------------

    @returns_result
    def validate_id(self, user_id: Optional[str]) -> AuthResult:
        """Valide la forme d'un identifiant."""
        validate_id(user_id)
        return confirm("ID OK", value=user_id)

    @returns_result
    def validate_pwd(self, password: Optional[str]) -> AuthResult:
        """Valide la forme d'un mot de passe."""
        self._validate_password(password)
        return confirm("Mot de passe OK")

    @returns_result
    def validate_file(
        self,
        path: Optional[Union[str, Path]] = None
    ) -> AuthResult:
        """Verifie qu'un fichier (actif par defaut) existe et est lisible."""
        return self._files.validate_file(path)

    # ------------------------------------------------------------------
    # Operations d'authentification
    # ------------------------------------------------------------------

    @returns_result
    def check_id(self, user_id: Optional[str]) -> AuthResult:
        """Verifie qu'un identifiant est enregistre.

        Comparaison exacte du premier champ de chaque ligne, sous
        verrou partage.

        Args:
            user_id: Identifiant recherche.

        Returns:
            AuthResult en succes si l'identifiant existe.
        """
        validate_id(user_id)
        with self._access("check_id", user_id):
            path = self._files.require_file("check_id")
            with open_locked(path, "r", operation="check_id") as handle:
                found = self._contains_id(handle, user_id)

        if found:
            return confirm("ID OK", value=user_id)
        raise UserNotFoundError(f"check_id: ID {user_id} non confirme")

    @returns_result
    def check_pwd(
        self,
        user_id: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Verifie un couple identifiant / mot de passe.

        Le premier enregistrement bien forme de l'identifiant est lu
        sous verrou partage ; la verification du hash se fait apres
        liberation du verrou.

        Args:
            user_id: Identifiant.
            password: Mot de passe candidat.

        Returns:
            AuthResult en succes si le mot de passe correspond.
        """
        validate_id(user_id)
        self._validate_password(password)
        with self._access("check_pwd", user_id):
            path = self._files.require_file("check_pwd")
            with open_locked(path, "r", operation="check_pwd") as handle:
                record = self._find_record(handle, user_id)

        if record is None:
            self._audit(
                SecurityEventType.AUTH_FAILURE, user_id, "check_pwd",
                severity="warning", reason="unknown_id",
            )
            raise UserNotFoundError("check_pwd: ID utilisateur introuvable")

        if self._hasher.verify(password, record.password_hash):
            self._audit(SecurityEventType.AUTH_SUCCESS, user_id, "check_pwd")
            return confirm(value=user_id)

        self._audit(
            SecurityEventType.AUTH_FAILURE, user_id, "check_pwd",
            severity="warning", reason="invalid_password",
        )
        raise InvalidPasswordError("check_pwd: mot de passe invalide")

    @returns_result
    def set_pwd(
        self,
        user_id: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Enregistre un nouvel identifiant avec son mot de passe.

        Echoue sans rien modifier si l'identifiant existe deja.
        L'existence est reverifiee sous le verrou exclusif avant
        l'ajout, pour qu'un autre processus ne puisse pas inserer le
        meme identifiant entre la verification et l'ecriture.

        Args:
            user_id: Nouvel identifiant.
            password: Mot de passe en clair.

        Returns:
            AuthResult dont la valeur est l'identifiant.
        """
        validate_id(user_id)
        self._validate_password(password)

        existing = self.check_id(user_id)
        if existing:
            raise AlreadyExistsError(f"set_pwd: ID {user_id} deja utilise")
        if not isinstance(existing.error, UserNotFoundError):
            return existing

        record = Record(user_id, self._hasher.hash(password))

        # "r+" : un fichier disparu entre-temps n'est pas recree.
        with self._access("set_pwd", user_id):
            path = self._files.require_file("set_pwd")
            with open_locked(
                path, "r+", exclusive=True, operation="set_pwd"
            ) as handle:
                self._append(handle, record)

        self._audit(
            SecurityEventType.DATA_MODIFICATION, user_id, "set_pwd"
        )
        return confirm(user_id, value=user_id)

    @returns_result
    def reset_pwd(
        self,
        user_id: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Remplace le mot de passe d'un identifiant existant.

        La premiere ligne de l'identifiant est remplacee ; les autres
        lignes sont reecrites a l'identique et dans le meme ordre.
        Les doublons eventuels du meme identifiant sont supprimes.

        Args:
            user_id: Identifiant existant.
            password: Nouveau mot de passe.

        Returns:
            AuthResult dont la valeur est l'identifiant ; echec
            RecordNotFoundError si l'identifiant est absent (fichier
            inchange).
        """
        validate_id(user_id)
        self._validate_password(password)
        with self._access("reset_pwd", user_id):
            path = self._files.require_file("reset_pwd")
            checked = self._files.validate_file(path)
            if not checked:
                return reject(
                    f"reset_pwd: {checked.message}", error=checked.error
                )

            record = Record(user_id, self._hasher.hash(password))
            replaced = self._rewrite(
                path,
                "reset_pwd",
                lambda lines: self._replace_first(lines, record),
            )
        if not replaced:
            raise RecordNotFoundError(
                f"reset_pwd: ID {user_id} introuvable, "
                f"mot de passe non reinitialise"
            )

        self._audit(
            SecurityEventType.DATA_MODIFICATION, user_id, "reset_pwd"
        )
        return confirm(user_id, value=user_id)

    @returns_result
    def delete_id(self, user_id: Optional[str]) -> AuthResult:
        """Supprime toutes les lignes d'un identifiant.

        Args:
            user_id: Identifiant a supprimer.

        Returns:
            AuthResult dont la valeur est le nombre de lignes
            supprimees ; echec RecordNotFoundError si aucune.
        """
        validate_id(user_id)
        with self._access("delete_id", user_id):
            path = self._files.require_file("delete_id")
            deleted = self._rewrite(
                path,
                "delete_id",
                lambda lines: self._omit(lines, user_id),
            )
        if not deleted:
            raise RecordNotFoundError(
                f"delete_id: ID {user_id} introuvable pour suppression"
            )

        self._audit(
            SecurityEventType.DATA_MODIFICATION, user_id, "delete_id",
            deleted=deleted,
        )
        return confirm(user_id, value=deleted)

    # ------------------------------------------------------------------
    # Hachage
    # ------------------------------------------------------------------

    @returns_result
    def encrypt_pwd(self, password: Optional[str]) -> AuthResult:
        """Retourne le hash d'un mot de passe valide."""
        self._validate_password(password)
        return confirm("Mot de passe chiffre",
                       value=self._hasher.hash(password))

    @returns_result
    def needs_rehash(self, password_hash: str) -> AuthResult:
        """Indique si un hash stocke doit etre recalcule."""
        flag = self._hasher.needs_rehash(password_hash)
        return reply(
            flag,
            "Hash a recalculer" if flag else "Hash a jour",
        )

    # ------------------------------------------------------------------
    # Cycle de vie du fichier
    # ------------------------------------------------------------------

    @returns_result
    def set_file(self, path: Union[str, Path]) -> AuthResult:
        """Cree ou ouvre un fichier et en fait le fichier actif."""
        result = self._files.set_file(path)
        if result:
            self._audit(
                SecurityEventType.CONFIG_CHANGE, None, "set_file"
            )
        return result

    @returns_result
    def remove_file(self) -> AuthResult:
        """Supprime le fichier actif ; la valeur est le chemin supprime."""
        result = self._files.remove_file()
        if result:
            self._audit(
                SecurityEventType.CONFIG_CHANGE, None, "remove_file",
                path=str(result.value),
            )
        return result

    @returns_result
    def clear_file(self) -> AuthResult:
        """Vide le fichier actif (suppression puis recreation)."""
        result = self._files.clear_file()
        if result:
            self._audit(
                SecurityEventType.CONFIG_CHANGE, None, "clear_file"
            )
        return result

    def current_file(self) -> Optional[Path]:
        """Retourne le chemin du fichier actif ou None."""
        return self._files.current_file()

    # ------------------------------------------------------------------
    # Generateurs
    # ------------------------------------------------------------------

    @returns_result
    def gen_uuid(self) -> AuthResult:
        return self._generated(
            self._generator.gen_uuid(),
            "gen_uuid: echec de generation d'UUID",
        )

    @returns_result
    def gen_random_token(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
    ) -> AuthResult:
        return self._generated(
            self._generator.gen_random_token(length),
            "gen_random_token: echec de generation du jeton",
        )

    @returns_result
    def gen_token(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
    ) -> AuthResult:
        """Ancien nom de gen_random_token, garde pour compatibilite."""
        return self.gen_random_token(length)

    @returns_result
    def gen_crypt_token(self) -> AuthResult:
        return self._generated(
            self._generator.gen_crypt_token(),
            "gen_crypt_token: echec de generation du jeton",
        )

    @returns_result
    def gen_random_string(
        self,
        length: int = DEFAULT_TOKEN_LENGTH,
        charset: Optional[str] = None,
    ) -> AuthResult:
        return self._generated(
            self._generator.gen_random_string(length, charset),
            "gen_random_string: echec de generation de la chaine",
        )

    @returns_result
    def gen_word_phrase(
        self,
        num_words: int = 4,
        min_chars: int = 4,
        max_chars: int = 7,
        word_sep: str = "",
    ) -> AuthResult:
        return self._generated(
            self._generator.gen_word_phrase(
                num_words, min_chars, max_chars, word_sep
            ),
            "gen_word_phrase: echec de generation de la phrase",
        )

    # ------------------------------------------------------------------
    # Interne
    # ------------------------------------------------------------------

    def _validate_password(self, password: Optional[str]) -> str:
        return validate_password(
            password, max_length=self.max_password_length
        )

    def _contains_id(self, lines, user_id: str) -> bool:
        return any(
            line_id(line, self._separator) == user_id for line in lines
        )

    def _find_record(self, lines, user_id: str) -> Optional[Record]:
        """Premier enregistrement bien forme de l'identifiant."""
        for line in lines:
            if line_id(line, self._separator) != user_id:
                continue
            record = Record.from_line(line, self._separator)
            if record is not None:
                return record
        return None

    def _replace_first(
        self,
        lines: List[str],
        record: Record,
    ) -> Tuple[List[str], int]:
        output: List[str] = []
        replaced = 0
        dropped = 0
        for line in lines:
            if line_id(line, self._separator) != record.user_id:
                output.append(line)
            elif replaced:
                dropped += 1
            else:
                output.append(record.to_line(self._separator))
                replaced += 1
        if dropped:
            self._warn(
                f"reset_pwd: {dropped} doublon(s) de l'ID "
                f"{record.user_id} supprime(s)"
            )
        return output, replaced

    def _omit(
        self,
        lines: List[str],
        user_id: str,
    ) -> Tuple[List[str], int]:
        output = [
            line for line in lines
            if line_id(line, self._separator) != user_id
        ]
        return output, len(lines) - len(output)

    def _rewrite(
        self,
        path: Path,
        operation: str,
        transform: Transform,
    ) -> int:
        """Relit et reecrit tout le fichier sous verrou exclusif.

        Le fichier n'est tronque puis reecrit que si la transformation
        a modifie au moins une ligne ; sinon il reste inchange.

        Args:
            path: Fichier actif.
            operation: Nom de l'operation, repris dans les messages.
            transform: Fonction lignes -> (nouvelles lignes, compte).

        Returns:
            Le nombre de lignes remplacees ou supprimees.

        Raises:
            FileWriteError: Si la troncature ou l'ecriture echoue.
        """
        with open_locked(
            path, "r+", exclusive=True, operation=operation
        ) as handle:
            lines = handle.readlines()
            output, count = transform(lines)
            if count:
                try:
                    handle.seek(0)
                    handle.truncate()
                    handle.writelines(output)
                    handle.flush()
                    os.fsync(handle.fileno())
                except OSError as exc:
                    raise FileWriteError(
                        f"{operation}: echec de mise a jour du fichier : "
                        f"{exc.strerror or exc}"
                    ) from exc
        return count

    def _append(self, handle: IO[str], record: Record) -> None:
        """Ajoute un enregistrement en fin de fichier deja verrouille.

        Raises:
            AlreadyExistsError: Si l'identifiant est apparu depuis
                la premiere verification.
            FileWriteError: Si l'ecriture echoue.
        """
        lines = handle.readlines()
        if self._contains_id(lines, record.user_id):
            raise AlreadyExistsError(
                f"set_pwd: ID {record.user_id} deja utilise"
            )
        line = record.to_line(self._separator)
        if lines and not lines[-1].endswith("\n"):
            line = "\n" + line
        try:
            handle.seek(0, os.SEEK_END)
            handle.write(line)
            handle.flush()
            os.fsync(handle.fileno())
        except OSError as exc:
            raise FileWriteError(
                f"set_pwd: impossible d'ecrire dans le fichier : "
                f"{exc.strerror or exc}"
            ) from exc

    @contextmanager
    def _access(
        self,
        operation: str,
        user_id: Optional[str],
    ) -> Iterator[None]:
        """Trace un refus d'acces (fichier absent, verrou refuse)."""
        try:
            yield
        except (NoFileError, FileOpenError, FileLockError) as exc:
            self._audit(
                SecurityEventType.ACCESS_DENIED, user_id, operation,
                severity="warning", reason=type(exc).__name__,
            )
            raise

    @staticmethod
    def _generated(generated: GeneratedValue, failure: str) -> AuthResult:
        if generated.value is None:
            return reject(f"{failure} : {generated.message}")
        return confirm(generated.message, value=generated.value)

    def _warn(self, message: str) -> None:
        if self._logger:
            self._logger.log_warning(message)

    def _audit(
        self,
        event_type: SecurityEventType,
        user_id: Optional[str],
        operation: str,
        severity: str = "info",
        **details,
    ) -> None:
        if self._security is None:
            return
        current = self._files.current_file()
        self._security.log_event(SecurityEvent(
            event_type=event_type,
            resource=str(current) if current else None,
            details={"operation": operation, **details},
            severity=severity,
            user_id=user_id,
        ))
