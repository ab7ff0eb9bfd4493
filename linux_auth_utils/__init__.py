"""
Linux Auth Utils - Store d'identifiants sur fichier plat pour Linux.

Modules disponibles:
- credentials: Store d'identifiants (CredentialStore), hachage
  (Argon2PasswordHasher) et generation aleatoire (SecretsRandomGenerator)
- filesystem: Cycle de vie du fichier d'auth et verrous flock
- validation: Regles d'identifiant et de mot de passe
- responses: Protocole de reponse (AuthResult)
- logging: Gestion des logs (Logger, FileLogger, SecurityLogger)
- config: Chargement de configuration (TOML, JSON)
- errors: Exceptions de la bibliotheque
"""

__version__ = "1.0.0"

from linux_auth_utils.logging import Logger, FileLogger, SecurityLogger
from linux_auth_utils.config import (
    ConfigLoader,
    FileConfigLoader,
    ConfigFileLoader,
)
from linux_auth_utils.responses import (
    AuthResult,
    confirm,
    reject,
    reply,
)
from linux_auth_utils.validation import (
    Validator,
    IdentifierValidator,
    PasswordValidator,
    PathCheckerPermission,
    validate_id,
    validate_password,
)
from linux_auth_utils.filesystem import (
    AuthFileManager,
    LinuxAuthFileManager,
    open_locked,
)
from linux_auth_utils.credentials import (
    CredentialStore,
    Record,
    PasswordHasher,
    Argon2PasswordHasher,
    RandomGenerator,
    SecretsRandomGenerator,
    GeneratedValue,
    AuthStoreConfig,
    AuthStoreConfigLoader,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    "SecurityLogger",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "ConfigFileLoader",
    # Reponses
    "AuthResult",
    "confirm",
    "reject",
    "reply",
    # Validation
    "Validator",
    "IdentifierValidator",
    "PasswordValidator",
    "PathCheckerPermission",
    "validate_id",
    "validate_password",
    # Filesystem
    "AuthFileManager",
    "LinuxAuthFileManager",
    "open_locked",
    # Credentials - Store
    "CredentialStore",
    "Record",
    # Credentials - Capacites
    "PasswordHasher",
    "Argon2PasswordHasher",
    "RandomGenerator",
    "SecretsRandomGenerator",
    "GeneratedValue",
    # Credentials - Configuration
    "AuthStoreConfig",
    "AuthStoreConfigLoader",
]
