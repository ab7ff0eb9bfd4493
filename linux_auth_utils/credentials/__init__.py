"""Module de stockage d'identifiants sur fichier plat.

Fournit CredentialStore, une table (identifiant, hash de mot de
passe) persistee dans un fichier unique protege par verrous
consultatifs, ainsi que les capacites injectables :

    - PasswordHasher / Argon2PasswordHasher (argon2-cffi, bcrypt)
    - RandomGenerator / SecretsRandomGenerator

Exemple d'utilisation :

    from linux_auth_utils.credentials import CredentialStore

    store = CredentialStore(file="/var/lib/monapp/passwd")
    result = store.set_pwd("alice", "password123")
    if store.check_pwd("alice", "password123"):
        ...
"""

from linux_auth_utils.credentials.config import (
    AuthStoreConfig,
    AuthStoreConfigLoader,
)
from linux_auth_utils.credentials.generators import (
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
    RECORD_MARKER,
    Record,
    validate_separator,
)
from linux_auth_utils.credentials.store import CredentialStore

__all__ = [
    # Store
    "CredentialStore",
    # Modeles
    "Record",
    "DEFAULT_SEPARATOR",
    "RECORD_MARKER",
    "validate_separator",
    # Capacites
    "PasswordHasher",
    "Argon2PasswordHasher",
    "RandomGenerator",
    "SecretsRandomGenerator",
    "GeneratedValue",
    # Configuration
    "AuthStoreConfig",
    "AuthStoreConfigLoader",
]
