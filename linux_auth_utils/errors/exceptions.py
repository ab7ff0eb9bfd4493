"""
Module contenant les exceptions personnalisees pour linux_auth_utils.

Ce module suit le principe SRP en isolant la gestion des exceptions.
Les operations du store ne laissent pas remonter ces exceptions : elles
sont converties en AuthResult a la frontiere publique. Seul le
constructeur du store leve FileConfigurationError.
"""


class ApplicationError(Exception):
    """Exception de base pour toutes les erreurs de la bibliotheque."""
    pass


class ConfigurationError(ApplicationError):
    """Exception de base pour toutes les erreurs de configuration."""
    pass


class FileConfigurationError(ConfigurationError):
    """Fichier d'authentification impossible a ouvrir ou a creer.

    Levee uniquement a la construction du store : il n'existe pas de
    mode degrade quand l'appelant exige un stockage persistant.
    """
    pass


class NoFileError(ConfigurationError):
    """Aucun fichier d'authentification actif."""
    pass


class NoFilenameError(ConfigurationError):
    """Nom de fichier vide ou compose uniquement d'espaces."""
    pass


class ValidationError(ApplicationError):
    """Exception de base pour toutes les validations."""
    pass


class EmptyValueError(ValidationError):
    """Valeur absente ou vide."""
    pass


class LengthOutOfRangeError(ValidationError):
    """Longueur hors des bornes autorisees."""
    pass


class InvalidCharactersError(ValidationError):
    """Caracteres non autorises."""
    pass


class NotFoundError(ApplicationError):
    """Exception de base pour les elements introuvables."""
    pass


class UserNotFoundError(NotFoundError):
    """Identifiant absent du fichier d'authentification."""
    pass


class RecordNotFoundError(NotFoundError):
    """Aucun enregistrement a modifier ou a supprimer."""
    pass


class DuplicateError(ApplicationError):
    """Exception de base pour les doublons."""
    pass


class AlreadyExistsError(DuplicateError):
    """Identifiant deja enregistre."""
    pass


class AuthenticationError(ApplicationError):
    """Exception de base pour les echecs d'authentification."""
    pass


class InvalidPasswordError(AuthenticationError):
    """Mot de passe ne correspondant pas au hash stocke."""
    pass


class StorageError(ApplicationError):
    """Exception de base pour les erreurs d'entree/sortie fichier."""
    pass


class FileOpenError(StorageError):
    """Ouverture du fichier impossible."""
    pass


class FileLockError(StorageError):
    """Verrouillage du fichier impossible."""
    pass


class FileWriteError(StorageError):
    """Ecriture, troncature ou suppression du fichier impossible."""
    pass


class FileCloseError(StorageError):
    """Fermeture du fichier impossible."""
    pass
