"""Module de gestion des erreurs."""

from linux_auth_utils.errors.exceptions import (ApplicationError,
                                                AlreadyExistsError,
                                                AuthenticationError,
                                                ConfigurationError,
                                                DuplicateError,
                                                EmptyValueError,
                                                FileCloseError,
                                                FileConfigurationError,
                                                FileLockError,
                                                FileOpenError,
                                                FileWriteError,
                                                InvalidCharactersError,
                                                InvalidPasswordError,
                                                LengthOutOfRangeError,
                                                NoFileError,
                                                NoFilenameError,
                                                NotFoundError,
                                                RecordNotFoundError,
                                                StorageError,
                                                UserNotFoundError,
                                                ValidationError)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "NoFileError",
    "NoFilenameError",
    "ValidationError",
    "EmptyValueError",
    "LengthOutOfRangeError",
    "InvalidCharactersError",
    "NotFoundError",
    "UserNotFoundError",
    "RecordNotFoundError",
    "DuplicateError",
    "AlreadyExistsError",
    "AuthenticationError",
    "InvalidPasswordError",
    "StorageError",
    "FileOpenError",
    "FileLockError",
    "FileWriteError",
    "FileCloseError",
]
