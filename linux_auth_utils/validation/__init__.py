"""Module de validation."""

from linux_auth_utils.validation.base import Validator
from linux_auth_utils.validation.credentials import (
    MAX_ID_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_ID_LENGTH,
    MIN_PASSWORD_LENGTH,
    IdentifierValidator,
    PasswordValidator,
    validate_id,
    validate_password,
)
from linux_auth_utils.validation.path_checker_permission import (
    PathCheckerPermission,
)

__all__ = [
    "Validator",
    "IdentifierValidator",
    "PasswordValidator",
    "PathCheckerPermission",
    "validate_id",
    "validate_password",
    "MIN_ID_LENGTH",
    "MAX_ID_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "MAX_PASSWORD_LENGTH",
]
