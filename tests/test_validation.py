"""Tests pour le module validation."""

from unittest.mock import patch

import pytest

from linux_auth_utils.errors import (
    EmptyValueError,
    InvalidCharactersError,
    LengthOutOfRangeError,
    ValidationError,
)
from linux_auth_utils.validation import (
    IdentifierValidator,
    PasswordValidator,
    PathCheckerPermission,
    Validator,
    validate_id,
    validate_password,
)


class TestValidateId:
    """Tests pour validate_id."""

    @pytest.mark.parametrize("user_id", [
        "ab",
        "a" * 32,
        "alice",
        "alice.smith@example.com",
        "user_01-x",
    ])
    def test_valid_ids(self, user_id):
        assert validate_id(user_id) == user_id

    @pytest.mark.parametrize("user_id", ["", None])
    def test_empty(self, user_id):
        with pytest.raises(EmptyValueError, match="vide"):
            validate_id(user_id)

    @pytest.mark.parametrize("user_id", ["a", "a" * 33])
    def test_length_out_of_range(self, user_id):
        with pytest.raises(LengthOutOfRangeError, match="entre 2 et 32"):
            validate_id(user_id)

    @pytest.mark.parametrize("user_id", [
        "alice bob",
        "alice\tbob",
        "alice\n",
        "al|ce",
        "ali$e",
        "élise",
        "a/b",
    ])
    def test_invalid_characters(self, user_id):
        with pytest.raises(InvalidCharactersError):
            validate_id(user_id)

    def test_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            validate_id("x")


class TestValidatePassword:
    """Tests pour validate_password."""

    @pytest.mark.parametrize("password", [
        "a" * 8,
        "a" * 72,
        "pass word\twith tabs",
        "motdepassé",
    ])
    def test_valid_passwords(self, password):
        assert validate_password(password) == password

    @pytest.mark.parametrize("password", ["", None])
    def test_empty(self, password):
        with pytest.raises(EmptyValueError):
            validate_password(password)

    @pytest.mark.parametrize("password", ["a" * 7, "a" * 73])
    def test_length_out_of_range(self, password):
        with pytest.raises(LengthOutOfRangeError, match="entre 8 et 72"):
            validate_password(password)

    def test_custom_upper_bound(self):
        with pytest.raises(LengthOutOfRangeError, match="entre 8 et 16"):
            validate_password("a" * 17, max_length=16)


class TestValidatorClasses:
    """Tests des validateurs injectables."""

    def test_identifier_validator(self):
        validator = IdentifierValidator("alice")
        assert isinstance(validator, Validator)
        validator.validate()

    def test_identifier_validator_invalid(self):
        with pytest.raises(LengthOutOfRangeError):
            IdentifierValidator("a").validate()

    def test_password_validator_uses_max_length(self):
        PasswordValidator("a" * 20).validate()
        with pytest.raises(LengthOutOfRangeError):
            PasswordValidator("a" * 20, max_length=12).validate()


class TestPathCheckerPermission:
    """Tests pour PathCheckerPermission."""

    def test_validate_accessible_paths(self, tmp_path):
        PathCheckerPermission([str(tmp_path / "passwd")]).validate()

    def test_validate_nonexistent_directory(self):
        checker = PathCheckerPermission(["/nonexistent/dir/passwd"])
        with pytest.raises(ValueError, match="n'existe pas"):
            checker.validate()

    def test_validate_no_write_permission(self, tmp_path):
        checker = PathCheckerPermission([str(tmp_path / "passwd")])
        with patch("os.access", return_value=False):
            with pytest.raises(PermissionError, match="insuffisantes"):
                checker.validate()
