"""Tests pour le protocole de reponse."""

import threading
from unittest.mock import MagicMock

from linux_auth_utils.errors import (
    ApplicationError,
    UserNotFoundError,
)
from linux_auth_utils.responses import (
    AuthResult,
    confirm,
    reject,
    reply,
    returns_result,
)


class TestAuthResult:
    """Tests d'AuthResult et des fabriques."""

    def test_bool_follows_flag(self):
        assert AuthResult(True, "ok")
        assert not AuthResult(False, "ko")

    def test_confirm_defaults(self):
        result = confirm()
        assert result.ok is True
        assert result.message == "Confirmation auth"
        assert result.value is None
        assert result.error is None

    def test_confirm_with_value(self):
        result = confirm("alice", value="alice")
        assert result.message == "alice"
        assert result.value == "alice"

    def test_reject_defaults(self):
        result = reject()
        assert result.ok is False
        assert result.message == "Rejet auth"

    def test_reply_uses_truthiness(self):
        assert reply(1).ok is True
        assert reply(0).ok is False
        assert reply("", None).message == "Rejet auth"
        assert reply("x", None).message == "Confirmation auth"
        assert reply(True, "msg", value=3).value == 3

    def test_from_error(self):
        error = UserNotFoundError("check_id: ID bob non confirme")
        result = AuthResult.from_error(error)
        assert not result
        assert result.message == "check_id: ID bob non confirme"
        assert result.error is error

    def test_flag_derivable_from_full_result(self):
        result = reject("check_pwd: mot de passe invalide")
        ok, message = result.ok, result.message
        assert ok is bool(result)
        assert "invalide" in message


class _Service:
    """Service minimal utilisant returns_result."""

    def __init__(self, logger=None):
        self._logger = logger
        self._mutex = threading.RLock()

    @returns_result
    def succeed(self):
        return confirm("fait")

    @returns_result
    def fail_known(self):
        raise UserNotFoundError("introuvable")

    @returns_result
    def fail_unknown(self):
        raise RuntimeError("boom")

    @returns_result
    def holds_mutex(self):
        return reply(self._mutex._is_owned(), "verrou")


class TestReturnsResult:
    """Tests du decorateur returns_result."""

    def test_passes_result_through(self):
        assert _Service().succeed().message == "fait"

    def test_application_error_becomes_result(self):
        result = _Service().fail_known()
        assert not result
        assert isinstance(result.error, ApplicationError)
        assert result.message == "introuvable"

    def test_unexpected_error_is_logged_and_converted(self):
        logger = MagicMock()
        result = _Service(logger=logger).fail_unknown()
        assert not result
        assert "boom" in result.message
        logger.log_error.assert_called_once()

    def test_runs_under_instance_mutex(self):
        assert _Service().holds_mutex().ok is True

    def test_without_mutex_attribute(self):
        class Bare:
            @returns_result
            def run(self):
                return confirm()

        assert Bare().run()
