"""Tests pour le format des enregistrements."""

import pytest

from linux_auth_utils.credentials.records import (
    DEFAULT_SEPARATOR,
    RECORD_MARKER,
    Record,
    line_id,
    validate_separator,
)


class TestRecord:
    """Tests de la serialisation d'un enregistrement."""

    def test_to_line_default_separator(self):
        record = Record("alice", "$argon2id$v=19$hash")

        assert record.to_line() == "alice\t$argon2id$v=19$hash\t|\n"

    def test_to_line_custom_separator(self):
        record = Record("alice", "h")

        assert record.to_line(":") == "alice:h:|\n"

    def test_from_line_well_formed(self):
        record = Record.from_line("bob\t$2b$12$abc\t|\n")

        assert record == Record("bob", "$2b$12$abc")

    def test_from_line_crlf(self):
        assert Record.from_line("bob\thash\t|\r\n") == Record("bob", "hash")

    @pytest.mark.parametrize("line", [
        "bob\thash\n",
        "bob\thash\tX\n",
        "bob\t\t|\n",
        "bob\tha\tsh\t|\n",
        "bob\n",
        "\n",
    ])
    def test_from_line_malformed(self, line):
        assert Record.from_line(line) is None

    def test_immutable(self):
        record = Record("alice", "h")
        with pytest.raises(Exception):
            record.user_id = "bob"  # type: ignore[misc]


class TestLineId:
    """Tests de l'extraction du champ identifiant."""

    def test_exact_prefix_field(self):
        assert line_id("alice\thash\t|\n") == "alice"

    def test_no_substring_match(self):
        assert line_id("alice2\thash\t|\n") != "alice"

    def test_line_without_separator(self):
        assert line_id("alice\n") is None

    def test_custom_separator(self):
        assert line_id("alice:hash:|\n", ":") == "alice"


class TestValidateSeparator:
    """Tests pour validate_separator."""

    @pytest.mark.parametrize("separator", ["\t", ":", ";", " ", "\x1f"])
    def test_valid(self, separator):
        assert validate_separator(separator) == separator

    @pytest.mark.parametrize("separator", [
        "", "::", "a", "7", ".", "@", "-", "_", "$", "=", ",", "+", "/",
        RECORD_MARKER, "\n", "\r",
    ])
    def test_invalid(self, separator):
        with pytest.raises(ValueError):
            validate_separator(separator)

    def test_default_is_tab(self):
        assert DEFAULT_SEPARATOR == "\t"
