"""Tests for field validators and input sanitization."""

import pytest

from ghsync.security.validation import (
    sanitize_log_input,
    validate_api_token,
    validate_file_path,
    validate_numeric_id,
    validate_organization_name,
    validate_url,
    validate_value,
)


class TestNumericIDValidator:
    """Test numeric ID validation."""

    @pytest.mark.parametrize("value,error_count", [
        ("1234567", 0),
        # an int is not accepted where a string is expected
        (1234567, 1),
        ("notAnInt", 1),
        ("", 1),
        ("-42", 0),
        ("+42", 0),
        ("1_000", 1),
        (" 42 ", 1),
        ("42\n", 1),
        ("\u0661\u0662", 1),
    ])
    def test_error_count(self, value, error_count):
        warnings, errors = validate_numeric_id(value, "team_id")

        assert warnings == []
        assert len(errors) == error_count

    def test_error_mentions_key(self):
        _, errors = validate_numeric_id("abc", "user_id")
        assert "user_id" in str(errors[0])


class TestValueValidator:
    """Test enumerated value validation."""

    @pytest.mark.parametrize("value,error_count", [
        ("invalid", 1),
        ("valid_one", 0),
        ("valid_two", 0),
    ])
    def test_error_count(self, value, error_count):
        validator = validate_value(["valid_one", "valid_two"])

        _, errors = validator(value, "test_arg")

        assert len(errors) == error_count


class TestTokenValidation:
    """Test GitHub token format validation."""

    @pytest.mark.parametrize("token,valid", [
        ("ghp_" + "a" * 36, True),
        ("github_pat_" + "A1_" * 20, True),
        ("0123456789abcdef0123456789abcdef01234567", True),
        ("short", False),
        ("ghp_", False),
        (None, False),
    ])
    def test_validate_api_token(self, token, valid):
        assert validate_api_token(token) is valid


class TestMiscValidation:
    """Test URL, path and organization validation."""

    def test_validate_url(self):
        assert validate_url("https://api.github.com", allowed_schemes=["https"])
        assert not validate_url("http://api.github.com", allowed_schemes=["https"])
        assert not validate_url("https://")

    def test_validate_file_path(self):
        assert validate_file_path("config/ghsync.yaml")
        assert not validate_file_path("../etc/passwd")
        assert not validate_file_path("")

    @pytest.mark.parametrize("name,valid", [
        ("my-org", True),
        ("MyOrg123", True),
        ("-leading", False),
        ("double--hyphen", False),
        ("a" * 40, False),
    ])
    def test_validate_organization_name(self, name, valid):
        assert validate_organization_name(name) is valid

    def test_sanitize_log_input(self):
        assert sanitize_log_input("line1\nline2") == "line1\\nline2"
        assert sanitize_log_input({"key": "a\tb"}) == {"key": "a\\tb"}
        assert len(sanitize_log_input("x" * 2000)) == 1000
