"""Security utilities for input validation and sanitization."""

from .validation import (
    parse_base10_int,
    sanitize_log_input,
    validate_api_token,
    validate_numeric_id,
    validate_url,
    validate_value,
)

__all__ = [
    "parse_base10_int",
    "sanitize_log_input",
    "validate_api_token",
    "validate_numeric_id",
    "validate_url",
    "validate_value",
]
