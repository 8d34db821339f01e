"""Input validation and sanitization utilities."""

import re
from typing import Any, Callable, List, Sequence, Tuple
from urllib.parse import urlparse

# Validators follow the (warnings, errors) convention of schema-level field checks.
ValidationResult = Tuple[List[str], List[ValueError]]
FieldValidator = Callable[[Any, str], ValidationResult]

# ASCII digits only, with an optional sign; no whitespace or underscores
_BASE10_PATTERN = re.compile(r"[+-]?[0-9]+")


def sanitize_log_input(data: Any) -> Any:
    """Sanitize data before logging to prevent log injection attacks.

    Args:
        data: Data to be logged (string, dict, list, or other types)

    Returns:
        Sanitized data safe for logging
    """
    if isinstance(data, str):
        # Remove or escape dangerous characters that could be used for log injection
        sanitized = data.replace('\n', '\\n').replace('\r', '\\r')
        sanitized = sanitized.replace('\t', '\\t')

        # Remove ANSI escape sequences that could be used to manipulate terminal output
        ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
        sanitized = ansi_escape.sub('', sanitized)

        # Truncate extremely long strings to prevent log flooding
        if len(sanitized) > 1000:
            sanitized = sanitized[:997] + "..."

        return sanitized

    elif isinstance(data, dict):
        return {key: sanitize_log_input(value) for key, value in data.items()}

    elif isinstance(data, list):
        return [sanitize_log_input(item) for item in data]

    else:
        # For other types, convert to string and sanitize
        return sanitize_log_input(str(data))


def parse_base10_int(value: str) -> int:
    """Parse a strict base-10 integer string.

    Raises:
        ValueError: If the value is not an optionally signed run of ASCII digits
    """
    if not _BASE10_PATTERN.fullmatch(value):
        raise ValueError(f"invalid base-10 integer: {value!r}")
    return int(value, 10)


def validate_numeric_id(value: Any, key: str) -> ValidationResult:
    """Check that a field holds a base-10 integer encoded as a string.

    Args:
        value: Field value to check
        key: Field name, used in error messages

    Returns:
        Tuple of (warnings, errors); errors holds one entry on failure
    """
    warnings: List[str] = []
    errors: List[ValueError] = []

    if not isinstance(value, str):
        errors.append(ValueError(f"expected type of {key} to be string"))
        return warnings, errors

    try:
        parse_base10_int(value)
    except ValueError:
        errors.append(ValueError(f"{key} must be a numerical ID, got {value!r}"))

    return warnings, errors


def validate_value(allowed: Sequence[str]) -> FieldValidator:
    """Build a validator accepting only members of ``allowed``.

    Args:
        allowed: Permitted string values

    Returns:
        Validator returning (warnings, errors)
    """
    allowed_values = list(allowed)

    def validator(value: Any, key: str) -> ValidationResult:
        errors: List[ValueError] = []
        if value not in allowed_values:
            errors.append(
                ValueError(f"{value!r} is an invalid value for argument {key}. "
                           f"Valid values are {allowed_values}")
            )
        return [], errors

    return validator


def validate_api_token(token: str) -> bool:
    """Validate GitHub API token format.

    Accepts fine-grained (``github_pat_``) and prefixed (``ghp_``, ``gho_``,
    ``ghu_``, ``ghs_``, ``ghr_``) tokens as well as classic 40-character hex tokens.

    Args:
        token: API token to validate

    Returns:
        True if token format is valid, False otherwise
    """
    if not isinstance(token, str):
        return False

    token = token.strip()

    prefixed_pattern = re.compile(r'^(gh[pousr]_[A-Za-z0-9]{20,255}|github_pat_[A-Za-z0-9_]{20,255})$')
    classic_pattern = re.compile(r'^[0-9a-fA-F]{40}$')

    return bool(prefixed_pattern.match(token) or classic_pattern.match(token))


def validate_url(url: str, allowed_schemes: List[str] = None) -> bool:
    """Validate URL format and scheme.

    Args:
        url: URL to validate
        allowed_schemes: List of allowed URL schemes (default: ["https", "http"])

    Returns:
        True if URL is valid, False otherwise
    """
    if not isinstance(url, str):
        return False

    if allowed_schemes is None:
        allowed_schemes = ["https", "http"]

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    if parsed.scheme.lower() not in [s.lower() for s in allowed_schemes]:
        return False

    if not parsed.netloc:
        return False

    if any(char in url for char in ['"', "'", '<', '>', '`']):
        return False

    return True


def validate_file_path(file_path: str) -> bool:
    """Validate file path for security vulnerabilities.

    Args:
        file_path: File path to validate

    Returns:
        True if file path is safe, False otherwise
    """
    if not isinstance(file_path, str) or not file_path.strip():
        return False

    normalized_path = file_path.strip()

    # Check for directory traversal attacks
    dangerous_patterns = ['../', '..\\', '/./', '/..', '\\..', '${']
    for pattern in dangerous_patterns:
        if pattern in normalized_path:
            return False

    if '\x00' in normalized_path:
        return False

    if len(normalized_path) > 4096:
        return False

    dangerous_chars = ['<', '>', '|', '*', '?', '"']
    if any(char in normalized_path for char in dangerous_chars):
        return False

    return True


def validate_environment_variable_name(var_name: str) -> bool:
    """Validate environment variable name format.

    Args:
        var_name: Environment variable name to validate

    Returns:
        True if variable name is valid, False otherwise
    """
    if not isinstance(var_name, str) or not var_name:
        return False

    # Letters, digits, and underscores only, cannot start with digit
    if not re.match(r'^[A-Za-z_][A-Za-z0-9_]*$', var_name):
        return False

    return len(var_name) <= 255


def validate_organization_name(org_name: str) -> bool:
    """Validate GitHub organization login format.

    Args:
        org_name: Organization login to validate

    Returns:
        True if the login is valid, False otherwise
    """
    if not isinstance(org_name, str):
        return False

    # Alphanumeric with single inner hyphens, at most 39 characters
    if not re.match(r'^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$', org_name):
        return False

    return True
