"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ghsync.clients.exceptions import ConfigurationError
from ghsync.config.models import ProviderConfig
from ghsync.security.validation import sanitize_log_input, validate_environment_variable_name


class EnvironmentVariableError(ConfigurationError):
    """Raised when environment variable substitution fails."""
    pass


# Environment variables that may be referenced from the configuration file
ALLOWED_ENV_VARS: Set[str] = {
    "GITHUB_TOKEN",
    "GITHUB_OWNER",
    "GITHUB_ORGANIZATION",
    "GITHUB_BASE_URL",
    "GITHUB_RATE_LIMIT_PER_MINUTE",
    "LOG_LEVEL",
    "LOG_FORMAT",
}


def _validate_env_var_name(var_name: str) -> None:
    """Validate that an environment variable is allowed.

    Raises:
        ConfigurationError: If the name is malformed or not in the allowlist
    """
    if not validate_environment_variable_name(var_name):
        raise ConfigurationError(
            f"Invalid environment variable name format: '{sanitize_log_input(var_name)}'"
        )

    if var_name not in ALLOWED_ENV_VARS:
        raise ConfigurationError(
            f"Environment variable '{sanitize_log_input(var_name)}' is not in allowlist. "
            f"Allowed variables: {sorted(ALLOWED_ENV_VARS)}"
        )


class ConfigLoader:
    """Configuration loader with environment variable substitution."""

    # ${VAR_NAME} or ${VAR_NAME:default_value}
    ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*?)(?::([^}]*))?\}')

    def load_config(self, config_path: Path) -> ProviderConfig:
        """Load and validate configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Validated ProviderConfig instance

        Raises:
            ConfigurationError: If loading or validation fails
        """
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        # Existing environment variables take precedence over .env values
        load_dotenv(override=False)

        with open(config_path, 'r', encoding='utf-8') as f:
            raw_content = f.read()

        substituted_content = self._substitute_env_vars(raw_content)

        try:
            config_data = yaml.safe_load(substituted_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError("Configuration file must contain a YAML object")

        return load_config_from_dict(config_data)

    def _substitute_env_vars(self, content: str) -> str:
        """Substitute environment variables in the content.

        Supports ``${VAR_NAME}`` (required) and ``${VAR_NAME:default}``.

        Raises:
            EnvironmentVariableError: If required environment variables are missing
            ConfigurationError: If a variable is not allowed
        """
        missing_vars = []

        def replace_env_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            _validate_env_var_name(var_name)

            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value.strip()
            elif default_value is not None:
                return default_value.strip()
            missing_vars.append(var_name)
            return match.group(0)

        result = self.ENV_VAR_PATTERN.sub(replace_env_var, content)

        if missing_vars:
            if len(missing_vars) == 1:
                raise EnvironmentVariableError(
                    f"Required environment variable '{missing_vars[0]}' is not set"
                )
            raise EnvironmentVariableError(
                f"Required environment variables are not set: {', '.join(sorted(missing_vars))}"
            )

        return result


def load_config_from_dict(config_data: Dict[str, Any]) -> ProviderConfig:
    """Load configuration from dictionary.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return ProviderConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file by searching up directory tree.

    Searches for ``ghsync.yaml``, ``ghsync.yml``, ``config.yaml`` and
    ``config.yml`` in that order.

    Args:
        start_path: Directory to start search from (defaults to current directory)

    Returns:
        Path to configuration file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    config_filenames = [
        "ghsync.yaml",
        "ghsync.yml",
        "config.yaml",
        "config.yml",
    ]

    current_path = start_path.resolve()

    while True:
        for filename in config_filenames:
            config_path = current_path / filename
            if config_path.exists():
                return config_path

        parent = current_path.parent
        if parent == current_path:
            break
        current_path = parent

    return None
