"""Configuration package for github-team-sync."""

from .loader import ConfigLoader, ConfigurationError, find_config_file, load_config_from_dict
from .models import (
    GitHubConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ProviderConfig,
    TeamMembershipConfig,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "find_config_file",
    "load_config_from_dict",
    "GitHubConfig",
    "LogFormat",
    "LoggingConfig",
    "LogLevel",
    "ProviderConfig",
    "TeamMembershipConfig",
]
