"""Configuration models for github-team-sync."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, HttpUrl, SecretStr, field_validator

from ghsync.security.validation import (
    validate_numeric_id,
    validate_organization_name,
    validate_value,
)

MEMBERSHIP_ROLES = ["member", "maintainer"]

_validate_role = validate_value(MEMBERSHIP_ROLES)


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"


class GitHubConfig(BaseModel):
    """GitHub API configuration."""

    token: SecretStr = Field(
        ...,
        description="GitHub token with admin:org scope"
    )
    organization: str | None = Field(
        None,
        description="Organization login; leave unset for an individual account"
    )
    base_url: HttpUrl = Field(
        HttpUrl("https://api.github.com"),
        description="GitHub API URL"
    )
    timeout_seconds: int = Field(
        30,
        description="Timeout for GitHub API calls in seconds",
        ge=1
    )
    rate_limit_per_minute: int = Field(
        80,
        description="Rate limit for GitHub API calls per minute",
        ge=1
    )

    @field_validator("organization")
    @classmethod
    def validate_organization(cls, v: str | None) -> str | None:
        """Validate organization login format."""
        if v is not None and not validate_organization_name(v):
            raise ValueError(f"Invalid GitHub organization name: {v!r}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(
        LogLevel.INFO,
        description="Logging level"
    )
    format: LogFormat = Field(
        LogFormat.TEXT,
        description="Log output format"
    )


class TeamMembershipConfig(BaseModel):
    """A declared team membership."""

    team_id: str = Field(..., description="Numeric team ID")
    user_id: str = Field(..., description="Numeric user ID")
    role: str = Field("member", description="Role of the user in the team")

    @field_validator("team_id", "user_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        """IDs must be numeric strings."""
        _, errors = validate_numeric_id(v, info.field_name)
        if errors:
            raise errors[0]
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str, info) -> str:
        _, errors = _validate_role(v, info.field_name)
        if errors:
            raise errors[0]
        return v


class ProviderConfig(BaseModel):
    """Main provider configuration."""

    github: GitHubConfig = Field(
        ...,
        description="GitHub API configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )
    memberships: List[TeamMembershipConfig] = Field(
        default_factory=list,
        description="Declared team memberships"
    )
