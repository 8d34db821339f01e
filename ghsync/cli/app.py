"""Main CLI application."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

import structlog
import typer
from rich.console import Console

from ghsync.clients.exceptions import APIError, ConfigurationError, ReconcileError
from ghsync.cli.formatters import ConfigFormatter, StateFormatter
from ghsync.config.loader import ConfigLoader, find_config_file
from ghsync.config.models import ProviderConfig, TeamMembershipConfig
from ghsync.core.state import ResourceData
from ghsync.provider import Organization
from ghsync.resources.team_membership import TeamMembershipResource
from ghsync.resources.user import UserResource
from ghsync.security.validation import sanitize_log_input, validate_file_path

console = Console()
logger = structlog.get_logger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="ghsync",
    help="Reconcile GitHub team memberships and users with declared state.",
    rich_markup_mode="rich",
)

ConfigOption = typer.Option(None, "--config", "-c", help="Path to configuration file")


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Setup structured logging.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Log format (json or text).
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, log_level.upper(), logging.INFO))

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_configuration(config_file: Optional[Path] = None) -> ProviderConfig:
    """Load and validate configuration, then configure logging from it.

    Raises:
        typer.Exit: If configuration loading fails
    """
    if config_file is None:
        config_file = find_config_file()
        if config_file is None:
            console.print("[red]Error: No configuration file found[/red]")
            console.print("Please create a ghsync.yaml file or specify --config")
            raise typer.Exit(1)

    if not validate_file_path(str(config_file)):
        console.print(
            f"[red]Error: Invalid or unsafe configuration file path: {sanitize_log_input(str(config_file))}[/red]"
        )
        raise typer.Exit(1)

    try:
        config = ConfigLoader().load_config(config_file)
    except ConfigurationError as e:
        console.print(f"[red]Error loading configuration: {sanitize_log_input(str(e))}[/red]")
        raise typer.Exit(1)

    setup_logging(config.logging.level.value, config.logging.format.value)
    return config


def _run(config_file: Optional[Path], operation: Callable[[Organization, ProviderConfig], Awaitable[T]]) -> T:
    """Run an async operation against the configured organization.

    Reconciliation and API errors are reported and turned into exit code 1.
    """
    config = load_configuration(config_file)

    async def runner() -> T:
        organization = Organization.from_config(config)
        try:
            return await operation(organization, config)
        finally:
            await organization.close()

    try:
        return asyncio.run(runner())
    except (ReconcileError, APIError, ConfigurationError, ValueError) as e:
        logger.error("Operation failed", error=sanitize_log_input(str(e)), error_type=type(e).__name__)
        console.print(f"[red]Error: {sanitize_log_input(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def validate(
    config_file: Optional[Path] = ConfigOption,
    check_connection: bool = typer.Option(
        False,
        "--check-connection",
        help="Also verify that the GitHub API is reachable with the configured token",
    ),
) -> None:
    """Validate configuration file."""
    console.print("[blue]Validating configuration...[/blue]")

    config = load_configuration(config_file)
    ConfigFormatter(console).format_config_summary(config)
    console.print("[green]✓ Configuration is valid[/green]")

    if not check_connection:
        return

    async def check(organization: Organization, config: ProviderConfig) -> bool:
        return await organization.client.health_check()

    if not _run(config_file, check):
        console.print("[red]✗ GitHub API is not reachable[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ GitHub API is reachable[/green]")


@app.command()
def apply(config_file: Optional[Path] = ConfigOption) -> None:
    """Create or update every team membership declared in the configuration."""

    async def apply_memberships(
        organization: Organization, config: ProviderConfig
    ) -> List[Tuple[ResourceData, Optional[str]]]:
        resource = TeamMembershipResource(organization)
        return await apply_declared_memberships(resource, config.memberships)

    results = _run(config_file, apply_memberships)
    StateFormatter(console).format_apply_results(results)

    if any(error for _, error in results):
        raise typer.Exit(1)


async def apply_declared_memberships(
    resource: TeamMembershipResource,
    memberships: List[TeamMembershipConfig],
) -> List[Tuple[ResourceData, Optional[str]]]:
    """Apply declared memberships concurrently, sharing one user directory.

    Returns:
        One (state, error message) pair per declared membership
    """
    datas = [
        resource.new_data(team_id=m.team_id, user_id=m.user_id, role=m.role)
        for m in memberships
    ]

    outcomes = await asyncio.gather(
        *(resource.create_or_update(data) for data in datas),
        return_exceptions=True,
    )

    results = []
    for data, outcome in zip(datas, outcomes):
        if isinstance(outcome, (ReconcileError, APIError)):
            logger.error(
                "Failed to apply team membership",
                team_id=data.get("team_id"),
                user_id=data.get("user_id"),
                error=str(outcome),
            )
            results.append((data, str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append((data, None))
    return results


@app.command("set-membership")
def set_membership(
    team_id: str = typer.Argument(..., help="Numeric team ID"),
    user_id: str = typer.Argument(..., help="Numeric user ID"),
    role: str = typer.Option("member", "--role", "-r", help="member or maintainer"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Add a user to a team or change their role."""

    async def set_one(organization: Organization, config: ProviderConfig) -> ResourceData:
        resource = TeamMembershipResource(organization)
        data = resource.new_data(team_id=team_id, user_id=user_id, role=role)
        errors = resource.validate(data)
        if errors:
            raise ValueError("; ".join(str(e) for e in errors))
        await resource.create(data)
        return data

    StateFormatter(console).format_resource(_run(config_file, set_one))


@app.command("read-membership")
def read_membership(
    resource_id: str = typer.Argument(..., help="Membership ID as <team_id>:<user_id>"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Show the current state of a team membership."""

    async def read_one(organization: Organization, config: ProviderConfig) -> ResourceData:
        resource = TeamMembershipResource(organization)
        data = resource.import_data(resource_id)
        await resource.read(data)
        return data

    StateFormatter(console).format_resource(_run(config_file, read_one))


@app.command("remove-membership")
def remove_membership(
    resource_id: str = typer.Argument(..., help="Membership ID as <team_id>:<user_id>"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Remove a user from a team."""

    async def remove_one(organization: Organization, config: ProviderConfig) -> None:
        resource = TeamMembershipResource(organization)
        await resource.delete(resource.import_data(resource_id))

    _run(config_file, remove_one)
    console.print(f"[green]✓ Removed team membership {sanitize_log_input(resource_id)}[/green]")


@app.command("import-membership")
def import_membership(
    resource_id: str = typer.Argument(..., help="<team slug or ID>:<username or user ID>"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Import an existing team membership and show its state."""

    async def import_one(organization: Organization, config: ProviderConfig) -> ResourceData:
        resource = TeamMembershipResource(organization)
        (data,) = await resource.import_state(resource.import_data(resource_id))
        await resource.read(data)
        return data

    StateFormatter(console).format_resource(_run(config_file, import_one))


@app.command("import-user")
def import_user(
    login: str = typer.Argument(..., help="GitHub username"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Import an existing GitHub user and show its state."""

    async def import_one(organization: Organization, config: ProviderConfig) -> ResourceData:
        resource = UserResource(organization)
        (data,) = await resource.import_state(resource.import_data(login))
        await resource.read(data)
        return data

    StateFormatter(console).format_resource(_run(config_file, import_one))


@app.command("read-user")
def read_user(
    user_id: str = typer.Argument(..., help="Numeric GitHub user ID"),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Show the current state of a GitHub user by numeric ID."""

    async def read_one(organization: Organization, config: ProviderConfig) -> ResourceData:
        resource = UserResource(organization)
        data = resource.import_data(user_id)
        await resource.read(data)
        return data

    StateFormatter(console).format_resource(_run(config_file, read_one))


if __name__ == "__main__":
    app()
