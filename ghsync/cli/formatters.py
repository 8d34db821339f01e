"""Output formatters for CLI commands."""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from ghsync.config.models import ProviderConfig
from ghsync.core.state import ResourceData
from ghsync.security.validation import sanitize_log_input


class StateFormatter:
    """Formats resource state for display."""

    def __init__(self, console: Console):
        self.console = console

    def format_resource(self, data: ResourceData) -> None:
        """Display the ID and attributes of one resource."""
        if not data.exists():
            self.console.print(
                f"[yellow]{data.resource_type} no longer exists in GitHub and was dropped from state[/yellow]"
            )
            return

        table = Table(title=sanitize_log_input(data.resource_type))
        table.add_column("Attribute", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("id", sanitize_log_input(data.id))
        for key, value in sorted(data.attributes.items()):
            table.add_row(sanitize_log_input(key), sanitize_log_input("" if value is None else str(value)))

        self.console.print(table)

    def format_apply_results(self, results: List[Tuple[ResourceData, Optional[str]]]) -> None:
        """Display the outcome of applying declared memberships."""
        if not results:
            self.console.print("[yellow]No memberships declared[/yellow]")
            return

        table = Table(title="Team Memberships")
        table.add_column("Team", style="cyan")
        table.add_column("User", style="magenta")
        table.add_column("Role", style="white")
        table.add_column("Status", style="green")

        for data, error in results:
            status = "[red]failed[/red]: " + sanitize_log_input(error) if error else "[green]ok[/green]"
            table.add_row(
                sanitize_log_input(str(data.get("team_id"))),
                sanitize_log_input(str(data.get("username") or data.get("user_id"))),
                sanitize_log_input(str(data.get("role"))),
                status,
            )

        self.console.print(table)


class ConfigFormatter:
    """Formats configuration information for display."""

    def __init__(self, console: Console):
        self.console = console

    def format_config_summary(self, config: ProviderConfig) -> None:
        """Display configuration summary."""
        table = Table(title="Configuration Summary")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("API URL", sanitize_log_input(str(config.github.base_url)))
        table.add_row("Organization", sanitize_log_input(config.github.organization or "(individual account)"))
        table.add_row("Rate Limit", f"{config.github.rate_limit_per_minute}/min")
        table.add_row("Timeout", f"{config.github.timeout_seconds}s")
        table.add_row("Log Level", config.logging.level.value)
        table.add_row("Declared Memberships", str(len(config.memberships)))

        self.console.print(table)
