"""Display utilities for operator interaction and result display."""

from collections.abc import Iterable, Sequence

import click
from rich.markup import escape
from rich.table import Table

from ..models.workflow import DeletionSummary, Message, OutcomeStatus, Severity
from .rich_utils import get_console

# Rich styles per message severity
SEVERITY_STYLES = {
    Severity.STATUS: "success",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}

OUTCOME_STYLES = {
    OutcomeStatus.DELETED: "success",
    OutcomeStatus.NOT_FOUND: "warning",
    OutcomeStatus.SKIPPED: "muted",
    OutcomeStatus.FAILED: "error",
}

# Candidates listed before the table is truncated
DEFAULT_DISPLAY_LIMIT = 50


def print_section_header(title: str) -> None:
    """Print a formatted section header.

    Args:
        title: Section title
    """
    get_console().rule(f"[info]{escape(title)}[/info]", style="info")


def print_messages(messages: Iterable[Message]) -> None:
    """Print operator messages with a style per severity.

    Args:
        messages: Messages to print, in order
    """
    console = get_console()
    for message in messages:
        style = SEVERITY_STYLES[message.severity]
        label = message.severity.value.upper()
        console.print(f"[{style}]{label}:[/{style}] {escape(message.text)}")


def display_candidates(
    usernames: Sequence[str], limit: int = DEFAULT_DISPLAY_LIMIT
) -> None:
    """Show validated usernames for review before deletion.

    Args:
        usernames: Candidate usernames in file order
        limit: Maximum number of rows to list
    """
    table = Table(title=f"Validated usernames ({len(usernames)})")
    table.add_column("#", justify="right", style="muted")
    table.add_column("Username")

    for index, username in enumerate(usernames[:limit], 1):
        table.add_row(str(index), escape(username))

    console = get_console()
    console.print(table)
    if len(usernames) > limit:
        console.print(f"[muted]... and {len(usernames) - limit} more[/muted]")


def display_summary(summary: DeletionSummary, show_outcomes: bool = False) -> None:
    """Show the result of an execution run.

    Args:
        summary: Summary to display
        show_outcomes: Whether to list every per-account outcome
    """
    console = get_console()

    table = Table(title="Deletion summary", show_header=False)
    table.add_column("Result")
    table.add_column("Count", justify="right")
    table.add_row("[success]Deleted[/success]", str(summary.deleted))
    table.add_row("[warning]Not found[/warning]", str(len(summary.not_found)))
    table.add_row("[muted]Skipped[/muted]", str(summary.skipped))
    table.add_row("[error]Failed[/error]", str(summary.failed))
    console.print(table)

    if not show_outcomes:
        return

    for outcome in summary.outcomes:
        style = OUTCOME_STYLES[outcome.status]
        console.print(f"  [{style}]{escape(str(outcome))}[/{style}]")


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask the operator for confirmation.

    Args:
        message: Message to display
        default: Default answer if the operator just presses Enter

    Returns:
        bool: True if confirmed, False otherwise
    """
    return click.confirm(message, default=default)


def confirm_production_operation(total_users: int) -> bool:
    """Confirm a deletion run against the production user store.

    Args:
        total_users: Number of candidate usernames

    Returns:
        bool: True only if the operator types ``yes``

    Raises:
        ValueError: If total_users is not positive
    """
    if total_users <= 0:
        raise ValueError(f"Total users must be a positive integer, got {total_users}")

    console = get_console()
    console.print(
        f"\nYou are about to delete accounts for [warning]{total_users}[/warning] "
        "usernames in the [error]PRODUCTION[/error] user store."
    )
    console.print("Every account matching a username will be permanently removed.")
    console.print("This action cannot be undone.")

    response = click.prompt(
        "Are you sure you want to proceed? (yes/no)", default="no", show_default=False
    )
    return response.strip().lower() == "yes"
