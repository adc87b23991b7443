"""Click-based CLI entry point for userpurge."""

import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core.exceptions import UserPurgeError
from ..utils.rich_utils import get_console, install_rich_tracebacks
from .commands import OperationHandler


def _csv_options(func):
    """Options shared by every command that reads an uploaded CSV."""
    func = click.option(
        "--dedupe", is_flag=True, help="Drop repeated usernames, keeping the first"
    )(func)
    func = click.option(
        "--header", is_flag=True, help="Skip the first row of the CSV file"
    )(func)
    func = click.option(
        "--keep-upload",
        is_flag=True,
        help="Keep the staged copy of the uploaded file",
    )(func)
    return func


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """userpurge - bulk delete user accounts listed in a CSV file."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
)
@_csv_options
def validate(input_file: str, header: bool, dedupe: bool, keep_upload: bool) -> None:
    """Upload and validate a CSV of usernames without deleting anything."""
    handler = OperationHandler(
        has_header=header, deduplicate=dedupe, keep_uploads=keep_upload
    )
    if not handler.handle_validate(Path(input_file)):
        sys.exit(1)


@cli.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
)
@click.argument("env", type=click.Choice(["dev", "prod"]), default="dev")
@click.option(
    "--store-file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    help="Use a JSON user store file instead of the remote user store",
)
@click.option(
    "--skip-inactive", is_flag=True, help="Leave inactive accounts in place"
)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.option(
    "--details", is_flag=True, help="List the outcome for every account"
)
@_csv_options
def delete(
    input_file: str,
    env: str,
    store_file: str | None,
    skip_inactive: bool,
    yes: bool,
    details: bool,
    header: bool,
    dedupe: bool,
    keep_upload: bool,
) -> None:
    """Validate a CSV of usernames and delete the matching accounts."""
    handler = OperationHandler(
        has_header=header,
        deduplicate=dedupe,
        skip_inactive=skip_inactive,
        keep_uploads=keep_upload,
    )
    try:
        summary = handler.handle_delete(
            Path(input_file),
            env,
            store_file=Path(store_file) if store_file else None,
            assume_yes=yes,
            show_outcomes=details,
        )
    except UserPurgeError as e:
        get_console().print(f"[error]Error: {escape(str(e))}[/error]")
        sys.exit(1)

    if summary is None or summary.has_failures:
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI application."""
    install_rich_tracebacks()
    try:
        cli()
    except KeyboardInterrupt:
        get_console().print("\n[warning]Operation interrupted by user.[/warning]")
        sys.exit(0)


if __name__ == "__main__":
    main()
