"""CLI error handling helpers."""

import click
import structlog

from payledger.domain.errors import DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a ledger error to stderr and exit with status 1."""
    logger.info(
        "cli_command_failed",
        command=ctx.command_path,
        error_type=type(error).__name__,
        error=str(error),
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
