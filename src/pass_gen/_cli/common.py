import logging
import pathlib
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.table import Table

from .. import exc
from ..policy import Seed
from ..report import Report
from .exc import UNEXPECTED_EXIT_CODE, CLIError

__all__ = (
    "handle_exception",
    "parse_seed",
    "print_report",
    "raise_unexpected_exc",
    "read_text_file",
)


logger = logging.getLogger(__name__)


def raise_unexpected_exc(ex: Exception) -> NoReturn:
    logger.debug(ex, exc_info=ex)
    raise CLIError("Unexpected error: %r" % ex, exit_code=UNEXPECTED_EXIT_CODE) from ex


def handle_exception(ex: Exception) -> NoReturn:
    if isinstance(ex, exc.ApplicationError):
        raise CLIError.from_application_error(ex) from ex

    if isinstance(ex, CLIError):
        raise ex

    raise_unexpected_exc(ex)


def read_text_file(
    ctx: click.Context, param: click.Parameter, value: Optional[pathlib.Path]
) -> Optional[str]:
    if value is None:
        return None

    try:
        return value.read_text(encoding="utf-8")
    except UnicodeDecodeError as ex:
        raise click.BadParameter(
            "%s is not valid UTF-8 text (byte %d)"
            % (click.format_filename(value), ex.start),
            ctx=ctx,
            param=param,
        ) from ex
    except OSError as ex:
        raise click.BadParameter(
            "cannot read %s: %s" % (click.format_filename(value), ex.strerror),
            ctx=ctx,
            param=param,
        ) from ex


def parse_seed(value: Optional[str]) -> Optional[Seed]:
    """Integers seed the random generator as numbers, anything else as text."""
    if value is None:
        return None

    try:
        return int(value)
    except ValueError:
        return value


def print_report(report: Report, console: Console) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="steel_blue3")
    table.add_column()
    table.add_row("pool size", "%d %ss" % (report.pool_size, report.unit))
    table.add_row("entropy per %s" % report.unit, "%.1f bits" % report.bits_per_token)
    table.add_row("total entropy", "%.0f bits" % report.total_bits)
    table.add_row("guess times:", "")
    for guess in report.guess_times:
        table.add_row("  %s" % guess.rate, str(guess))

    console.print(table)
    console.rule()
