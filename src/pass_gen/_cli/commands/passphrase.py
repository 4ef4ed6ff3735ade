import pathlib
from typing import Optional

import click
from rich.console import Console

from ... import _conf, generator, validator
from ...dto import PassphraseRequest
from ...report import Report
from ..common import handle_exception, parse_seed, print_report, read_text_file

__all__ = ["passphrase"]


@click.command()
@click.option(
    "-w",
    "--words",
    "word_count",
    type=int,
    help="Number of words in each passphrase. [default: 6]",
)
@click.option(
    "-n",
    "--count",
    type=int,
    help="Number of passphrases to generate. [default: 1]",
)
@click.option(
    "-s",
    "--sep",
    "separator",
    help="Text placed between words. [default: -]",
)
@click.option(
    "-f",
    "--file",
    "word_file",
    type=click.Path(
        dir_okay=False,
        exists=True,
        readable=True,
        path_type=pathlib.Path,
    ),
    callback=read_text_file,
    help=(
        "Draw words from a UTF-8 text file with one word per line instead of the "
        "built-in list. Blank lines and repeated words are skipped."
    ),
)
@click.option(
    "--seed",
    help=(
        "Make the output reproducible. The output is NOT SECURE and must only be "
        "used for testing."
    ),
)
@click.option(
    "-r",
    "--report",
    is_flag=True,
    default=False,
    help="Print the estimated entropy and guess times to standard error.",
)
@click.pass_context
def passphrase(
    ctx: click.Context,
    word_count: Optional[int],
    count: Optional[int],
    separator: Optional[str],
    word_file: Optional[str],
    seed: Optional[str],
    report: bool,
) -> None:
    """
    Generate random passphrases.

    Every word is picked independently and uniformly from the word list, so
    words may repeat within a passphrase.

    Examples:

    \b
      # Six words joined with dashes
      $ pass-gen passphrase
    \b
      # Four words separated by spaces, from your own list
      $ pass-gen passphrase -w 4 -s " " -f words.txt
    """
    if not (settings := ctx.find_object(_conf.Settings)):
        raise RuntimeError("Configuration not found")

    request = PassphraseRequest(
        word_count=word_count,
        count=count,
        separator=separator,
        words=word_file.splitlines() if word_file is not None else None,
        seed=parse_seed(seed),
    )

    try:
        policy = validator.validate_passphrase(request, settings=settings)

        if report:
            print_report(Report.from_passphrase_policy(policy), Console(stderr=True))

        passphrases = generator.generate_passphrases(policy)
    except Exception as ex:
        handle_exception(ex)

    for phrase in passphrases:
        click.echo(phrase)
