import pathlib
from typing import Optional, Sequence

import click
from rich.console import Console

from ... import _conf, generator, validator
from ...charset import PRESETS, STANDARD_CLASSES, CharacterClass, class_of
from ...dto import ClassRule, PolicyRequest
from ...report import Report
from ..common import handle_exception, parse_seed, print_report, read_text_file

__all__ = ["generate"]


def parse_minimum(
    ctx: click.Context, param: click.Parameter, value: Sequence[str]
) -> dict[CharacterClass, int]:
    res: dict[CharacterClass, int] = {}

    for item in value:
        name, sep, num = item.partition("=")
        try:
            if not sep:
                raise ValueError("expected CLASS=N, got %r" % item)
            res[class_of(name)] = int(num)
        except ValueError as ex:
            raise click.BadParameter(str(ex), ctx=ctx, param=param) from ex

    return res


def parse_classes(
    ctx: click.Context, param: click.Parameter, value: Sequence[str]
) -> set[CharacterClass]:
    try:
        return {class_of(name) for name in value}
    except ValueError as ex:
        raise click.BadParameter(str(ex), ctx=ctx, param=param) from ex


def build_request(
    *,
    length: Optional[int],
    count: Optional[int],
    preset: Optional[str],
    toggles: dict[CharacterClass, Optional[bool]],
    custom: Optional[str],
    minimums: dict[CharacterClass, int],
    no_fill: set[CharacterClass],
    exclude: str,
    exclude_ambiguous: bool,
    seed: Optional[str],
) -> PolicyRequest:
    """
    Maps command-line options onto a policy request.

    A ``--min`` enables the class it names. ``--no-fill`` only changes a class
    that is already enabled.

    Raises:
        click.UsageError: ``--min`` names a class switched off with its toggle, or
            ``--no-fill`` names a class that is not enabled.
    """
    enabled = set(PRESETS[preset] if preset else STANDARD_CLASSES)

    for cls, flag in toggles.items():
        if flag is True:
            enabled.add(cls)
        elif flag is False:
            enabled.discard(cls)

    if custom is not None:
        enabled.add(CharacterClass.CUSTOM)

    disabled = {cls for cls, flag in toggles.items() if flag is False}
    if conflict := sorted(minimums.keys() & disabled):
        raise click.UsageError(
            "--min names class(es) disabled on the command line: %s"
            % ", ".join(conflict)
        )
    enabled |= minimums.keys()

    if not_enabled := sorted(no_fill - enabled):
        raise click.UsageError(
            "--no-fill names class(es) that are not enabled: %s"
            % ", ".join(not_enabled)
        )

    return PolicyRequest(
        length=length,
        count=count,
        classes={
            cls: ClassRule(min_chars=minimums.get(cls, 1), fill=cls not in no_fill)
            for cls in CharacterClass
            if cls in enabled
        },
        custom_charset=custom or "",
        exclude=exclude,
        exclude_ambiguous=exclude_ambiguous,
        seed=parse_seed(seed),
    )


@click.command()
@click.option(
    "-l",
    "--length",
    type=int,
    help="Number of characters in each password. [default: 16]",
)
@click.option(
    "-n",
    "--count",
    type=int,
    help="Number of passwords to generate. [default: 1]",
)
@click.option(
    "-p",
    "--preset",
    type=click.Choice(tuple(PRESETS)),
    help=(
        "Start from a predefined set of character classes instead of all four "
        "standard ones. Class toggles are applied on top of the preset."
    ),
)
@click.option("--lowercase/--no-lowercase", default=None, help="Use a-z.")
@click.option("--uppercase/--no-uppercase", default=None, help="Use A-Z.")
@click.option("--digits/--no-digits", default=None, help="Use 0-9.")
@click.option("--symbols/--no-symbols", default=None, help="Use punctuation.")
@click.option(
    "--custom",
    help="Use the given characters as an additional, custom character class.",
)
@click.option(
    "-f",
    "--custom-file",
    type=click.Path(
        dir_okay=False,
        exists=True,
        readable=True,
        path_type=pathlib.Path,
    ),
    callback=read_text_file,
    help=(
        "Read the custom character class from a UTF-8 text file. Whitespace is "
        "ignored."
    ),
)
@click.option(
    "-m",
    "--min",
    "minimums",
    multiple=True,
    metavar="CLASS=N",
    callback=parse_minimum,
    help=(
        "Require at least N characters from CLASS in every password (can be "
        "repeated). Use 0 to make a class optional. [default: 1 per class]"
    ),
)
@click.option(
    "--no-fill",
    multiple=True,
    metavar="CLASS",
    callback=parse_classes,
    help=(
        "Use CLASS only to satisfy its minimum, never to fill the rest of the "
        "password (can be repeated)."
    ),
)
@click.option(
    "-x",
    "--exclude",
    default="",
    help="Characters that must never appear in a password.",
)
@click.option(
    "-a",
    "--exclude-ambiguous",
    is_flag=True,
    default=False,
    help="Exclude look-alike characters such as 0, O, 1, l and I.",
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
def generate(
    ctx: click.Context,
    length: Optional[int],
    count: Optional[int],
    preset: Optional[str],
    lowercase: Optional[bool],
    uppercase: Optional[bool],
    digits: Optional[bool],
    symbols: Optional[bool],
    custom: Optional[str],
    custom_file: Optional[str],
    minimums: dict[CharacterClass, int],
    no_fill: set[CharacterClass],
    exclude: str,
    exclude_ambiguous: bool,
    seed: Optional[str],
    report: bool,
) -> None:
    """
    Generate random passwords.

    By default every password has 16 characters and contains at least one
    lowercase letter, one uppercase letter, one digit and one symbol.

    Examples:

    \b
      # Generate three 24 character passwords
      $ pass-gen generate -l 24 -n 3
    \b
      # A PIN without ambiguous digits
      $ pass-gen generate -p number -l 6 -x 01
    \b
      # At least two symbols, but letters and digits for the rest
      $ pass-gen generate -m symbols=2 --no-fill symbols
    """
    if not (settings := ctx.find_object(_conf.Settings)):
        raise RuntimeError("Configuration not found")

    if custom_file is not None:
        custom = (custom or "") + "".join(custom_file.split())

    request = build_request(
        length=length,
        count=count,
        preset=preset,
        toggles={
            CharacterClass.LOWERCASE: lowercase,
            CharacterClass.UPPERCASE: uppercase,
            CharacterClass.DIGITS: digits,
            CharacterClass.SYMBOLS: symbols,
        },
        custom=custom,
        minimums=minimums,
        no_fill=no_fill,
        exclude=exclude,
        exclude_ambiguous=exclude_ambiguous,
        seed=seed,
    )

    try:
        policy = validator.validate(request, settings=settings)

        if report:
            print_report(Report.from_policy(policy), Console(stderr=True))

        passwords = generator.generate(policy)
    except Exception as ex:
        handle_exception(ex)

    for password in passwords:
        click.echo(password)
