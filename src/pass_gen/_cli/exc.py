import pathlib
from dataclasses import dataclass
from typing import NotRequired, TypedDict

import click
from typing_extensions import override

from .. import exc

__all__ = (
    "EXIT_CODES",
    "CLIError",
    "ConfigError",
    "ConfigSyntaxError",
    "ConfigValidationError",
)

# Allowed exit codes are defined in the Advanced Bash-Scripting Guide at
# https://tldp.org/LDP/abs/html/exitcodes.html, user-defined ones are 64 - 113.
EXIT_CODES: dict[type[exc.ApplicationError], int] = {
    exc.MalformedPolicyError: 64,
    exc.EmptyPoolError: 65,
    exc.LengthTooShortError: 66,
    exc.NoClassesEnabledError: 67,
    exc.InvalidCountError: 68,
    exc.InvalidLengthError: 69,
    exc.InvalidMinimumError: 70,
    exc.EntropySourceError: 74,
}
CONFIG_EXIT_CODE = 78
UNEXPECTED_EXIT_CODE = 128


class Location(TypedDict):
    filename: pathlib.Path
    line: NotRequired[int]
    col: NotRequired[int]


@dataclass(slots=True)
class CLIError(click.ClickException):
    """
    Signals that an error has occurred in the application.

    Provides an `exit_code` attribute for specifying a specific exit code, and a
    `message` attribute containing a human-readable description of the error.
    """

    message: str
    exit_code: int = 1

    def __post_init__(self) -> None:
        # click keeps per-instance display settings initialized in __init__
        click.ClickException.__init__(self, self.message)

    @classmethod
    def from_application_error(cls, ex: exc.ApplicationError) -> "CLIError":
        for kind in type(ex).__mro__:
            if (code := EXIT_CODES.get(kind)) is not None:
                return cls(str(ex), exit_code=code)
        return cls(str(ex), exit_code=UNEXPECTED_EXIT_CODE)


@dataclass(slots=True)
class ConfigError(CLIError):
    exit_code: int = CONFIG_EXIT_CODE


@dataclass(slots=True, kw_only=True)
class ConfigSyntaxError(ConfigError):
    class Context(TypedDict):
        loc: Location

    ctx: Context

    @override
    def format_message(self) -> str:
        return "Decoding failed for configuration file %r.\n\n%s" % (
            str(self.ctx["loc"]["filename"]),
            self.message,
        )


@dataclass(slots=True, kw_only=True)
class ConfigValidationError(ConfigError):
    @override
    def format_message(self) -> str:
        return "Invalid configuration input.\n\n%s" % self.message
