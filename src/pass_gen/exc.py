from dataclasses import dataclass
from typing import Any, Mapping, NotRequired

from typing_extensions import TypedDict, override

from .charset import CharacterClass

__all__ = (
    "ApplicationError",
    "PolicyValidationError",
    "MalformedPolicyError",
    "EmptyPoolError",
    "EmptyWordListError",
    "LengthTooShortError",
    "NoClassesEnabledError",
    "InvalidCountError",
    "InvalidLengthError",
    "InvalidMinimumError",
    "GenerationError",
    "EntropySourceError",
)


@dataclass(slots=True)
class ApplicationError(Exception):
    class Context(TypedDict): ...

    message: str
    ctx: Context | None = None

    def format_message(self) -> str:
        return self.message.format(ctx=self.ctx or {})

    @override
    def __str__(self) -> str:
        return self.format_message()


@dataclass(slots=True)
class PolicyValidationError(ApplicationError):
    """
    Raised when a requested generation policy cannot be turned into a valid one.

    All validation errors are detected before any randomness is consumed.
    """


@dataclass(slots=True)
class MalformedPolicyError(PolicyValidationError):
    """Raised when the raw policy input does not have the expected shape."""

    class Context(TypedDict):
        errors: list[Any]

    ctx: Context | None = None

    @override
    def format_message(self) -> str:
        if not self.ctx:
            return self.message
        return "%s\n\n%s" % (
            self.message,
            "\n".join(
                "  %s: %s" % (".".join(map(str, err["loc"])), err["msg"])
                for err in self.ctx["errors"]
            ),
        )


@dataclass(slots=True)
class EmptyPoolError(PolicyValidationError):
    """
    Raised when there are no usable characters left after exclusion filtering.

    If ``character_class`` is set, that required class lost all its candidates.
    Otherwise the union pool or the fill pool is empty.
    """

    class Context(TypedDict):
        character_class: CharacterClass | None
        excluded: str
        remaining: NotRequired[int]

    ctx: Context | None = None


@dataclass(slots=True)
class EmptyWordListError(EmptyPoolError):
    """Raised when a passphrase word list has no words in it."""

    class Context(TypedDict):
        source: str

    ctx: Context | None = None


@dataclass(slots=True)
class LengthTooShortError(PolicyValidationError):
    class Context(TypedDict):
        length: int
        required: int
        min_per_class: Mapping[CharacterClass, int]

    ctx: Context | None = None


@dataclass(slots=True)
class NoClassesEnabledError(PolicyValidationError): ...


@dataclass(slots=True)
class InvalidCountError(PolicyValidationError):
    class Context(TypedDict):
        count: int

    ctx: Context | None = None


@dataclass(slots=True)
class InvalidLengthError(PolicyValidationError):
    class Context(TypedDict):
        length: int

    ctx: Context | None = None


@dataclass(slots=True)
class InvalidMinimumError(PolicyValidationError):
    class Context(TypedDict):
        character_class: CharacterClass
        min_chars: int

    ctx: Context | None = None


@dataclass(slots=True)
class GenerationError(ApplicationError):
    """Raised when passwords cannot be produced for an already valid policy."""


@dataclass(slots=True)
class EntropySourceError(GenerationError):
    """
    Raised when the secure random source fails to supply randomness.

    This error is fatal for the current run. It is never answered by falling back
    to a weaker source.
    """

    class Context(TypedDict):
        reason: str

    ctx: Context | None = None
