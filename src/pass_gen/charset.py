import string
from enum import StrEnum
from types import MappingProxyType
from typing import Iterable, Mapping

__all__ = (
    "CharacterClass",
    "STANDARD_CLASSES",
    "CANDIDATES",
    "SYMBOLS",
    "AMBIGUOUS_CHARACTERS",
    "PRESETS",
    "dedupe",
    "union",
    "class_of",
)


class CharacterClass(StrEnum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGITS = "digits"
    SYMBOLS = "symbols"
    CUSTOM = "custom"


# ASCII punctuation without quotes, backslash and backtick
SYMBOLS = "!#$%&()*+,-./:;<=>?@[]^_{|}~"

AMBIGUOUS_CHARACTERS = "0Oo1lI|"

STANDARD_CLASSES = (
    CharacterClass.LOWERCASE,
    CharacterClass.UPPERCASE,
    CharacterClass.DIGITS,
    CharacterClass.SYMBOLS,
)

CANDIDATES: Mapping[CharacterClass, str] = MappingProxyType(
    {
        CharacterClass.LOWERCASE: string.ascii_lowercase,
        CharacterClass.UPPERCASE: string.ascii_uppercase,
        CharacterClass.DIGITS: string.digits,
        CharacterClass.SYMBOLS: SYMBOLS,
    }
)

PRESETS: Mapping[str, tuple[CharacterClass, ...]] = MappingProxyType(
    {
        "ascii": STANDARD_CLASSES,
        "alnum": (
            CharacterClass.LOWERCASE,
            CharacterClass.UPPERCASE,
            CharacterClass.DIGITS,
        ),
        "letters": (CharacterClass.LOWERCASE, CharacterClass.UPPERCASE),
        "number": (CharacterClass.DIGITS,),
    }
)


def dedupe(chars: Iterable[str]) -> str:
    """Removes duplicate characters, keeping the first occurrence of each."""
    return "".join(dict.fromkeys(chars))


def union(*charsets: str) -> str:
    return dedupe(ch for charset in charsets for ch in charset)


def class_of(name: str) -> CharacterClass:
    """
    Looks up a character class by its name or a unique prefix of it.

    Example::

        class_of("upper")  # CharacterClass.UPPERCASE
        class_of("d")  # CharacterClass.DIGITS
    """
    name = name.strip().lower()
    matches = [cls for cls in CharacterClass if cls.value.startswith(name)]
    if not name or len(matches) != 1:
        raise ValueError(
            "Unknown character class %r, expected one of: %s"
            % (name, ", ".join(CharacterClass))
        )
    return matches[0]
