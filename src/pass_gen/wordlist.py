"""
Word lists for passphrases.

A word list is plain text with one word per line. Surrounding whitespace is
stripped, blank lines are skipped and only the first occurrence of a repeated
word is kept, so that every distinct word is drawn with the same probability.
"""

import functools
from importlib import resources
from typing import Iterable

__all__ = ("default_words", "parse_words")


def parse_words(lines: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(word for line in lines if (word := line.strip())))


@functools.cache
def default_words() -> tuple[str, ...]:
    """Returns the built-in list of common, easy to type English words."""
    text = resources.files(__package__).joinpath("data", "words.txt").read_text(
        encoding="utf-8"
    )
    return parse_words(text.splitlines())
