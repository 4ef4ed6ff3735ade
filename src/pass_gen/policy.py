import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .charset import CharacterClass, union

__all__ = ("CharacterSet", "GenerationPolicy", "PassphrasePolicy", "Seed")

Seed = int | str


@dataclass(frozen=True, slots=True)
class CharacterSet:
    character_class: CharacterClass
    candidates: str
    min_chars: int = 0
    fill: bool = True

    @property
    def required(self) -> bool:
        return self.min_chars > 0


@dataclass(frozen=True, slots=True)
class GenerationPolicy:
    """
    A validated, read-only specification for one generation run.

    Instances are produced by :func:`pass_gen.validator.validate`, which guarantees
    that the policy can always be satisfied: every required class has candidates,
    the minimums fit into ``length`` and there is something to fill the rest with.

    Attributes:
        length: Exact length of every generated password.
        classes: Enabled character classes with their post-exclusion candidates.
        excluded_characters: Characters removed from every class.
        count: Number of passwords to produce.
        seed: When set, output is a deterministic function of the seed and the
            policy. Seeded output is NOT suitable for real secrets.
    """

    length: int
    classes: tuple[CharacterSet, ...]
    excluded_characters: frozenset[str] = frozenset()
    count: int = 1
    seed: Optional[Seed] = None

    @property
    def min_per_class(self) -> Mapping[CharacterClass, int]:
        return MappingProxyType(
            {cs.character_class: cs.min_chars for cs in self.classes if cs.required}
        )

    @property
    def required_chars(self) -> int:
        return sum(cs.min_chars for cs in self.classes)

    @property
    def pool(self) -> str:
        return union(*(cs.candidates for cs in self.classes))

    @property
    def fill_pool(self) -> str:
        return union(*(cs.candidates for cs in self.classes if cs.fill))

    @property
    def is_reproducible(self) -> bool:
        return self.seed is not None

    @property
    def entropy_bits(self) -> float:
        """Informational estimate, ``length * log2(pool size)``."""
        return self.length * math.log2(len(self.pool))


@dataclass(frozen=True, slots=True)
class PassphrasePolicy:
    """
    A validated, read-only specification for a passphrase run.

    A passphrase is ``word_count`` words drawn independently and uniformly from
    ``words`` and joined with ``separator``. Unlike :class:`GenerationPolicy` there
    are no per-class minimums, so the strength depends on the list size alone.

    Attributes:
        words: Distinct candidate words, never empty.
        word_count: Number of words in every passphrase.
        separator: Placed between consecutive words.
        count: Number of passphrases to produce.
        seed: Same meaning as :attr:`GenerationPolicy.seed`.
    """

    words: tuple[str, ...]
    word_count: int
    separator: str = "-"
    count: int = 1
    seed: Optional[Seed] = None

    @property
    def is_reproducible(self) -> bool:
        return self.seed is not None

    @property
    def entropy_bits(self) -> float:
        """Informational estimate, ``word_count * log2(len(words))``."""
        return self.word_count * math.log2(len(self.words))
