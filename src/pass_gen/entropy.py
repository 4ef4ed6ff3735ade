"""
Sources of uniform random indices.

Both sources turn raw random bits into an index with rejection sampling: draw
``n.bit_length()`` bits and retry while the value is ``>= n``. Every candidate is
therefore selected with exactly the same probability, which a modulo reduction of
a fixed-width integer would not guarantee.
"""

import os
import random
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import MutableSequence, Optional, Sequence, TypeVar

from typing_extensions import override

from .exc import EntropySourceError
from .policy import Seed

__all__ = (
    "AbstractEntropySource",
    "SecureEntropySource",
    "SeededEntropySource",
    "for_seed",
)

T = TypeVar("T")


@dataclass(slots=True)
class AbstractEntropySource:
    is_secure: bool = field(init=False, default=True)

    @abstractmethod
    def getrandbits(self, k: int) -> int:
        """Returns a non-negative integer with ``k`` random bits."""

    def randbelow(self, n: int) -> int:
        """Returns a uniformly distributed integer in ``[0, n)``."""
        if n <= 0:
            raise ValueError("Upper bound must be positive, got %d" % n)

        k = n.bit_length()
        while (r := self.getrandbits(k)) >= n:
            pass
        return r

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randbelow(len(seq))]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        """Shuffles ``seq`` in place (Fisher-Yates)."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.randbelow(i + 1)
            seq[i], seq[j] = seq[j], seq[i]


@dataclass(slots=True)
class SecureEntropySource(AbstractEntropySource):
    """
    Reads from the operating system's cryptographically secure generator.

    The source keeps no state of its own, so a single instance may be shared
    between threads.
    """

    @override
    def getrandbits(self, k: int) -> int:
        try:
            data = os.urandom((k + 7) // 8)
        except (OSError, NotImplementedError) as ex:
            raise EntropySourceError(
                "The secure random source failed: {ctx[reason]}",
                ctx=EntropySourceError.Context(reason=str(ex)),
            ) from ex

        return int.from_bytes(data, "big") >> (len(data) * 8 - k)


@dataclass(slots=True)
class SeededEntropySource(AbstractEntropySource):
    """
    Deterministic pseudo-random source. NOT SECURE.

    Output is fully determined by the seed, which makes it useful for reproducible
    tests and nothing else. Never use it to generate real secrets.
    """

    seed: Seed
    _rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        self.is_secure = False
        self._rng = random.Random(self.seed)

    @override
    def getrandbits(self, k: int) -> int:
        return self._rng.getrandbits(k)


def for_seed(seed: Optional[Seed]) -> AbstractEntropySource:
    if seed is None:
        return SecureEntropySource()
    return SeededEntropySource(seed)
