import logging
from typing import Iterator, Optional

from . import entropy
from .policy import GenerationPolicy, PassphrasePolicy, Seed

__all__ = (
    "generate",
    "generate_passphrase",
    "generate_passphrases",
    "generate_password",
    "iter_passphrases",
    "iter_passwords",
)


logger = logging.getLogger(__name__)


def _select_source(
    seed: Optional[Seed], source: Optional[entropy.AbstractEntropySource]
) -> entropy.AbstractEntropySource:
    if source is None:
        source = entropy.for_seed(seed)

    if not source.is_secure:
        logger.warning(
            "using a seeded, non-secure random source; do not use the output as "
            "real secrets"
        )

    return source


def generate_password(
    policy: GenerationPolicy, source: entropy.AbstractEntropySource
) -> str:
    """
    Generates a single password satisfying ``policy``.

    Required classes contribute their minimum first, the rest is drawn from the fill
    pool and the result is shuffled so that the guaranteed characters don't sit at
    predictable positions.
    """
    chars: list[str] = []

    for charset in policy.classes:
        chars.extend(
            source.choice(charset.candidates) for _ in range(charset.min_chars)
        )

    if remaining := policy.length - len(chars):
        fill_pool = policy.fill_pool
        chars.extend(source.choice(fill_pool) for _ in range(remaining))

    source.shuffle(chars)

    assert len(chars) == policy.length, "Expected %d characters, got %d" % (
        policy.length,
        len(chars),
    )
    return "".join(chars)


def iter_passwords(
    policy: GenerationPolicy, *, source: Optional[entropy.AbstractEntropySource] = None
) -> Iterator[str]:
    source = _select_source(policy.seed, source)

    logger.debug(
        "generating %d password(s) with %s", policy.count, type(source).__name__
    )

    for _ in range(policy.count):
        yield generate_password(policy, source)


def generate(
    policy: GenerationPolicy, *, source: Optional[entropy.AbstractEntropySource] = None
) -> list[str]:
    """
    Produces exactly ``policy.count`` passwords, each an independent trial.

    Args:
        policy: A validated policy.
        source: Overrides the entropy source chosen from ``policy.seed``.

    Raises:
        EntropySourceError: The secure random source failed. The error is never
            papered over with a weaker source.
    """
    return list(iter_passwords(policy, source=source))


def generate_passphrase(
    policy: PassphrasePolicy, source: entropy.AbstractEntropySource
) -> str:
    return policy.separator.join(
        source.choice(policy.words) for _ in range(policy.word_count)
    )


def iter_passphrases(
    policy: PassphrasePolicy, *, source: Optional[entropy.AbstractEntropySource] = None
) -> Iterator[str]:
    source = _select_source(policy.seed, source)

    logger.debug(
        "generating %d passphrase(s) with %s", policy.count, type(source).__name__
    )

    for _ in range(policy.count):
        yield generate_passphrase(policy, source)


def generate_passphrases(
    policy: PassphrasePolicy, *, source: Optional[entropy.AbstractEntropySource] = None
) -> list[str]:
    """Produces exactly ``policy.count`` passphrases, see :func:`generate`."""
    return list(iter_passphrases(policy, source=source))
