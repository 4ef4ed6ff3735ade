import math
from dataclasses import dataclass

from humanize import intcomma

from .policy import GenerationPolicy, PassphrasePolicy

__all__ = ("GUESS_RATES", "GuessTime", "Report", "format_duration")

MINUTE = 60.0
HOUR = MINUTE * 60.0
DAY = HOUR * 24.0
YEAR = DAY * 365.25
CENTURY = YEAR * 100.0

UNITS = (
    (MINUTE, 1.0, "seconds"),
    (HOUR, MINUTE, "minutes"),
    (DAY, HOUR, "hours"),
    (YEAR, DAY, "days"),
    (CENTURY, YEAR, "years"),
    (math.inf, CENTURY, "centuries"),
)

GUESS_RATES = {
    "1 billion / second": 1e9,
    "1 quadrillion / second": 1e15,
    "1 sextillion / second": 1e21,
}


def format_duration(log10_seconds: float) -> str:
    """
    Formats a duration given as ``log10`` of seconds.

    Durations this large overflow a float quickly, so the value stays in log space
    until it is known to be printable.

    Example::

        format_duration(math.log10(90))  # '2 minutes'
        format_duration(35.0)  # '3e+25 centuries'
    """
    if log10_seconds < 0:
        return "less than a second"

    for upper, scale, unit in UNITS:
        if log10_seconds < math.log10(upper):
            break

    log10_value = log10_seconds - math.log10(scale)
    if log10_value < 6:
        return "%s %s" % (intcomma(round(10**log10_value)), unit)

    exponent = math.floor(log10_value)
    mantissa = round(10 ** (log10_value - exponent))
    if mantissa == 10:
        mantissa, exponent = 1, exponent + 1
    return "%de+%d %s" % (mantissa, exponent, unit)


@dataclass(frozen=True, slots=True)
class GuessTime:
    rate: str
    log10_seconds: float

    def __str__(self) -> str:
        return format_duration(self.log10_seconds)


@dataclass(frozen=True, slots=True)
class Report:
    """
    Strength estimate of passwords or passphrases generated under a policy.

    A secret is ``length`` tokens drawn uniformly from ``pool_size`` candidates.
    The token is a character for passwords and a word for passphrases, ``unit``
    names which.
    """

    unit: str
    pool_size: int
    length: int
    bits_per_token: float
    total_bits: float
    guess_times: tuple[GuessTime, ...]

    @classmethod
    def estimate(cls, *, unit: str, pool_size: int, length: int) -> "Report":
        bits_per_token = math.log2(pool_size)
        total_bits = length * bits_per_token

        # on average half of the key space is searched
        log10_guesses = max(total_bits - 1, 0) * math.log10(2)

        return cls(
            unit=unit,
            pool_size=pool_size,
            length=length,
            bits_per_token=bits_per_token,
            total_bits=total_bits,
            guess_times=tuple(
                GuessTime(rate=label, log10_seconds=log10_guesses - math.log10(rate))
                for label, rate in GUESS_RATES.items()
            ),
        )

    @classmethod
    def from_policy(cls, policy: GenerationPolicy) -> "Report":
        return cls.estimate(
            unit="character", pool_size=len(policy.pool), length=policy.length
        )

    @classmethod
    def from_passphrase_policy(cls, policy: PassphrasePolicy) -> "Report":
        return cls.estimate(
            unit="word", pool_size=len(policy.words), length=policy.word_count
        )
