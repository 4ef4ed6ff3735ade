import logging
from typing import Any, Mapping, Optional, TypeVar

import pydantic

from . import exc
from ._conf import Settings
from .charset import CANDIDATES, STANDARD_CLASSES, CharacterClass, dedupe
from .dto import ClassRule, PassphraseRequest, PolicyRequest
from .policy import CharacterSet, GenerationPolicy, PassphrasePolicy
from .util.model import convert_errors
from .wordlist import default_words, parse_words

__all__ = ("validate", "validate_passphrase")


logger = logging.getLogger(__name__)


RequestT = TypeVar("RequestT", PolicyRequest, PassphraseRequest)


def _parse(model: type[RequestT], raw: RequestT | Mapping[str, Any]) -> RequestT:
    if isinstance(raw, model):
        return raw

    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as ex:
        raise exc.MalformedPolicyError(
            "Invalid generation options.",
            ctx=exc.MalformedPolicyError.Context(errors=convert_errors(ex)),
        ) from ex


def _default_classes() -> dict[CharacterClass, ClassRule]:
    return {cls: ClassRule() for cls in STANDARD_CLASSES}


def _raw_candidates(
    cls: CharacterClass, request: PolicyRequest, settings: Settings
) -> str:
    if cls is CharacterClass.CUSTOM:
        return dedupe(request.custom_charset)
    if cls is CharacterClass.SYMBOLS:
        return dedupe(settings.symbols)
    return CANDIDATES[cls]


def validate(
    raw: PolicyRequest | Mapping[str, Any], *, settings: Optional[Settings] = None
) -> GenerationPolicy:
    """
    Normalizes and validates requested generation options.

    Args:
        raw: A :class:`PolicyRequest` or a mapping with the same fields.
        settings: Source of the defaults for unset fields.

    Returns:
        A fully assembled, read-only :class:`GenerationPolicy`.

    Raises:
        MalformedPolicyError: ``raw`` does not have the expected shape.
        NoClassesEnabledError: No class is required or available for fill.
        InvalidLengthError: ``length`` is less than 1.
        InvalidCountError: ``count`` is less than 1.
        InvalidMinimumError: A class has a negative minimum.
        EmptyPoolError: A required class, the whole pool or the fill pool has no
            characters left after exclusion filtering.
        LengthTooShortError: ``length`` cannot fit the sum of the minimums.
    """
    request = _parse(PolicyRequest, raw)
    settings = settings or Settings()

    length = request.length if request.length is not None else settings.default_length
    count = request.count if request.count is not None else settings.default_count
    rules = request.classes if request.classes is not None else _default_classes()
    rules = {cls: rule for cls, rule in rules.items() if rule.min_chars or rule.fill}

    if not rules:
        raise exc.NoClassesEnabledError("At least one character class must be enabled.")
    if length < 1:
        raise exc.InvalidLengthError(
            "Password length must be at least 1, got {ctx[length]}.",
            ctx=exc.InvalidLengthError.Context(length=length),
        )
    if count < 1:
        raise exc.InvalidCountError(
            "Password count must be at least 1, got {ctx[count]}.",
            ctx=exc.InvalidCountError.Context(count=count),
        )
    for cls, rule in rules.items():
        if rule.min_chars < 0:
            raise exc.InvalidMinimumError(
                "Minimum for class '{ctx[character_class]}' must not be negative, "
                "got {ctx[min_chars]}.",
                ctx=exc.InvalidMinimumError.Context(
                    character_class=cls, min_chars=rule.min_chars
                ),
            )

    excluded = set(request.exclude)
    if request.exclude_ambiguous:
        excluded.update(settings.ambiguous_characters)
    excluded_repr = "".join(sorted(excluded))

    classes: list[CharacterSet] = []
    for cls, rule in rules.items():
        candidates = "".join(
            ch for ch in _raw_candidates(cls, request, settings) if ch not in excluded
        )

        if not candidates:
            if rule.min_chars:
                raise exc.EmptyPoolError(
                    "Required class '{ctx[character_class]}' has no characters left "
                    "after excluding {ctx[excluded]!r}.",
                    ctx=exc.EmptyPoolError.Context(
                        character_class=cls, excluded=excluded_repr
                    ),
                )
            logger.debug("dropping class %r, no candidates left", str(cls))
            continue

        classes.append(
            CharacterSet(
                character_class=cls,
                candidates=candidates,
                min_chars=rule.min_chars,
                fill=rule.fill,
            )
        )

    policy = GenerationPolicy(
        length=length,
        classes=tuple(classes),
        excluded_characters=frozenset(excluded),
        count=count,
        seed=request.seed,
    )

    if not policy.pool:
        raise exc.EmptyPoolError(
            "No characters are left to generate from after excluding "
            "{ctx[excluded]!r}.",
            ctx=exc.EmptyPoolError.Context(
                character_class=None, excluded=excluded_repr
            ),
        )

    if policy.required_chars > length:
        raise exc.LengthTooShortError(
            "Password length {ctx[length]} is too short for the required minimums, "
            "which add up to {ctx[required]}.",
            ctx=exc.LengthTooShortError.Context(
                length=length,
                required=policy.required_chars,
                min_per_class=policy.min_per_class,
            ),
        )

    if policy.required_chars < length and not policy.fill_pool:
        raise exc.EmptyPoolError(
            "No class is available to fill the remaining {ctx[remaining]} "
            "character(s); enable fill on at least one class.",
            ctx=exc.EmptyPoolError.Context(
                character_class=None,
                excluded=excluded_repr,
                remaining=length - policy.required_chars,
            ),
        )

    logger.debug(
        "validated policy: length=%d count=%d pool=%d fill=%d",
        policy.length,
        policy.count,
        len(policy.pool),
        len(policy.fill_pool),
    )

    return policy


def validate_passphrase(
    raw: PassphraseRequest | Mapping[str, Any], *, settings: Optional[Settings] = None
) -> PassphrasePolicy:
    """
    Normalizes and validates requested passphrase options.

    Without ``words`` the built-in word list is used. A given list is cleaned up
    the same way a word list file is: blank entries are dropped and repeated
    words are kept once.

    Raises:
        MalformedPolicyError: ``raw`` does not have the expected shape.
        InvalidLengthError: ``word_count`` is less than 1.
        InvalidCountError: ``count`` is less than 1.
        EmptyWordListError: The word list has no words in it.
    """
    request = _parse(PassphraseRequest, raw)
    settings = settings or Settings()

    word_count = (
        request.word_count
        if request.word_count is not None
        else settings.default_word_count
    )
    count = request.count if request.count is not None else settings.default_count
    separator = (
        request.separator if request.separator is not None else settings.word_separator
    )

    if word_count < 1:
        raise exc.InvalidLengthError(
            "Passphrase must have at least 1 word, got {ctx[length]}.",
            ctx=exc.InvalidLengthError.Context(length=word_count),
        )
    if count < 1:
        raise exc.InvalidCountError(
            "Passphrase count must be at least 1, got {ctx[count]}.",
            ctx=exc.InvalidCountError.Context(count=count),
        )

    if request.words is None:
        words, source = default_words(), "built-in"
    else:
        words, source = parse_words(request.words), "given"

    if not words:
        raise exc.EmptyWordListError(
            "The {ctx[source]} word list has no words in it.",
            ctx=exc.EmptyWordListError.Context(source=source),
        )

    policy = PassphrasePolicy(
        words=words,
        word_count=word_count,
        separator=separator,
        count=count,
        seed=request.seed,
    )

    logger.debug(
        "validated passphrase policy: words=%d count=%d list=%d",
        policy.word_count,
        policy.count,
        len(policy.words),
    )

    return policy
