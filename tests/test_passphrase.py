"""Unit tests for passphrase validation and generation."""

import logging
import math
from collections import Counter

import pytest

from pass_gen import exc
from pass_gen._cli.exc import EXIT_CODES, CLIError
from pass_gen._conf import Settings
from pass_gen.entropy import SeededEntropySource
from pass_gen.generator import generate_passphrase, generate_passphrases
from pass_gen.report import Report
from pass_gen.validator import validate_passphrase
from pass_gen.wordlist import default_words, parse_words


@pytest.fixture
def settings() -> Settings:
    return Settings()


class TestWordList:
    def test_parse_strips_and_skips_blank_lines(self) -> None:
        assert parse_words(["alpha\n", "  beta  ", "", "\n", "gamma"]) == (
            "alpha",
            "beta",
            "gamma",
        )

    def test_parse_keeps_first_occurrence(self) -> None:
        assert parse_words(["beta", "alpha", "beta", "alpha"]) == ("beta", "alpha")

    def test_default_words(self) -> None:
        words = default_words()

        assert len(words) >= 1024
        assert len(set(words)) == len(words)
        assert all(word.isalpha() and word.islower() for word in words)


class TestValidatePassphrase:
    """Test suite for passphrase options."""

    def test_defaults(self, settings: Settings) -> None:
        policy = validate_passphrase({}, settings=settings)

        assert policy.word_count == 6
        assert policy.separator == "-"
        assert policy.count == 1
        assert policy.words == default_words()
        assert policy.is_reproducible is False

    def test_defaults_come_from_settings(self) -> None:
        policy = validate_passphrase(
            {}, settings=Settings(default_word_count=4, word_separator=" ")
        )

        assert policy.word_count == 4
        assert policy.separator == " "

    def test_given_words_are_cleaned_up(self, settings: Settings) -> None:
        policy = validate_passphrase(
            {"words": ["red", "", "green", "red", " blue "]}, settings=settings
        )

        assert policy.words == ("red", "green", "blue")

    def test_empty_separator(self, settings: Settings) -> None:
        policy = validate_passphrase({"separator": ""}, settings=settings)

        assert policy.separator == ""

    def test_camel_case_aliases(self, settings: Settings) -> None:
        policy = validate_passphrase({"wordCount": 3}, settings=settings)

        assert policy.word_count == 3

    @pytest.mark.parametrize("word_count", [0, -2])
    def test_invalid_word_count(self, settings: Settings, word_count: int) -> None:
        with pytest.raises(exc.InvalidLengthError) as exc_info:
            validate_passphrase({"word_count": word_count}, settings=settings)

        assert exc_info.value.ctx == {"length": word_count}
        assert "at least 1 word" in str(exc_info.value)

    def test_invalid_count(self, settings: Settings) -> None:
        with pytest.raises(exc.InvalidCountError):
            validate_passphrase({"count": 0}, settings=settings)

    def test_empty_word_list(self, settings: Settings) -> None:
        """Test that a list of blank lines is rejected as an empty pool."""
        with pytest.raises(exc.EmptyWordListError) as exc_info:
            validate_passphrase({"words": ["", "  "]}, settings=settings)

        assert isinstance(exc_info.value, exc.EmptyPoolError)
        assert exc_info.value.ctx == {"source": "given"}

    def test_empty_word_list_exit_code(self) -> None:
        error = CLIError.from_application_error(
            exc.EmptyWordListError("empty", ctx={"source": "given"})
        )

        assert error.exit_code == EXIT_CODES[exc.EmptyPoolError]

    def test_unknown_field(self, settings: Settings) -> None:
        with pytest.raises(exc.MalformedPolicyError):
            validate_passphrase({"length": 3}, settings=settings)


class TestGeneratePassphrase:
    """Test suite for passphrase generation."""

    def test_shape(self, settings: Settings) -> None:
        policy = validate_passphrase(
            {"word_count": 4, "separator": "+", "count": 5}, settings=settings
        )
        vocabulary = set(policy.words)

        phrases = generate_passphrases(policy)

        assert len(phrases) == 5
        for phrase in phrases:
            words = phrase.split("+")
            assert len(words) == 4
            assert set(words) <= vocabulary

    def test_single_word_list(self, settings: Settings) -> None:
        policy = validate_passphrase(
            {"words": ["only"], "word_count": 3}, settings=settings
        )

        assert generate_passphrases(policy) == ["only-only-only"]

    def test_words_are_uniform(self, settings: Settings) -> None:
        policy = validate_passphrase(
            {"words": ["a", "b", "c", "d", "e"], "word_count": 1}, settings=settings
        )
        source = SeededEntropySource("words")

        draws = 20_000
        counts = Counter(generate_passphrase(policy, source) for _ in range(draws))

        expected = draws / 5
        chi2 = sum((counts[w] - expected) ** 2 / expected for w in policy.words)
        # 99.9th percentile of chi-square for 4 degrees of freedom is ~18.5
        assert chi2 < 25

    def test_seeded_runs_are_identical(self, settings: Settings) -> None:
        policy = validate_passphrase({"count": 3, "seed": 11}, settings=settings)

        assert generate_passphrases(policy) == generate_passphrases(policy)

    def test_seeded_run_warns(
        self, settings: Settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        policy = validate_passphrase({"seed": "fixture"}, settings=settings)

        with caplog.at_level(logging.WARNING, logger="pass_gen.generator"):
            generate_passphrases(policy)

        assert "non-secure" in caplog.text

    def test_entropy_failure_propagates(
        self, settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken_urandom(size: int) -> bytes:
            raise OSError("device not configured")

        policy = validate_passphrase({}, settings=settings)
        monkeypatch.setattr("pass_gen.entropy.os.urandom", broken_urandom)

        with pytest.raises(exc.EntropySourceError):
            generate_passphrases(policy)


class TestPassphraseReport:
    def test_entropy_per_word(self, settings: Settings) -> None:
        policy = validate_passphrase(
            {"words": [str(i) for i in range(1024)], "word_count": 5},
            settings=settings,
        )

        report = Report.from_passphrase_policy(policy)

        assert report.unit == "word"
        assert report.pool_size == 1024
        assert report.length == 5
        assert report.bits_per_token == pytest.approx(10.0)
        assert report.total_bits == pytest.approx(policy.entropy_bits)
        assert policy.entropy_bits == pytest.approx(5 * math.log2(1024))
