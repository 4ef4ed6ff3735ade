"""Unit tests for the generator engine."""

import logging
import string
from typing import Any

import pytest

from pass_gen import exc
from pass_gen._conf import Settings
from pass_gen.entropy import SecureEntropySource, SeededEntropySource
from pass_gen.generator import generate, generate_password, iter_passwords
from pass_gen.policy import GenerationPolicy
from pass_gen.validator import validate

POLICIES: list[dict[str, Any]] = [
    {"length": 12, "count": 3},
    {"length": 8, "classes": {"digits": {"min_chars": 1}}, "exclude": "01"},
    {"length": 4, "classes": {"uppercase": {"min_chars": 3}}},
    {"length": 3, "classes": {"uppercase": {"min_chars": 3, "fill": False}}},
    {
        "length": 20,
        "count": 5,
        "classes": {
            "lowercase": {"min_chars": 0},
            "digits": {"min_chars": 4, "fill": False},
            "symbols": {"min_chars": 2},
            "custom": {"min_chars": 1, "fill": False},
        },
        "custom_charset": "äöü",
        "exclude_ambiguous": True,
    },
    {"length": 1, "classes": {"lowercase": {}}},
    {"length": 64, "count": 10, "exclude": "aeiouAEIOU"},
]


def make_policy(raw: dict[str, Any]) -> GenerationPolicy:
    return validate(raw, settings=Settings())


@pytest.fixture(params=POLICIES, ids=[f"policy{i}" for i in range(len(POLICIES))])
def policy(request: pytest.FixtureRequest) -> GenerationPolicy:
    return make_policy(request.param)


class TestPasswordProperties:
    """Test suite for the invariants every generated password satisfies."""

    def test_count_and_length(self, policy: GenerationPolicy) -> None:
        passwords = generate(policy)

        assert len(passwords) == policy.count
        assert all(len(pw) == policy.length for pw in passwords)

    def test_required_coverage(self, policy: GenerationPolicy) -> None:
        for pw in generate(policy):
            for charset in policy.classes:
                found = sum(ch in charset.candidates for ch in pw)
                assert found >= charset.min_chars, (pw, charset)

    def test_only_pool_characters(self, policy: GenerationPolicy) -> None:
        pool = set(policy.pool)

        for pw in generate(policy):
            assert set(pw) <= pool
            assert not set(pw) & policy.excluded_characters

    def test_properties_hold_over_many_seeds(self, policy: GenerationPolicy) -> None:
        for seed in range(200):
            pw = generate_password(policy, SeededEntropySource(seed))

            assert len(pw) == policy.length
            assert set(pw) <= set(policy.pool)
            for charset in policy.classes:
                assert sum(ch in charset.candidates for ch in pw) >= charset.min_chars


class TestExamples:
    def test_all_classes_required(self) -> None:
        """Test that 12 character passwords contain every standard class."""
        policy = make_policy({"length": 12, "count": 3})

        passwords = generate(policy)

        assert len(set(passwords)) == 3
        for pw in passwords:
            assert len(pw) == 12
            assert any(ch in string.ascii_lowercase for ch in pw)
            assert any(ch in string.ascii_uppercase for ch in pw)
            assert any(ch in string.digits for ch in pw)
            assert any(not ch.isalnum() for ch in pw)

    def test_digits_without_zero_and_one(self) -> None:
        policy = make_policy(
            {"length": 8, "classes": {"digits": {"min_chars": 1}}, "exclude": "01"}
        )

        for pw in generate(policy):
            assert len(pw) == 8
            assert set(pw) <= set("23456789")

    def test_required_only_class_fills_exactly(self) -> None:
        """Test that a class without fill contributes exactly its minimum."""
        policy = make_policy(
            {
                "length": 10,
                "count": 20,
                "classes": {
                    "lowercase": {"min_chars": 0},
                    "digits": {"min_chars": 2, "fill": False},
                },
            }
        )

        for pw in generate(policy):
            assert sum(ch.isdigit() for ch in pw) == 2


class TestShuffling:
    def test_required_characters_are_not_always_leading(self) -> None:
        """Test that guaranteed characters land at varying positions."""
        policy = make_policy(
            {
                "length": 8,
                "classes": {
                    "lowercase": {"min_chars": 0},
                    "digits": {"min_chars": 1, "fill": False},
                },
            }
        )

        positions = {
            next(i for i, ch in enumerate(pw) if ch.isdigit())
            for pw in (
                generate_password(policy, SeededEntropySource(seed))
                for seed in range(200)
            )
        }

        assert positions == set(range(8))


class TestDeterminism:
    def test_seeded_runs_are_identical(self) -> None:
        policy = make_policy({"length": 24, "count": 5, "seed": 42})

        assert generate(policy) == generate(policy)

    def test_string_seed(self) -> None:
        policy = make_policy({"length": 24, "count": 2, "seed": "fixture"})

        assert generate(policy) == generate(policy)

    def test_different_seeds_differ(self) -> None:
        a = make_policy({"length": 24, "seed": 1})
        b = make_policy({"length": 24, "seed": 2})

        assert generate(a) != generate(b)

    def test_unseeded_runs_differ(self) -> None:
        policy = make_policy({"length": 24, "count": 3})

        assert generate(policy) != generate(policy)

    def test_seeded_run_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        policy = make_policy({"length": 8, "seed": 7})

        with caplog.at_level(logging.WARNING, logger="pass_gen.generator"):
            generate(policy)

        assert "non-secure" in caplog.text

    def test_explicit_source_overrides_seed(self) -> None:
        policy = make_policy({"length": 16, "seed": 7})

        passwords = generate(policy, source=SecureEntropySource())

        assert passwords != generate(policy)


class TestEntropyFailure:
    def test_failure_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a failing secure source aborts the run."""

        def broken_urandom(size: int) -> bytes:
            raise OSError("device not configured")

        policy = make_policy({"length": 12})
        monkeypatch.setattr("pass_gen.entropy.os.urandom", broken_urandom)

        with pytest.raises(exc.EntropySourceError):
            generate(policy)

    def test_iter_passwords_is_lazy(self) -> None:
        policy = make_policy({"length": 12, "count": 1000})

        first = next(iter_passwords(policy))

        assert len(first) == 12
