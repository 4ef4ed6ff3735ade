"""Unit tests for settings."""

import pydantic
import pytest

from pass_gen._conf import Settings
from pass_gen.charset import AMBIGUOUS_CHARACTERS, SYMBOLS
from pass_gen.validator import validate


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.default_length == 16
        assert settings.default_count == 1
        assert settings.ambiguous_characters == AMBIGUOUS_CHARACTERS
        assert settings.symbols == SYMBOLS
        assert settings.default_word_count == 6
        assert settings.word_separator == "-"

    def test_environment_overrides_file_values(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PASS_GEN_DEFAULT_LENGTH", "32")

        settings = Settings(default_length=20)

        assert settings.default_length == 32
        assert validate({}, settings=settings).length == 32

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Settings(default_size=3)  # type: ignore[call-arg]

    def test_rejects_invalid_length(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Settings(default_length=0)

    def test_custom_ambiguous_characters(self) -> None:
        settings = Settings(ambiguous_characters="xyz")

        policy = validate(
            {"classes": {"lowercase": {}}, "exclude_ambiguous": True},
            settings=settings,
        )

        assert set(policy.pool) == set("abcdefghijklmnopqrstuvw")
