from typing import Annotated

import annotated_types
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .charset import AMBIGUOUS_CHARACTERS, SYMBOLS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="PASS_GEN_",
    )

    default_length: Annotated[int, annotated_types.Ge(1)] = 16
    default_count: Annotated[int, annotated_types.Ge(1)] = 1
    ambiguous_characters: str = AMBIGUOUS_CHARACTERS
    symbols: Annotated[str, annotated_types.MinLen(1)] = SYMBOLS
    default_word_count: Annotated[int, annotated_types.Ge(1)] = 6
    word_separator: str = "-"

    @classmethod
    def settings_customise_sources(
        cls,
        _: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, file_secret_settings, init_settings
