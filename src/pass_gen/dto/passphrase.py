from typing import Optional

from pydantic import BaseModel

from .policy import _config

__all__ = ("PassphraseRequest",)


class PassphraseRequest(BaseModel):
    """
    Raw, possibly partial passphrase options.

    ``words`` replaces the built-in word list when set. Like
    :class:`PolicyRequest`, values are only type-checked here.
    """

    model_config = _config

    word_count: Optional[int] = None
    separator: Optional[str] = None
    count: Optional[int] = None
    words: Optional[list[str]] = None
    seed: Optional[int | str] = None
