from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..charset import PRESETS, CharacterClass

__all__ = ("ClassRule", "PolicyRequest")

_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class ClassRule(BaseModel):
    """
    Attributes:
        min_chars: Minimum number of characters drawn from the class. Zero makes the
            class an optional pool member, anything above makes it required.
        fill: Whether the class's characters may be used to fill the rest of the
            password once the minimums are met.
    """

    model_config = _config

    min_chars: int = 1
    fill: bool = True


class PolicyRequest(BaseModel):
    """
    Raw, possibly partial generation options.

    Values are only type-checked here. Range and consistency checks are left to
    :func:`pass_gen.validator.validate` so that each problem is reported as its
    own error kind.
    """

    model_config = _config

    length: Optional[int] = None
    count: Optional[int] = None
    classes: Optional[dict[CharacterClass, ClassRule]] = None
    custom_charset: str = ""
    exclude: str = ""
    exclude_ambiguous: bool = False
    seed: Optional[int | str] = None

    @classmethod
    def from_preset(cls, name: str, **kwargs: object) -> "PolicyRequest":
        try:
            layout = PRESETS[name]
        except KeyError:
            raise ValueError(
                "Unknown preset %r, expected one of: %s" % (name, ", ".join(PRESETS))
            ) from None
        return cls.model_validate(
            {"classes": {cls_: ClassRule() for cls_ in layout}, **kwargs}
        )
