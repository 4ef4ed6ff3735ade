import pydantic
import pydantic_core

__all__ = ("convert_errors",)


CUSTOM_TYPES = {
    "dict_type": "mapping_type",
    "model_attributes_type": "mapping_type",
    "model_type": "mapping_type",
    "extra_forbidden": "extra_field",
    "enum": "enum_value_out_of_range",
    "int_parsing": "int_type",
    "int_from_float": "int_type",
    "bool_parsing": "bool_type",
}
CUSTOM_MESSAGES = {
    # https://docs.pydantic.dev/latest/errors/validation_errors/
    "extra_field": "Extra fields not allowed",
    "missing": "Field is required",
    "enum_value_out_of_range": "Input must be one of the following values: {expected}",
    "mapping_type": "Input must be a valid mapping",
    "int_type": "Input must be a whole number",
    "bool_type": "Input must be a boolean",
}


def convert_errors(
    ex: pydantic.ValidationError,
    custom_messages: dict[str, str] = CUSTOM_MESSAGES,
    custom_types: dict[str, str] = CUSTOM_TYPES,
) -> list[pydantic_core.ErrorDetails]:
    new_errors: list[pydantic_core.ErrorDetails] = []

    for error in ex.errors(include_url=False):
        ctx = error.get("ctx")

        # union members show up as extra location parts, e.g. ('seed', 'int')
        if error["loc"][:1] == ("seed",):
            error["loc"] = ("seed",)

        if custom_type := custom_types.get(error["type"]):
            error["type"] = custom_type

        if custom_message := custom_messages.get(error["type"]):
            error["msg"] = custom_message.format(**ctx) if ctx else custom_message

        if ctx:
            # we don't want to show the context to the user
            del error["ctx"]

        new_errors.append(error)

    return new_errors
