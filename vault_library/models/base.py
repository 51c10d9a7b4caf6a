"""Base model for vaultd's JSON payloads."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """Model whose JSON form uses camelCase keys.

    Fields are set by their Python names in code and dumped by alias, so
    ``model_dump()`` and the HTTP responses agree.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )
