"""
schemas/base.py
---------------
Shared pydantic configuration.

The browser client speaks camelCase (clientType, isPublic, ...) while the
ORM and Python code use snake_case. Every schema accepts both spellings on
input and emits camelCase on output.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelInput(CamelModel):
    """Request bodies: enum members are stored as their plain string values."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)
