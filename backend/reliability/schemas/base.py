"""
Shared pydantic base for request schemas.

The HTTP layer posts camelCase JSON (``timeHorizon``, ``numberOfRuns``);
Python callers use snake_case field names. Both are accepted.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True
    )
