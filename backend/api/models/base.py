"""
Base Pydantic models for request facets.

Key features:
- frozen=True: Immutable once parsed
- extra='ignore': Ignore undeclared fields
- Bodies are strict (JSON already carries types, "30" is not a number);
  query and route params are lax because they always arrive as strings
"""

from pydantic import BaseModel, ConfigDict


class BaseParamsModel(BaseModel):
    """Base model for query-string and route-param schemas."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )


class BaseBodyModel(BaseModel):
    """Base model for JSON body schemas."""
    model_config = ConfigDict(
        frozen=True,
        strict=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )
