"""
fontseca.dev Backend — Transfer Record Base
=============================================

What:  The common base class and reusable rules for transfer records.
How:   `Record` forbids undeclared members (so JSON bodies with unknown fields
       are rejected) and validates defaults (so an absent required member is
       reported the same way as an empty one).

Rules:
    Required → the value must not be its zero value ("", 0, 0.0, False)
"""

from typing import Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic_core import PydanticCustomError


def _required(value: Any) -> Any:
    if value is None or value == "" or value == 0:
        raise PydanticCustomError("required", "Field is required")
    return value


Required = BeforeValidator(_required)


class Record(BaseModel):
    """Base for every form- or JSON-bound transfer record."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        validate_default=True,
    )
