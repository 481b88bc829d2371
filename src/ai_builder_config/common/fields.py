"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, JsonValue, StrictStr

type JsonDict = dict[str, JsonValue]

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]

__all__ = [
    "JsonDict",
    "JsonValue",
    "NonEmptyString",
]
