"""Pydantic schemas for published notifications."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LedgerEventOut(BaseModel):
    """A notification as exposed to observers."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    emitted_at: datetime = Field(serialization_alias="emittedAt")
    payload: dict[str, Any]


class LedgerEventsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    events: list[LedgerEventOut]
    total_count: int = Field(serialization_alias="totalCount")
