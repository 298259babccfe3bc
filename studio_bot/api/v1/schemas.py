from __future__ import annotations

from pydantic import BaseModel, Field


class TestEventRequest(BaseModel):
    name: str | None = Field(default=None, max_length=120)
    phone: str | None = Field(default=None, max_length=32)


class TestEventResponse(BaseModel):
    created: bool
