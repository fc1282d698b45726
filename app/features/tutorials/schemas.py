from __future__ import annotations

from pydantic import BaseModel, Field


class TutorialCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    description: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = Field(default=None, max_length=50)


class TutorialUpdate(TutorialCreate):
    """PUT body; optional fields left out keep their stored value."""
