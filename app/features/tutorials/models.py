from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Tutorial:
    id: str
    title: str
    description: str
    content: str
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tutorial:
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            content=str(data.get("content") or ""),
            category=str(data.get("category") or DEFAULT_CATEGORY),
            tags=[str(t) for t in data.get("tags") or []],
            created_at=str(data.get("createdAt") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class TutorialMetadata:
    id: str
    title: str
    description: str
    category: str
    tags: list[str]
    created_at: str
    file_size: int

    @classmethod
    def from_tutorial(cls, tutorial: Tutorial, file_size: int) -> TutorialMetadata:
        return cls(
            id=tutorial.id,
            title=tutorial.title,
            description=tutorial.description,
            category=tutorial.category,
            tags=list(tutorial.tags),
            created_at=tutorial.created_at,
            file_size=file_size,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TutorialMetadata:
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or DEFAULT_CATEGORY),
            tags=[str(t) for t in data.get("tags") or []],
            created_at=str(data.get("createdAt") or ""),
            file_size=int(data.get("fileSize") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "fileSize": self.file_size,
        }

    def to_tutorial(self, content: str = "") -> Tutorial:
        return Tutorial(
            id=self.id,
            title=self.title,
            description=self.description,
            content=content,
            category=self.category,
            tags=list(self.tags),
            created_at=self.created_at,
        )
