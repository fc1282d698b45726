from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.infra.repo_metadata import MetadataIndex

_MB = 1024 * 1024
_GB = _MB * 1024


def _fmt(size_bytes: int, unit: int) -> str:
    return f"{size_bytes / unit:.2f}"


@dataclass(frozen=True)
class TutorialSize:
    id: str
    title: str
    size_mb: str


@dataclass(frozen=True)
class StorageStats:
    total_tutorials: int
    total_size_bytes: int
    total_size_mb: str
    total_size_gb: str
    tutorials: list[TutorialSize]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTutorials": self.total_tutorials,
            "totalSizeBytes": self.total_size_bytes,
            "totalSizeMB": self.total_size_mb,
            "totalSizeGB": self.total_size_gb,
            "tutorials": [
                {"id": t.id, "title": t.title, "sizeMB": t.size_mb} for t in self.tutorials
            ],
        }


def storage_stats(index: MetadataIndex) -> StorageStats:
    # Strict load: an unreadable index must not be reported as zero bytes.
    records = index.load(strict=True)
    total = sum(m.file_size for m in records)
    return StorageStats(
        total_tutorials=len(records),
        total_size_bytes=total,
        total_size_mb=_fmt(total, _MB),
        total_size_gb=_fmt(total, _GB),
        tutorials=[TutorialSize(id=m.id, title=m.title, size_mb=_fmt(m.file_size, _MB)) for m in records],
    )
