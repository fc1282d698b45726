"""One-shot conversion of the legacy ``tutorials.json`` into the split layout.

The legacy document is a JSON array of full tutorial records with inline
``content``. Each record's content becomes ``tutorials/<id>.html``, the
metadata is written to ``metadata.json`` in a single write at the end, and the
legacy document is renamed to ``tutorials.json.backup``. A missing legacy
document means there is nothing to migrate.

A crash part-way leaves blobs without an index; the legacy document is only
renamed after the index write, so re-running picks up from the start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from app.config import AppConfig
from app.features.tutorials.models import Tutorial, TutorialMetadata
from app.infra.errors import CorruptIndexError, StorageIOError
from app.infra.repo_metadata import MetadataIndex, convert_records, parse_records
from app.infra.repo_tutorials import encode_content
from app.infra.storage import ContentBlobStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    migrated: int
    backup_path: Path
    total_size_bytes: int


def _read_legacy(path: Path) -> list[tuple[Tutorial, bytes]] | None:
    """Parse and encode every legacy record up front so a bad one fails before any blob is written."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageIOError("read", path, e) from e
    tutorials = convert_records(parse_records(raw, path), path, Tutorial.from_dict)
    encoded: list[tuple[Tutorial, bytes]] = []
    for pos, tutorial in enumerate(tutorials):
        try:
            encoded.append((tutorial, encode_content(tutorial.content)))
        except UnicodeEncodeError as e:
            raise CorruptIndexError(path, f"record {pos} content cannot be stored: {e}") from e
    return encoded


def migrate_from_legacy(cfg: AppConfig) -> MigrationResult | None:
    legacy = _read_legacy(cfg.legacy_path)
    if legacy is None:
        logger.info("No legacy %s found, nothing to migrate", cfg.legacy_path)
        return None

    logger.info("Migrating %d tutorials from %s", len(legacy), cfg.legacy_path)
    index = MetadataIndex(cfg.metadata_path, strict=cfg.strict_index)
    blobs = ContentBlobStore(cfg.tutorials_dir)

    existing = index.load()
    if existing:
        logger.warning("Overwriting existing index with %d records at %s", len(existing), index.path)

    # Reject unusable ids before any blob is written.
    for tutorial, _ in legacy:
        blobs.path_for(tutorial.id)

    records: list[TutorialMetadata] = []
    for pos, (tutorial, data) in enumerate(legacy, start=1):
        size = blobs.write(tutorial.id, data)
        records.append(TutorialMetadata.from_tutorial(tutorial, size))
        logger.info("[%d/%d] %s (%d bytes)", pos, len(legacy), tutorial.id, size)

    index.save(records)

    try:
        cfg.legacy_path.replace(cfg.backup_path)
    except OSError as e:
        raise StorageIOError("rename", cfg.legacy_path, e) from e

    total = sum(r.file_size for r in records)
    logger.info("Migration complete: %d tutorials, legacy file backed up to %s", len(records), cfg.backup_path)
    return MigrationResult(migrated=len(records), backup_path=cfg.backup_path, total_size_bytes=total)
