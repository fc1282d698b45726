from __future__ import annotations

import logging

from app.config import AppConfig
from app.features.tutorials.models import Tutorial, TutorialMetadata
from app.infra.errors import StorageError, TutorialNotFound
from app.infra.repo_metadata import MetadataIndex
from app.infra.storage import ContentBlobStore

logger = logging.getLogger(__name__)


def encode_content(content: str) -> bytes:
    return content.encode("utf-8", errors="surrogateescape")


def decode_content(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


class TutorialRepo:
    """Joins the metadata index and the content blobs by tutorial id.

    save and update are two-phase: the blob is written first, then the index.
    When the index write fails the blob change is compensated (restored when
    the id already had a blob, removed otherwise) before the original error
    propagates. There is no locking; callers running several writers must
    serialise access.
    """

    def __init__(self, index: MetadataIndex, blobs: ContentBlobStore) -> None:
        self._index = index
        self._blobs = blobs

    @classmethod
    def from_config(cls, cfg: AppConfig) -> TutorialRepo:
        return cls(
            MetadataIndex(cfg.metadata_path, strict=cfg.strict_index),
            ContentBlobStore(cfg.tutorials_dir),
        )

    @property
    def index(self) -> MetadataIndex:
        return self._index

    def list(self) -> list[Tutorial]:
        return [meta.to_tutorial() for meta in self._index.load()]

    def find(self, tutorial_id: str) -> Tutorial | None:
        meta = next((m for m in self._index.load() if m.id == tutorial_id), None)
        if meta is None:
            return None
        data = self._blobs.read(tutorial_id)
        if data is None:
            logger.warning("Metadata for %s has no content blob", tutorial_id)
            return None
        return meta.to_tutorial(decode_content(data))

    def get(self, tutorial_id: str) -> Tutorial:
        tutorial = self.find(tutorial_id)
        if tutorial is None:
            raise TutorialNotFound(tutorial_id)
        return tutorial

    def save(self, tutorial: Tutorial) -> TutorialMetadata:
        records = self._index.load()
        data = encode_content(tutorial.content)
        previous = self._blobs.read(tutorial.id)
        size = self._blobs.write(tutorial.id, data)
        meta = TutorialMetadata.from_tutorial(tutorial, size)
        try:
            records.append(meta)
            self._index.save(records)
        except Exception:
            self._compensate(tutorial.id, previous)
            raise
        logger.info("Saved tutorial %s (%d bytes)", tutorial.id, size)
        return meta

    def update(self, tutorial: Tutorial) -> TutorialMetadata:
        records = self._index.load()
        pos = next((i for i, m in enumerate(records) if m.id == tutorial.id), None)
        if pos is None:
            raise TutorialNotFound(tutorial.id)

        data = encode_content(tutorial.content)
        previous = self._blobs.read(tutorial.id)
        size = self._blobs.write(tutorial.id, data)
        meta = TutorialMetadata.from_tutorial(tutorial, size)
        try:
            records[pos] = meta
            self._index.save(records)
        except Exception:
            self._compensate(tutorial.id, previous)
            raise
        logger.info("Updated tutorial %s (%d bytes)", tutorial.id, size)
        return meta

    def delete(self, tutorial_id: str) -> None:
        records = self._index.load()
        self._index.save([m for m in records if m.id != tutorial_id])
        if self._blobs.delete(tutorial_id):
            logger.info("Deleted tutorial %s", tutorial_id)

    def _compensate(self, tutorial_id: str, previous: bytes | None) -> None:
        if previous is None:
            self._discard_blob(tutorial_id)
        else:
            self._restore_blob(tutorial_id, previous)

    def _discard_blob(self, tutorial_id: str) -> None:
        try:
            self._blobs.delete(tutorial_id)
        except StorageError:
            logger.exception("Could not remove orphaned content blob for %s", tutorial_id)

    def _restore_blob(self, tutorial_id: str, data: bytes) -> None:
        try:
            self._blobs.write(tutorial_id, data)
        except StorageError:
            logger.exception("Could not restore previous content blob for %s", tutorial_id)
