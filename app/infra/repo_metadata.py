import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable, TypeVar

from app.features.tutorials.models import TutorialMetadata
from app.infra.errors import CorruptIndexError, StorageIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_records(raw: str, path: Path) -> list[dict[str, Any]]:
    """Decode a JSON array of tutorial records, raising CorruptIndexError on any shape problem."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptIndexError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptIndexError(path, f"expected a JSON array, got {type(data).__name__}")
    for pos, item in enumerate(data):
        if not isinstance(item, dict) or "id" not in item:
            raise CorruptIndexError(path, f"record {pos} is not an object with an id")
    return data


def convert_records(
    records: list[dict[str, Any]], path: Path, from_dict: Callable[[dict[str, Any]], T]
) -> list[T]:
    converted: list[T] = []
    for pos, record in enumerate(records):
        try:
            converted.append(from_dict(record))
        except (TypeError, ValueError) as e:
            raise CorruptIndexError(path, f"record {pos} has a malformed field: {e}") from e
    return converted


class MetadataIndex:
    """Whole-document read/write of the ordered tutorial metadata list.

    A document that exists but cannot be parsed is either reported by
    raising CorruptIndexError (strict) or logged, copied aside to
    ``<name>.corrupt`` and read as an empty index (non-strict).
    """

    def __init__(self, path: Path, *, strict: bool = False) -> None:
        self._path = path
        self._strict = strict

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corrupt_copy_path(self) -> Path:
        return self._path.with_name(self._path.name + ".corrupt")

    def _ensure_dir(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("mkdir", self._path.parent, e) from e

    def load(self, strict: bool | None = None) -> list[TutorialMetadata]:
        strict = self._strict if strict is None else strict
        self._ensure_dir()
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            return self._corrupt(CorruptIndexError(self._path, f"not UTF-8: {e}"), strict)
        except OSError as e:
            raise StorageIOError("read", self._path, e) from e

        try:
            records = parse_records(raw, self._path)
            return convert_records(records, self._path, TutorialMetadata.from_dict)
        except CorruptIndexError as e:
            return self._corrupt(e, strict)

    def _corrupt(self, err: CorruptIndexError, strict: bool) -> list[TutorialMetadata]:
        if strict:
            raise err
        try:
            shutil.copyfile(self._path, self.corrupt_copy_path)
        except OSError as e:
            raise StorageIOError("copy", self.corrupt_copy_path, e) from err
        logger.error(
            "%s; treating index as empty, unreadable copy kept at %s",
            err,
            self.corrupt_copy_path,
        )
        return []

    def save(self, records: list[TutorialMetadata]) -> None:
        self._ensure_dir()
        payload = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
        try:
            self._path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise StorageIOError("write", self._path, e) from e
        logger.debug("Saved %d metadata records to %s", len(records), self._path)
