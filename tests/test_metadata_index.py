import json
import logging
from pathlib import Path

import pytest

from app.features.tutorials.models import TutorialMetadata
from app.infra.errors import CorruptIndexError, StorageIOError
from app.infra.repo_metadata import MetadataIndex


def _meta(tutorial_id: str, size: int = 10) -> TutorialMetadata:
    return TutorialMetadata(
        id=tutorial_id,
        title=tutorial_id.upper(),
        description="",
        category="General",
        tags=["xss"],
        created_at="2024-01-01T00:00:00Z",
        file_size=size,
    )


def test_missing_document_is_empty_and_creates_dir(tmp_path: Path) -> None:
    index = MetadataIndex(tmp_path / "data" / "metadata.json")

    assert index.load() == []
    assert (tmp_path / "data").is_dir()


def test_save_then_load_keeps_order(tmp_path: Path) -> None:
    index = MetadataIndex(tmp_path / "metadata.json")
    records = [_meta("b"), _meta("a"), _meta("c")]

    index.save(records)

    assert index.load() == records
    on_disk = json.loads((tmp_path / "metadata.json").read_text(encoding="utf-8"))
    assert [r["id"] for r in on_disk] == ["b", "a", "c"]
    assert on_disk[0]["fileSize"] == 10
    assert on_disk[0]["createdAt"] == "2024-01-01T00:00:00Z"


def test_missing_optional_fields_get_defaults(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps([{"id": "a", "title": "A", "fileSize": 3}]), encoding="utf-8")

    (meta,) = MetadataIndex(path).load()

    assert meta.category == "General"
    assert meta.tags == []
    assert meta.description == ""


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"id": "a"}',
        "[1, 2]",
        '[{"title": "no id"}]',
        '[{"id": "a", "fileSize": "abc"}]',
        '[{"id": "a", "tags": 5}]',
    ],
)
def test_corrupt_document_non_strict_is_empty_and_kept_aside(
    tmp_path: Path, raw: str, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "metadata.json"
    path.write_text(raw, encoding="utf-8")
    index = MetadataIndex(path)

    with caplog.at_level(logging.ERROR):
        assert index.load() == []

    assert index.corrupt_copy_path.read_text(encoding="utf-8") == raw
    assert "Unreadable tutorial index" in caplog.text


def test_corrupt_document_strict_raises(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CorruptIndexError) as excinfo:
        MetadataIndex(path, strict=True).load()
    assert excinfo.value.path == path

    with pytest.raises(CorruptIndexError):
        MetadataIndex(path).load(strict=True)


def test_save_failure_is_typed(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.mkdir()

    with pytest.raises(StorageIOError) as excinfo:
        MetadataIndex(path).save([_meta("a")])
    assert excinfo.value.operation == "write"
    assert excinfo.value.path == path


def test_malformed_field_strict_raises(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text('[{"id": "a", "fileSize": "abc"}]', encoding="utf-8")

    with pytest.raises(CorruptIndexError) as excinfo:
        MetadataIndex(path, strict=True).load()
    assert "record 0" in excinfo.value.reason
