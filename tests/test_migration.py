import json

import pytest

from app.features.migration.cli import main
from app.features.migration.service import migrate_from_legacy
from app.infra.errors import CorruptIndexError
from app.infra.repo_tutorials import TutorialRepo

LEGACY = [
    {
        "id": "a",
        "title": "A",
        "content": "hi",
        "category": "X",
        "tags": [],
        "createdAt": "2024-01-01T00:00:00Z",
    }
]


def _write_legacy(cfg, records) -> str:
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    raw = json.dumps(records)
    cfg.legacy_path.write_text(raw, encoding="utf-8")
    return raw


def test_migrates_legacy_document(cfg) -> None:
    raw = _write_legacy(cfg, LEGACY)

    result = migrate_from_legacy(cfg)

    assert result is not None
    assert result.migrated == 1
    assert result.backup_path == cfg.backup_path
    assert (cfg.tutorials_dir / "a.html").read_text(encoding="utf-8") == "hi"
    metadata = json.loads(cfg.metadata_path.read_text(encoding="utf-8"))
    assert len(metadata) == 1
    assert metadata[0]["id"] == "a"
    assert metadata[0]["fileSize"] == 2
    assert metadata[0]["category"] == "X"
    assert "content" not in metadata[0]
    assert not cfg.legacy_path.exists()
    assert cfg.backup_path.read_text(encoding="utf-8") == raw


def test_migrated_data_is_readable_through_repo(cfg) -> None:
    _write_legacy(
        cfg,
        LEGACY + [{"id": "b", "title": "B", "content": "<b>bold</b>", "createdAt": "2024-02-01T00:00:00Z"}],
    )

    migrate_from_legacy(cfg)
    repo = TutorialRepo.from_config(cfg)

    assert [t.id for t in repo.list()] == ["a", "b"]
    b = repo.get("b")
    assert b.content == "<b>bold</b>"
    assert b.category == "General"
    assert b.tags == []


def test_nothing_to_migrate(cfg) -> None:
    assert migrate_from_legacy(cfg) is None
    assert not cfg.metadata_path.exists()


def test_second_run_is_a_noop(cfg) -> None:
    _write_legacy(cfg, LEGACY)
    migrate_from_legacy(cfg)
    index_after_first = cfg.metadata_path.read_bytes()

    assert migrate_from_legacy(cfg) is None
    assert cfg.metadata_path.read_bytes() == index_after_first


def test_malformed_legacy_document_is_left_in_place(cfg) -> None:
    cfg.data_dir.mkdir(parents=True)
    cfg.legacy_path.write_text('{"tutorials": []}', encoding="utf-8")

    with pytest.raises(CorruptIndexError):
        migrate_from_legacy(cfg)

    assert cfg.legacy_path.exists()
    assert not cfg.metadata_path.exists()


def test_cli_migrates_and_prints_stats(cfg, capsys: pytest.CaptureFixture[str]) -> None:
    _write_legacy(cfg, LEGACY)

    assert main(["--data-dir", str(cfg.data_dir)]) == 0

    out = capsys.readouterr().out
    assert "Migrated 1 tutorials" in out
    assert "Total tutorials: 1" in out
    assert "- A: 0.00 MB" in out


def test_cli_reports_failure(cfg) -> None:
    cfg.data_dir.mkdir(parents=True)
    cfg.legacy_path.write_text("not json", encoding="utf-8")

    assert main(["--data-dir", str(cfg.data_dir)]) == 1


def test_unstorable_content_fails_before_any_blob_is_written(cfg) -> None:
    _write_legacy(
        cfg,
        LEGACY + [{"id": "b", "title": "B", "content": "bad \ud800", "createdAt": "2024-02-01T00:00:00Z"}],
    )

    with pytest.raises(CorruptIndexError):
        migrate_from_legacy(cfg)

    assert not (cfg.tutorials_dir / "a.html").exists()
    assert not cfg.metadata_path.exists()
    assert cfg.legacy_path.exists()


def test_malformed_field_fails_before_any_blob_is_written(cfg) -> None:
    _write_legacy(cfg, LEGACY + [{"id": "b", "title": "B", "content": "x", "tags": 5}])

    with pytest.raises(CorruptIndexError):
        migrate_from_legacy(cfg)

    assert not (cfg.tutorials_dir / "a.html").exists()
    assert cfg.legacy_path.exists()
