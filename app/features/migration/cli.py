import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from app.config import load_config
from app.features.migration.service import migrate_from_legacy
from app.features.stats.service import storage_stats
from app.infra.errors import StorageError
from app.infra.repo_metadata import MetadataIndex

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert the legacy tutorials.json into metadata.json plus one file per tutorial"
    )
    parser.add_argument(
        "--data-dir",
        help="Directory holding tutorials.json (default: $TUTORIALS_DATA_DIR or ./data)",
        default=None,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config()
    if args.data_dir:
        cfg = replace(cfg, data_dir=Path(args.data_dir))

    try:
        result = migrate_from_legacy(cfg)
        stats = storage_stats(MetadataIndex(cfg.metadata_path))
    except (StorageError, ValueError):
        logger.exception("Migration failed")
        return 1

    if result is not None:
        print(f"\nMigrated {result.migrated} tutorials, backup at {result.backup_path}")
    print("\nStorage statistics:")
    print(f"   Total tutorials: {stats.total_tutorials}")
    print(f"   Total size: {stats.total_size_mb} MB ({stats.total_size_gb} GB)")
    if stats.tutorials:
        print("\nIndividual tutorial sizes:")
        for t in stats.tutorials:
            print(f"   - {t.title}: {t.size_mb} MB")
    return 0


if __name__ == "__main__":
    sys.exit(main())
