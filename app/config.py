import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    strict_index: bool = False

    @property
    def metadata_path(self) -> Path:
        return self.data_dir / "metadata.json"

    @property
    def tutorials_dir(self) -> Path:
        return self.data_dir / "tutorials"

    @property
    def legacy_path(self) -> Path:
        return self.data_dir / "tutorials.json"

    @property
    def backup_path(self) -> Path:
        return self.data_dir / "tutorials.json.backup"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def load_config() -> AppConfig:
    return AppConfig(
        data_dir=Path(os.environ.get("TUTORIALS_DATA_DIR", "data")),
        strict_index=_env_flag("TUTORIALS_STRICT_INDEX"),
    )
