import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `import app...` works without installing the package.
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def cfg(tmp_path: Path):
    from app.config import AppConfig

    return AppConfig(data_dir=tmp_path / "data")


@pytest.fixture
def repo(cfg):
    from app.infra.repo_tutorials import TutorialRepo

    return TutorialRepo.from_config(cfg)
