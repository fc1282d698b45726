import logging

from fastapi import FastAPI

from app.config import AppConfig, load_config
from app.features.stats.api import router as stats_router
from app.features.tutorials.api import router as tutorials_router
from app.infra.repo_tutorials import TutorialRepo

logger = logging.getLogger(__name__)


def create_app(cfg: AppConfig | None = None) -> FastAPI:
    cfg = cfg or load_config()
    if cfg.legacy_path.exists():
        logger.warning(
            "Legacy %s still present; run tutorials-migrate before serving it", cfg.legacy_path
        )

    app = FastAPI(title="Security Tutorials Library", version="0.1.0")
    app.state.cfg = cfg
    app.state.repo = TutorialRepo.from_config(cfg)
    # Stats first so /stats is not captured by /{tutorial_id}.
    app.include_router(stats_router)
    app.include_router(tutorials_router)
    return app


app = create_app()
