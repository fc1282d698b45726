import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException

from app.features.tutorials.models import DEFAULT_CATEGORY, Tutorial
from app.features.tutorials.schemas import TutorialCreate, TutorialUpdate
from app.features.tutorials.slug import slugify
from app.infra.errors import StorageError, TutorialNotFound
from app.infra.repo_tutorials import TutorialRepo

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def storage_failure(e: StorageError) -> HTTPException:
    # Paths stay in the log; the client only gets a code.
    logger.error("Tutorial storage failure: %s", e)
    return HTTPException(status_code=500, detail="storage_error")


class TutorialsService:
    def __init__(self, *, repo: TutorialRepo) -> None:
        self._repo = repo

    def list_tutorials(self) -> dict[str, Any]:
        try:
            tutorials = self._repo.list()
        except StorageError as e:
            raise storage_failure(e)
        return {"tutorials": [t.to_dict() for t in tutorials]}

    def get_tutorial(self, *, tutorial_id: str) -> dict[str, Any]:
        try:
            tutorial = self._repo.get(tutorial_id)
        except TutorialNotFound:
            raise HTTPException(status_code=404, detail="tutorial_not_found")
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid_tutorial_id")
        except StorageError as e:
            raise storage_failure(e)
        return {"tutorial": tutorial.to_dict()}

    def create_tutorial(self, *, body: TutorialCreate) -> dict[str, Any]:
        tutorial_id = slugify(body.title)
        if not tutorial_id:
            raise HTTPException(status_code=400, detail="invalid_title")

        tutorial = Tutorial(
            id=tutorial_id,
            title=body.title,
            description=body.description or "",
            content=body.content,
            category=body.category or DEFAULT_CATEGORY,
            tags=body.tags or [],
            created_at=utc_now_iso(),
        )
        try:
            self._repo.save(tutorial)
        except UnicodeEncodeError:
            raise HTTPException(status_code=400, detail="invalid_content")
        except StorageError as e:
            raise storage_failure(e)
        return {"success": True, "tutorial": tutorial.to_dict()}

    def update_tutorial(self, *, tutorial_id: str, body: TutorialUpdate) -> dict[str, Any]:
        try:
            existing = self._repo.get(tutorial_id)
            changes = body.model_dump(exclude_unset=True, exclude_none=True)
            tutorial = replace(existing, **changes)
            self._repo.update(tutorial)
        except TutorialNotFound:
            raise HTTPException(status_code=404, detail="tutorial_not_found")
        except UnicodeEncodeError:
            raise HTTPException(status_code=400, detail="invalid_content")
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid_tutorial_id")
        except StorageError as e:
            raise storage_failure(e)
        return {"success": True, "tutorial": tutorial.to_dict()}

    def delete_tutorial(self, *, tutorial_id: str) -> dict[str, Any]:
        try:
            self._repo.delete(tutorial_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid_tutorial_id")
        except StorageError as e:
            raise storage_failure(e)
        return {"success": True}
