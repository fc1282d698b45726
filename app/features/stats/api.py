from typing import Any

from fastapi import APIRouter, Request

from app.features.stats.service import storage_stats
from app.features.tutorials.service import storage_failure
from app.infra.errors import StorageError

router = APIRouter(prefix="/api/tutorials", tags=["stats"])


@router.get("/stats")
def get_storage_stats(request: Request) -> dict[str, Any]:
    try:
        stats = storage_stats(request.app.state.repo.index)
    except StorageError as e:
        raise storage_failure(e)
    return stats.to_dict()
