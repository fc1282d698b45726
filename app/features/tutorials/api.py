from typing import Any

from fastapi import APIRouter, Request

from app.features.tutorials.schemas import TutorialCreate, TutorialUpdate
from app.features.tutorials.service import TutorialsService

router = APIRouter(prefix="/api/tutorials", tags=["tutorials"])


def _service(request: Request) -> TutorialsService:
    return TutorialsService(repo=request.app.state.repo)


@router.get("")
def list_tutorials(request: Request) -> dict[str, Any]:
    return _service(request).list_tutorials()


@router.post("")
def create_tutorial(request: Request, body: TutorialCreate) -> dict[str, Any]:
    return _service(request).create_tutorial(body=body)


@router.get("/{tutorial_id}")
def get_tutorial(request: Request, tutorial_id: str) -> dict[str, Any]:
    return _service(request).get_tutorial(tutorial_id=tutorial_id)


@router.put("/{tutorial_id}")
def update_tutorial(request: Request, tutorial_id: str, body: TutorialUpdate) -> dict[str, Any]:
    return _service(request).update_tutorial(tutorial_id=tutorial_id, body=body)


@router.delete("/{tutorial_id}")
def delete_tutorial(request: Request, tutorial_id: str) -> dict[str, Any]:
    return _service(request).delete_tutorial(tutorial_id=tutorial_id)
