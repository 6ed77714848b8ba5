from __future__ import annotations

from fastapi import APIRouter, Response, status

from tableorder.infrastructure.db.session import ping_database

router = APIRouter()


@router.get("/")
def welcome() -> dict[str, str]:
    return {"message": "Welcome to Sukab Restaurant"}


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    postgres_ready = ping_database()
    if postgres_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"postgres": postgres_ready},
    }
