"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict:
    state = request.app.state
    services = [
        await state.import_service.health_check(),
        await state.template_service.health_check(),
    ]
    status = "ready" if all(s["status"] == "healthy" for s in services) else "degraded"
    return {"status": status, "services": services}
