from fastapi import APIRouter

from archon.models import HealthStatus

router = APIRouter(tags=["utils"])


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    return HealthStatus()
