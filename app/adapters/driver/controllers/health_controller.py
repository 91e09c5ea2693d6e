from fastapi import APIRouter
from pydantic import BaseModel
from app.domain.services.bootstrap import ServiceBootstrapper
from app.domain.services.component_context import context
from infra.settings import settings

router = APIRouter(prefix="/health", tags=["health"])

_context = context

class HealthResponse(BaseModel):
    service: str
    deployment: str
    message: str | None = None

@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    bootstrapper = _context.get(ServiceBootstrapper)
    result = bootstrapper.deployment if bootstrapper else None
    if result is None:
        status = "pending"
    else:
        status = "deployed" if result.success else "failed"
    return HealthResponse(
        service=settings.SERVICE_NAME,
        deployment=status,
        message=result.message if result else None,
    )
