"""Health check endpoint."""

from pydantic import BaseModel

from mixedpart.core.logger import LogIcon, logger
from mixedpart.core.router import Router
from mixedpart.core.settings import settings as st

router = Router(__file__, prefix="/")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    failure_policy: str


@router.get("/health")
async def health_check() -> HealthResponse:
    logger.info("Health check requested", icon=LogIcon.HEALTHCHECK)
    return HealthResponse(
        status="healthy",
        service=st.API_NAME,
        version=st.API_VERSION,
        failure_policy=st.FAILURE_POLICY.value,
    )
