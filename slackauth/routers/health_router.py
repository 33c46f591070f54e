from fastapi import APIRouter, Depends
from dependency_injector.wiring import inject, Provide

from slackauth.containers import Container
from slackauth.providers.registry import ProviderRegistry
from slackauth.schemas.health import HealthCheckResponse

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
@inject
async def health_check(
    registry: ProviderRegistry = Depends(Provide[Container.oauth_providers.registry]),
) -> HealthCheckResponse:
    """Health check endpoint."""

    return HealthCheckResponse(providers=registry.names())
