"""Diagnostics for the model provider."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from tencards.core import container
from tencards.infrastructure.ai.ai_service import AIGenerationService
from tencards.infrastructure.identity.dependencies import get_current_user_id
from tencards.infrastructure.learning.schemas import AIHealthResponse, AIUsageResponse

router = APIRouter(prefix="/ai", tags=["ai"])


def get_ai_service() -> AIGenerationService:
    return container.ai_flashcard_service()


@router.get("/health")
async def ai_health(
    _user_id: Annotated[UUID, Depends(get_current_user_id)],
    service: Annotated[AIGenerationService, Depends(get_ai_service)],
) -> AIHealthResponse:
    """
    Check that the model provider is reachable.

    Sends a minimal completion request. With mock generation enabled no
    request is made.
    """
    result = await service.health_check()
    return AIHealthResponse(ok=result.ok, latency_ms=result.latency_ms, message=result.message)


@router.get("/usage")
async def ai_usage(
    _user_id: Annotated[UUID, Depends(get_current_user_id)],
    service: Annotated[AIGenerationService, Depends(get_ai_service)],
) -> AIUsageResponse:
    """Process-wide model request counters since startup."""
    usage = service.usage()
    return AIUsageResponse(
        total_requests=usage.total_requests,
        successful_requests=usage.successful_requests,
        failed_requests=usage.failed_requests,
        total_tokens=usage.total_tokens,
    )
