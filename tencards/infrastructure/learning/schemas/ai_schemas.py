"""Pydantic schemas for model provider diagnostics."""

from pydantic import BaseModel, Field


class AIHealthResponse(BaseModel):
    ok: bool
    latency_ms: float = Field(..., ge=0)
    message: str


class AIUsageResponse(BaseModel):
    total_requests: int
    successful_requests: int
    failed_requests: int
    total_tokens: int
