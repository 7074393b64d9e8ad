"""
Pydantic response models for the llm-prices API, plus the internal
per-provider fetch result.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Unified record
# ---------------------------------------------------------------------------

class ModelRecord(BaseModel):
    provider: str
    model: str
    context_length: Optional[int] = Field(
        default=None, description="Token window size, when the provider reports one."
    )
    prompt_price: Optional[float] = Field(
        default=None,
        description="USD per 1M prompt tokens. None = unknown, 0 = free.",
    )
    completion_price: Optional[float] = Field(
        default=None,
        description="USD per 1M completion tokens. None = unknown, 0 = free.",
    )
    description: str = ""
    stars: Optional[int] = Field(
        default=None, description="GitHub stars of the inferred source repository."
    )
    hf_likes: Optional[int] = Field(default=None, description="Hugging Face likes.")


# ---------------------------------------------------------------------------
# /api/models endpoint response
# ---------------------------------------------------------------------------

class ModelsResponse(BaseModel):
    models: list[ModelRecord]


# ---------------------------------------------------------------------------
# /health endpoint response
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    providers_configured: list[str]


# ---------------------------------------------------------------------------
# Provider fetch outcome (internal)
# ---------------------------------------------------------------------------

@dataclass
class FetchResult:
    """
    Outcome of one provider call.  ``error`` carries a reason for logging;
    the aggregator treats any failure as an empty contribution.
    """
    provider: str
    records: list[ModelRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, provider: str, reason: str) -> "FetchResult":
        return cls(provider=provider, error=reason)
