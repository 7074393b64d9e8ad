"""
Replicate listing.  Replicate bills by compute time, so there is no token
price and no context length to report.
"""

from typing import Any

from llm_prices import normalize
from llm_prices.config import REPLICATE, REPLICATE_MODELS_URL
from llm_prices.models import ModelRecord
from llm_prices.providers.base import ModelProvider


def _owner_name(owner: Any) -> str:
    # The API returns a plain username; some responses nest it in an object.
    if isinstance(owner, dict):
        return owner.get("username") or ""
    return owner or ""


class ReplicateProvider(ModelProvider):
    name = REPLICATE
    url = REPLICATE_MODELS_URL
    auth_scheme = "Token"

    def extract(self, payload: Any) -> list[dict]:
        return payload.get("results") or []

    def to_record(self, entry: dict) -> ModelRecord:
        return ModelRecord(
            provider=self.name,
            model=f"{_owner_name(entry.get('owner'))}/{entry.get('name') or ''}",
            context_length=None,
            prompt_price=None,
            completion_price=None,
            description=normalize.description(entry),
        )
