"""
Together AI listing.

The endpoint returns a bare JSON array (older deployments wrapped it in
``data``).  Current pricing fields ``input``/``output`` are already USD per
1M tokens; the legacy ``prompt``/``completion`` fields are per token.
"""

from typing import Any

from llm_prices import normalize
from llm_prices.config import TOGETHER, TOGETHER_MODELS_URL
from llm_prices.models import ModelRecord
from llm_prices.providers.base import ModelProvider


class TogetherProvider(ModelProvider):
    name = TOGETHER
    url = TOGETHER_MODELS_URL

    def extract(self, payload: Any) -> list[dict]:
        if isinstance(payload, list):
            return payload
        return payload.get("data") or []

    def to_record(self, entry: dict) -> ModelRecord:
        pricing = entry.get("pricing") or {}
        if "input" in pricing or "output" in pricing:
            prompt_price = normalize.price(pricing.get("input"))
            completion_price = normalize.price(pricing.get("output"))
        else:
            prompt_price = normalize.per_million(pricing.get("prompt"))
            completion_price = normalize.per_million(pricing.get("completion"))

        return ModelRecord(
            provider=self.name,
            model=entry.get("id") or entry.get("name") or "",
            context_length=normalize.context_length(entry, "max_model_len", "context_length"),
            prompt_price=prompt_price,
            completion_price=completion_price,
            description=normalize.description(entry),
        )
