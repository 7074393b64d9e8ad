"""
Groq listing (OpenAI-compatible).  The endpoint has no prices, so they come
from the static GROQ_PRICING table.
"""

from llm_prices import normalize
from llm_prices.config import GROQ, GROQ_MODELS_URL, groq_price
from llm_prices.models import ModelRecord
from llm_prices.providers.base import ModelProvider


class GroqProvider(ModelProvider):
    name = GROQ
    url = GROQ_MODELS_URL

    def to_record(self, entry: dict) -> ModelRecord:
        model_id = entry.get("id") or ""
        pricing = groq_price(model_id)
        return ModelRecord(
            provider=self.name,
            model=model_id,
            context_length=normalize.context_length(entry, "context_window", "context_length"),
            prompt_price=pricing.prompt,
            completion_price=pricing.completion,
            description=normalize.description(entry),
        )
