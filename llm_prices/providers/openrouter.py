"""
OpenRouter listing.  Prices arrive as per-token USD strings; each record is
enriched with GitHub stars and, when OpenRouter names a Hub id, HF likes.
"""

import logging
from typing import Optional

import httpx

from llm_prices import normalize
from llm_prices.config import OPENROUTER, OPENROUTER_MODELS_URL
from llm_prices.enrichment import detect_github_repo, fetch_github_stars, fetch_hf_likes
from llm_prices.models import ModelRecord
from llm_prices.providers.base import ModelProvider, settle_all

logger = logging.getLogger(__name__)


class OpenRouterProvider(ModelProvider):
    name = OPENROUTER
    url = OPENROUTER_MODELS_URL

    def __init__(
        self,
        api_key: Optional[str],
        hf_token: Optional[str] = None,
        github_pat: Optional[str] = None,
    ) -> None:
        super().__init__(api_key)
        self._hf_token = hf_token
        self._github_pat = github_pat

    def to_record(self, entry: dict) -> ModelRecord:
        pricing = entry.get("pricing") or {}
        return ModelRecord(
            provider=self.name,
            model=entry.get("id") or entry.get("name") or "",
            context_length=normalize.context_length(entry, "context_length"),
            prompt_price=normalize.per_million(pricing.get("prompt")),
            completion_price=normalize.per_million(pricing.get("completion")),
            description=normalize.description(entry),
        )

    async def enrich(
        self,
        client: httpx.AsyncClient,
        entries: list[dict],
        records: list[ModelRecord],
    ) -> list[ModelRecord]:
        async def enrich_one(entry: dict, record: ModelRecord) -> ModelRecord:
            prefix = record.model.split("/")[0]
            repo = detect_github_repo(record.model, prefix)
            stars = None
            if repo is not None:
                stars = await fetch_github_stars(client, repo, self._github_pat)
            likes = await fetch_hf_likes(
                client, entry.get("hugging_face_id"), self._hf_token
            )
            return record.model_copy(update={"stars": stars, "hf_likes": likes})

        enriched = await settle_all(
            records,
            [enrich_one(entry, record) for entry, record in zip(entries, records)],
        )
        logger.debug("OpenRouter enrichment settled for %d records", len(enriched))
        return enriched
