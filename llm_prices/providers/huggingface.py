"""
Curated open-weight models listed under "Hugging Face".

There is no listing call: the list is HF_CURATED_MODELS, emitted when an HF
token is configured, each record enriched with its Hub likes.
"""

import logging

import httpx

from llm_prices.config import HF_CURATED_MODELS, HUGGING_FACE
from llm_prices.enrichment import fetch_hf_likes
from llm_prices.models import FetchResult, ModelRecord
from llm_prices.providers.base import ModelProvider, settle_all

logger = logging.getLogger(__name__)


class HuggingFaceCurated(ModelProvider):
    name = HUGGING_FACE

    async def fetch(self, client: httpx.AsyncClient) -> FetchResult:
        if not self.enabled:
            logger.debug("%s skipped: no credential configured", self.name)
            return FetchResult(provider=self.name)

        records = [
            ModelRecord(
                provider=self.name,
                model=curated.model_id,
                context_length=curated.context_length,
                prompt_price=curated.prompt_price,
                completion_price=curated.completion_price,
                description=curated.description,
            )
            for curated in HF_CURATED_MODELS
        ]

        async def with_likes(record: ModelRecord) -> ModelRecord:
            likes = await fetch_hf_likes(client, record.model, self._api_key)
            return record.model_copy(update={"hf_likes": likes})

        records = await settle_all(records, [with_likes(r) for r in records])
        return FetchResult(provider=self.name, records=records)
