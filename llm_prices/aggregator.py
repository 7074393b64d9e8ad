"""
Aggregator: queries every configured provider and returns one combined list.

Order of work per request
─────────────────────────
OpenRouter → Together AI → Groq → Replicate → curated Hugging Face list

Providers run one after another; within a provider, enrichment lookups run
concurrently and are all awaited before moving on.  A provider that is
unconfigured, unreachable, or returns garbage contributes nothing and never
affects the others.
"""

import logging
from typing import Optional

import httpx

from llm_prices.config import Credentials
from llm_prices.models import FetchResult, ModelRecord
from llm_prices.providers.base import ModelProvider
from llm_prices.providers.groq import GroqProvider
from llm_prices.providers.huggingface import HuggingFaceCurated
from llm_prices.providers.openrouter import OpenRouterProvider
from llm_prices.providers.replicate import ReplicateProvider
from llm_prices.providers.together import TogetherProvider

logger = logging.getLogger(__name__)


class ModelAggregator:
    """Builds the unified model list for one request."""

    def __init__(
        self,
        credentials: Credentials,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        # Injected in tests to stand in for the upstream APIs.
        self._transport = transport
        self._providers: list[ModelProvider] = [
            OpenRouterProvider(
                credentials.openrouter_api_key,
                hf_token=credentials.hf_token,
                github_pat=credentials.github_pat,
            ),
            TogetherProvider(credentials.together_api_key),
            GroqProvider(credentials.groq_api_key),
            ReplicateProvider(credentials.replicate_api_token),
            HuggingFaceCurated(credentials.hf_token),
        ]

    async def collect(self) -> list[ModelRecord]:
        results: list[ModelRecord] = []

        async with httpx.AsyncClient(transport=self._transport) as client:
            for provider in self._providers:
                outcome = await self._run(provider, client)
                if outcome.ok:
                    if provider.enabled:
                        logger.info(
                            "Provider done | provider=%s records=%d",
                            outcome.provider,
                            len(outcome.records),
                        )
                    results.extend(outcome.records)
                else:
                    logger.info(
                        "Provider contributed nothing | provider=%s reason=%s",
                        outcome.provider,
                        outcome.error,
                    )

        logger.info("Aggregation complete | total_records=%d", len(results))
        return results

    async def _run(self, provider: ModelProvider, client: httpx.AsyncClient) -> FetchResult:
        try:
            return await provider.fetch(client)
        except Exception as exc:
            logger.exception("Unexpected error fetching %s", provider.name)
            return FetchResult.failure(provider.name, f"unexpected error: {exc}")
