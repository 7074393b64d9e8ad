"""
Shared fetch logic for provider model listings.

Responsibilities:
  - Skip the provider when its credential is absent
  - GET the listing endpoint with the provider's auth header
  - Turn non-2xx statuses and transport/parse errors into a failed
    FetchResult (logged, never raised)
  - Map raw entries to ModelRecord one at a time (a malformed entry is
    skipped, its siblings kept), then run per-record enrichment
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

import httpx
from pydantic import ValidationError

from llm_prices.models import FetchResult, ModelRecord

logger = logging.getLogger(__name__)

_BODY_EXCERPT = 200


async def settle_all(
    records: list[ModelRecord],
    lookups: list[Awaitable[ModelRecord]],
) -> list[ModelRecord]:
    """
    Await one enrichment per record concurrently and wait for all of them.
    ``lookups[i]`` enriches ``records[i]``; a record whose lookup raised is
    kept as-is.
    """
    results = await asyncio.gather(*lookups, return_exceptions=True)
    settled = []
    for record, result in zip(records, results):
        if isinstance(result, BaseException):
            logger.error("Enrichment failed for %s: %s", record.model, result)
            settled.append(record)
        else:
            settled.append(result)
    return settled


class ModelProvider:
    """Base class for one provider's model-listing fetcher."""

    name: str = ""
    url: str = ""
    auth_scheme: str = "Bearer"

    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def headers(self) -> dict:
        return {
            "Authorization": f"{self.auth_scheme} {self._api_key}",
            "Content-Type": "application/json",
        }

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def extract(self, payload: Any) -> list[dict]:
        """Locate the list of raw model entries in the response body."""
        return payload.get("data") or []

    def to_record(self, entry: dict) -> ModelRecord:
        raise NotImplementedError

    async def enrich(
        self,
        client: httpx.AsyncClient,
        entries: list[dict],
        records: list[ModelRecord],
    ) -> list[ModelRecord]:
        return records

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(self, client: httpx.AsyncClient) -> FetchResult:
        if not self.enabled:
            logger.debug("%s skipped: no credential configured", self.name)
            return FetchResult(provider=self.name)

        logger.info("Fetching %s models | url=%s", self.name, self.url)
        try:
            response = await client.get(self.url, headers=self.headers())
        except httpx.HTTPError as exc:
            logger.error("%s fetch error: %s", self.name, exc)
            return FetchResult.failure(self.name, f"request failed: {exc}")

        if not response.is_success:
            logger.warning(
                "%s API error: %d %s",
                self.name,
                response.status_code,
                response.text[:_BODY_EXCERPT],
            )
            return FetchResult.failure(self.name, f"HTTP {response.status_code}")

        try:
            entries = self.extract(response.json())
            if not isinstance(entries, list):
                raise TypeError(f"expected a list of models, got {type(entries).__name__}")
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.error("%s response could not be parsed: %s", self.name, exc)
            return FetchResult.failure(self.name, f"unparseable response: {exc}")

        kept_entries, records = self._map_entries(entries)
        records = await self.enrich(client, kept_entries, records)
        return FetchResult(provider=self.name, records=records)

    def _map_entries(self, entries: list) -> tuple[list[dict], list[ModelRecord]]:
        """Map each entry on its own; a malformed entry is logged and skipped."""
        kept_entries: list[dict] = []
        records: list[ModelRecord] = []
        for index, entry in enumerate(entries):
            try:
                record = self.to_record(entry)
            except (ValidationError, ValueError, TypeError, KeyError, AttributeError) as exc:
                logger.error("%s entry %d skipped: %s", self.name, index, exc)
                continue
            kept_entries.append(entry)
            records.append(record)
        return kept_entries, records
