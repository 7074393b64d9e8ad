"""
Best-effort popularity lookups.

  - GitHub stars for the source repository inferred from a model id
  - Hugging Face likes for a model hosted on the Hub

Every lookup returns None on any failure; nothing here raises into the
aggregator.
"""

import logging
from typing import Optional

import httpx

from llm_prices.config import (
    GITHUB_REPO_OVERRIDES,
    GITHUB_REPO_RULES,
    GITHUB_REPOS_URL,
    HF_MODELS_URL,
    GitHubRepo,
)

logger = logging.getLogger(__name__)


def detect_github_repo(model_id: str, provider_prefix: str = "") -> Optional[GitHubRepo]:
    """
    Resolve the (owner, repo) to read stars from.

    Exact-id overrides take precedence; otherwise the first heuristic rule
    matching the model id or the provider prefix wins.  None means no lookup.
    """
    model_id = model_id or ""
    override = GITHUB_REPO_OVERRIDES.get(model_id)
    if override is not None:
        return override

    for rule in GITHUB_REPO_RULES:
        if rule.matches(model_id, provider_prefix or ""):
            return rule.repo

    logger.debug("No GitHub repo rule for %s", model_id)
    return None


async def fetch_github_stars(
    client: httpx.AsyncClient,
    repo: GitHubRepo,
    token: Optional[str] = None,
) -> Optional[int]:
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        response = await client.get(f"{GITHUB_REPOS_URL}/{repo.slug}", headers=headers)
        if response.status_code != 200:
            logger.warning(
                "GitHub stars fetch failed for %s: %d", repo.slug, response.status_code
            )
            return None
        return int(response.json().get("stargazers_count") or 0)
    except (httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
        logger.error("GitHub stars fetch error for %s: %s", repo.slug, exc)
        return None


async def fetch_hf_likes(
    client: httpx.AsyncClient,
    model_id: Optional[str],
    token: Optional[str],
) -> Optional[int]:
    """Likes for a Hub model; skipped (None) without both an id and a token."""
    if not model_id or not token:
        return None

    try:
        response = await client.get(
            f"{HF_MODELS_URL}/{model_id}",
            headers={"Authorization": f"Bearer {token}"},
        )
        if response.status_code != 200:
            logger.debug("HF likes lookup for %s returned %d", model_id, response.status_code)
            return None
        return int(response.json().get("likes") or 0)
    except (httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
        logger.error("HF likes fetch error for %s: %s", model_id, exc)
        return None
