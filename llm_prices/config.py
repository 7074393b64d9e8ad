"""
Credentials, upstream endpoints, and the static lookup tables used by the
aggregator.

All tables are built once at import and never mutated afterwards.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

# ---------------------------------------------------------------------------
# Provider labels (also the order the aggregator queries them in)
# ---------------------------------------------------------------------------

OPENROUTER = "OpenRouter"
TOGETHER = "Together AI"
GROQ = "Groq"
REPLICATE = "Replicate"
HUGGING_FACE = "Hugging Face"

PROVIDER_ORDER: tuple[str, ...] = (OPENROUTER, TOGETHER, GROQ, REPLICATE, HUGGING_FACE)

# ---------------------------------------------------------------------------
# Upstream endpoints
# ---------------------------------------------------------------------------

OPENROUTER_MODELS_URL = "https://openrouter.ai/api/v1/models"
TOGETHER_MODELS_URL = "https://api.together.xyz/v1/models"
GROQ_MODELS_URL = "https://api.groq.com/openai/v1/models"
REPLICATE_MODELS_URL = "https://api.replicate.com/v1/models"
GITHUB_REPOS_URL = "https://api.github.com/repos"
HF_MODELS_URL = "https://huggingface.co/api/models"

# Served on /api/models: shared caches may reuse the body for 60 s and keep
# serving it while they refetch in the background.
CACHE_CONTROL = "s-maxage=60, stale-while-revalidate"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Credentials:
    openrouter_api_key: Optional[str] = None
    together_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    replicate_api_token: Optional[str] = None
    hf_token: Optional[str] = None
    github_pat: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read every credential from the process environment (empty = unset)."""
        return cls(
            openrouter_api_key=_env("OPENROUTER_API_KEY"),
            together_api_key=_env("TOGETHER_API_KEY"),
            groq_api_key=_env("GROQ_API_KEY"),
            replicate_api_token=_env("REPLICATE_API_TOKEN"),
            hf_token=_env("HF_TOKEN"),
            github_pat=_env("GITHUB_PAT"),
        )

    def configured(self) -> list[str]:
        """Provider labels whose credential is present, in query order."""
        keys = {
            OPENROUTER: self.openrouter_api_key,
            TOGETHER: self.together_api_key,
            GROQ: self.groq_api_key,
            REPLICATE: self.replicate_api_token,
            HUGGING_FACE: self.hf_token,
        }
        return [label for label in PROVIDER_ORDER if keys[label]]


# ---------------------------------------------------------------------------
# GitHub repository inference (for star counts)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GitHubRepo:
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepoRule:
    """Matches when any needle occurs in the lowercased model id or provider prefix."""
    id_needles: tuple[str, ...]
    provider_needles: tuple[str, ...]
    repo: GitHubRepo

    def matches(self, model_id: str, provider_prefix: str) -> bool:
        mid = model_id.lower()
        prov = provider_prefix.lower()
        return any(n in mid for n in self.id_needles) or any(
            n in prov for n in self.provider_needles
        )


_LLAMA = GitHubRepo("meta-llama", "llama")
_MISTRAL = GitHubRepo("mistralai", "mistral-src")
_QWEN = GitHubRepo("QwenLM", "Qwen")

GITHUB_REPO_OVERRIDES: Mapping[str, GitHubRepo] = MappingProxyType({
    "meta-llama/Llama-3.3-70B-Instruct": _LLAMA,
    "mistralai/Mistral-7B-Instruct-v0.2": _MISTRAL,
    "qwen/Qwen3-Max-Thinking": _QWEN,
})

# Evaluated top to bottom; first match wins. Best-effort mapping only.
GITHUB_REPO_RULES: tuple[RepoRule, ...] = (
    RepoRule(("llama",), ("meta-llama",), _LLAMA),
    RepoRule(("mistral",), ("mistralai",), _MISTRAL),
    RepoRule(("qwen",), ("qwen",), _QWEN),
    RepoRule(("gemma",), ("google",), GitHubRepo("google", "gemma")),
    RepoRule(("deepseek",), ("deepseek",), GitHubRepo("deepseek-ai", "DeepSeek-V3")),
)


# ---------------------------------------------------------------------------
# Groq pricing (Groq's listing endpoint carries no prices)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenPrice:
    prompt: Optional[float]       # USD per 1M prompt tokens
    completion: Optional[float]   # USD per 1M completion tokens


UNKNOWN_PRICE = TokenPrice(prompt=None, completion=None)

GROQ_PRICING: Mapping[str, TokenPrice] = MappingProxyType({
    "llama2-70b-4096": TokenPrice(0.10, 0.10),
    "mixtral-8x7b-32768": TokenPrice(0.10, 0.10),
    "gemma2-9b-it": TokenPrice(0.10, 0.10),
    "llama-3.1-8b-instant": TokenPrice(0.05, 0.08),
    "llama-3.3-70b-versatile": TokenPrice(0.59, 0.79),
})


def groq_price(model_id: str) -> TokenPrice:
    """Look up by the id before any ``:`` suffix; unknown ids get null prices."""
    key = model_id.split(":")[0] if model_id else model_id
    return GROQ_PRICING.get(key, UNKNOWN_PRICE)


# ---------------------------------------------------------------------------
# Curated open-weight models listed under "Hugging Face"
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CuratedModel:
    model_id: str
    context_length: int
    prompt_price: float
    completion_price: float
    description: str


HF_CURATED_MODELS: tuple[CuratedModel, ...] = (
    CuratedModel(
        model_id="meta-llama/Llama-3.3-70B-Instruct",
        context_length=128_000,
        prompt_price=0.0,
        completion_price=0.0,
        description="Llama 3.3 70B Instruct (open weights, free on Hugging Face)",
    ),
    CuratedModel(
        model_id="mistralai/Mistral-7B-Instruct-v0.2",
        context_length=32_768,
        prompt_price=0.0,
        completion_price=0.0,
        description="Mistral 7B Instruct (open weights)",
    ),
    CuratedModel(
        model_id="gpt2",
        context_length=1_024,
        prompt_price=0.0,
        completion_price=0.0,
        description="GPT-2 (open, small)",
    ),
)
