"""
FastAPI application — LLM price comparison across providers.

Endpoints
─────────
GET /api/models   Unified model list from every configured provider (JSON).
GET /             The same list as a sortable, filterable HTML table.
GET /health       Health check plus the providers that have credentials.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlencode

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from llm_prices.aggregator import ModelAggregator
from llm_prices.config import CACHE_CONTROL, Credentials
from llm_prices.models import HealthResponse, ModelsResponse
from llm_prices.table import (
    ALL,
    SortState,
    apply_view,
    format_count,
    format_price,
    is_free,
    provider_options,
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

load_dotenv()

CREDENTIALS = Credentials.from_env()
if not CREDENTIALS.configured():
    logger.warning("No provider credentials set — /api/models will return an empty list")
else:
    logger.info("Providers configured: %s", ", ".join(CREDENTIALS.configured()))
if not CREDENTIALS.github_pat:
    logger.warning("GITHUB_PAT not set — star lookups use the unauthenticated rate limit")

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="LLM Prices",
    description="Model pricing and popularity aggregated across LLM providers.",
    version="0.1.0",
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

_COLUMNS = [
    ("Provider", "provider"),
    ("Model", "model"),
    ("Context", "context_length"),
    ("Prompt $/1M", "prompt_price"),
    ("Completion $/1M", "completion_price"),
    ("Stars", "stars"),
    ("HF Likes", "hf_likes"),
]


def get_aggregator() -> ModelAggregator:
    """Request-scoped aggregator; overridden in tests."""
    return ModelAggregator(CREDENTIALS)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check."""
    return HealthResponse(status="ok", providers_configured=CREDENTIALS.configured())


@app.get("/api/models", response_model=ModelsResponse)
async def list_models(
    response: Response,
    aggregator: ModelAggregator = Depends(get_aggregator),
) -> ModelsResponse:
    """
    Return every model from every configured provider.

    Always 200: providers that fail are simply missing from the list.
    """
    models = await aggregator.collect()
    response.headers["Cache-Control"] = CACHE_CONTROL
    return ModelsResponse(models=models)


@app.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    provider: str = Query(default=ALL, description="Provider label, or 'All'."),
    free_only: bool = Query(default=False, description="Only models priced 0/0."),
    sort: str = Query(default="model", description="Column to sort by."),
    asc: bool = Query(default=True, description="Ascending when true."),
    aggregator: ModelAggregator = Depends(get_aggregator),
):
    """
    Comparison table.

    Column headers link to the toggled sort: clicking the active column
    flips direction, any other column sorts ascending.  Carries the same
    Cache-Control hint as /api/models.
    """
    models = await aggregator.collect()
    state = SortState(key=sort, ascending=asc)
    rows = apply_view(models, provider=provider, free_only=free_only, sort=state)

    def link(next_state: SortState) -> str:
        params = {"provider": provider, "sort": next_state.key,
                  "asc": str(next_state.ascending).lower()}
        if free_only:
            params["free_only"] = "true"
        return "/?" + urlencode(params)

    columns = []
    for label, key in _COLUMNS:
        arrow = ("↑" if state.ascending else "↓") if key == state.key else ""
        columns.append({"label": label, "href": link(state.toggle(key)), "arrow": arrow})

    page = templates.TemplateResponse(
        request,
        "index.html",
        {
            "rows": rows,
            "columns": columns,
            "providers": provider_options(models),
            "provider": provider,
            "free_only": free_only,
            "sort": state,
            "last_updated": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
            "is_free": is_free,
            "price": format_price,
            "count": format_count,
        },
    )
    # Each sort/filter link is its own URL; let shared caches absorb repeat clicks.
    page.headers["Cache-Control"] = CACHE_CONTROL
    return page
