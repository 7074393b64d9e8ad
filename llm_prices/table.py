"""
Filtering and sorting for the comparison table.

The view is derived from the full record list on every render:
  1. provider filter (exact label, or ALL)
  2. optional free-only filter
  3. single-key stable sort, ascending or descending
"""

from dataclasses import dataclass
from typing import Any, Iterable

from llm_prices.models import ModelRecord

ALL = "All"

STRING_FIELDS = frozenset({"provider", "model", "description"})
SORTABLE_FIELDS = (
    "provider",
    "model",
    "context_length",
    "prompt_price",
    "completion_price",
    "stars",
    "hf_likes",
)


def is_free(record: ModelRecord) -> bool:
    return record.prompt_price == 0 and record.completion_price == 0


def provider_options(records: Iterable[ModelRecord]) -> list[str]:
    """ALL followed by each provider label once, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        seen.setdefault(record.provider, None)
    return [ALL, *seen]


@dataclass(frozen=True)
class SortState:
    key: str = "model"
    ascending: bool = True

    def toggle(self, key: str) -> "SortState":
        """Clicking the active column flips direction; a new column starts ascending."""
        if key == self.key:
            return SortState(key=key, ascending=not self.ascending)
        return SortState(key=key, ascending=True)


def _sort_value(record: ModelRecord, key: str) -> Any:
    value = getattr(record, key, None)
    if key in STRING_FIELDS:
        return value if value is not None else ""
    return value if value is not None else 0


def apply_view(
    records: Iterable[ModelRecord],
    provider: str = ALL,
    free_only: bool = False,
    sort: SortState = SortState(),
) -> list[ModelRecord]:
    rows = [r for r in records if provider == ALL or r.provider == provider]
    if free_only:
        rows = [r for r in rows if is_free(r)]
    if sort.key not in SORTABLE_FIELDS and sort.key not in STRING_FIELDS:
        return rows
    # sorted() is stable in both directions, so ties keep their input order.
    return sorted(rows, key=lambda r: _sort_value(r, sort.key), reverse=not sort.ascending)


# ---------------------------------------------------------------------------
# Cell formatting (used by the HTML template)
# ---------------------------------------------------------------------------

DASH = "—"


def format_price(value: Any) -> str:
    return f"${value:.4f}" if value is not None else DASH


def format_count(value: Any) -> str:
    return f"{value:,}" if value is not None else DASH
