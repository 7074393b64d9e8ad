"""
Model price report — fetches GET /api/models and prints a per-provider
summary plus the cheapest priced models.

Usage (server must be running):
    python scripts/report_models.py [--base-url http://localhost:8000]

Pass --direct to start the app in-process on a free port instead of
talking to an already-running server.
"""

import argparse
import pathlib
import sys
import time
from collections import Counter

# Ensure the project root is on sys.path so `llm_prices.*` imports work when
# the script is run directly rather than as a module.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import httpx

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

RESET  = "\033[0m"
BOLD   = "\033[1m"
DIM    = "\033[2m"
GREEN  = "\033[32m"
CYAN   = "\033[36m"
YELLOW = "\033[33m"
RED    = "\033[31m"
BLUE   = "\033[34m"
MAGENTA = "\033[35m"

PROVIDER_COLORS = {
    "OpenRouter":   CYAN,
    "Together AI":  BLUE,
    "Groq":         YELLOW,
    "Replicate":    MAGENTA,
    "Hugging Face": GREEN,
}

def colored(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"

def bold(text: str) -> str:
    return f"{BOLD}{text}{RESET}"

def dim(text: str) -> str:
    return f"{DIM}{text}{RESET}"

def separator(char: str = "─", width: int = 76) -> str:
    return dim(char * width)

def price(value) -> str:
    return f"${value:.4f}" if value is not None else "—"

# ---------------------------------------------------------------------------
# Report printers
# ---------------------------------------------------------------------------

def print_provider_summary(models: list[dict]) -> None:
    print()
    print(separator("═"))
    print(bold("  PROVIDERS"))
    print(separator("═"))

    totals = Counter(m["provider"] for m in models)
    free = Counter(
        m["provider"] for m in models
        if m["prompt_price"] == 0 and m["completion_price"] == 0
    )
    priced = Counter(m["provider"] for m in models if m["prompt_price"] is not None)

    col = [20, 10, 10, 10]
    print(bold(
        f"  {'Provider':<{col[0]}}"
        f"{'Models':>{col[1]}}"
        f"{'Priced':>{col[2]}}"
        f"{'Free':>{col[3]}}"
    ))
    print("  " + separator("─", width=sum(col)))
    for provider, count in totals.items():
        color = PROVIDER_COLORS.get(provider, "")
        label = colored(provider.ljust(col[0]), color)
        print(f"  {label}{count:>{col[1]}}{priced[provider]:>{col[2]}}{free[provider]:>{col[3]}}")
    print("  " + separator("─", width=sum(col)))
    print(f"  {'TOTAL':<{col[0]}}{len(models):>{col[1]}}"
          f"{sum(priced.values()):>{col[2]}}{sum(free.values()):>{col[3]}}")


def print_cheapest(models: list[dict], limit: int) -> None:
    paid = [
        m for m in models
        if m["prompt_price"] is not None
        and m["completion_price"] is not None
        and (m["prompt_price"] > 0 or m["completion_price"] > 0)
    ]
    paid.sort(key=lambda m: (m["prompt_price"] + m["completion_price"], m["model"]))

    print()
    print(separator("═"))
    print(bold(f"  CHEAPEST {limit} PAID MODELS  (prompt + completion, $/1M tokens)"))
    print(separator("═"))
    for m in paid[:limit]:
        color = PROVIDER_COLORS.get(m["provider"], "")
        name = m["model"] if len(m["model"]) <= 44 else m["model"][:43] + "…"
        print(
            f"  {colored(m['provider'][:12].ljust(12), color)} "
            f"{name:<45}"
            f"{colored(price(m['prompt_price']), GREEN):>{10 + len(GREEN) + len(RESET)}} "
            f"{colored(price(m['completion_price']), GREEN):>{10 + len(GREEN) + len(RESET)}}"
        )
    if not paid:
        print(dim("  (no priced models returned)"))
    print()

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(description="llm-prices model report")
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="Base URL of the running llm-prices server (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Start the FastAPI app in-process on a free port (no server needed)",
    )
    parser.add_argument("--top", type=int, default=10, help="How many cheap models to list")
    args = parser.parse_args()

    if args.direct:
        import socket
        import threading
        import uvicorn
        from llm_prices.main import app as fastapi_app

        with socket.socket() as s:
            s.bind(("127.0.0.1", 0))
            port = s.getsockname()[1]

        base_url = f"http://127.0.0.1:{port}"
        cfg = uvicorn.Config(fastapi_app, host="127.0.0.1", port=port, log_level="error")
        server = uvicorn.Server(cfg)

        thread = threading.Thread(target=server.run, daemon=True)
        thread.start()

        # Wait until the server is ready (up to 5 s)
        for _ in range(50):
            time.sleep(0.1)
            try:
                httpx.get(f"{base_url}/health", timeout=1)
                break
            except httpx.HTTPError:
                pass
        else:
            print(colored("  ERROR: in-process server did not start in time", RED))
            sys.exit(1)

        print(dim(f"  [mode: in-process uvicorn → {base_url}]"))
    else:
        server = None
        base_url = args.base_url.rstrip("/")
        print(dim(f"  [mode: HTTP → {base_url}]"))

    with httpx.Client(base_url=base_url) as client:
        try:
            health = client.get("/health", timeout=5).json()
        except httpx.HTTPError as exc:
            print(colored(f"  ERROR: could not reach server at {base_url} — {exc}", RED))
            print(colored("  Start the server with:  uvicorn llm_prices.main:app --reload", YELLOW))
            sys.exit(1)

        configured = health.get("providers_configured") or []
        if not configured:
            print(colored("  WARNING: no provider credentials configured on server", YELLOW))
        else:
            print(dim(f"  Providers configured: {', '.join(configured)}"))

        t0 = time.perf_counter()
        resp = client.get("/api/models", timeout=300)
        wall_ms = (time.perf_counter() - t0) * 1000
        resp.raise_for_status()
        models = resp.json()["models"]

    print()
    print(bold("  llm-prices · Model Report"))
    print(dim(f"  {len(models)} models in {wall_ms:.0f} ms · Cache-Control: "
              f"{resp.headers.get('cache-control', '—')}"))

    print_provider_summary(models)
    print_cheapest(models, args.top)

    if args.direct and server is not None:
        server.should_exit = True


if __name__ == "__main__":
    main()
