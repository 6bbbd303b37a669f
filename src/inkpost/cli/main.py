"""inkpost CLI — run the server, create tables, browse posts.

Usage:
    inkpost serve                        # Run the API with uvicorn
    inkpost init-db                      # Create tables (dev; use alembic in prod)
    inkpost posts --page 2 --limit 5     # List posts from a running API
    inkpost categories                   # List categories from a running API
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import Optional

import click
import httpx

from inkpost import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("INKPOST_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.Client:
    """Build an HTTP client pointed at the inkpost API."""
    return httpx.Client(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get(path: str, params: Optional[dict] = None) -> dict:
    """GET an API path and return the envelope, exiting on failure."""
    try:
        with _client() as c:
            r = c.get(path, params=params)
    except httpx.HTTPError as e:
        click.secho(f"Error: could not reach {_api_url()}: {e}", fg="red", err=True)
        sys.exit(1)

    body = r.json()
    if not body.get("success"):
        click.secho(f"Error: {body.get('error', r.status_code)}", fg="red", err=True)
        sys.exit(1)
    return body


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "-"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="inkpost")
def main():
    """inkpost — blog content API."""


@main.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", default=None, type=int, help="Port (default from settings)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from inkpost.config import settings

    uvicorn.run(
        "inkpost.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create all tables in the configured database."""
    from inkpost.db.engine import engine
    from inkpost.db.models import Base

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create())
    click.secho("Tables created.", fg="green")


@main.command()
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
@click.option("--category", default=None, help="Category id to filter by")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON")
def posts(page: int, limit: int, category: Optional[str], as_json: bool):
    """List posts, newest first."""
    params = {"page": page, "limit": limit}
    if category:
        params["category"] = category
    body = _get("/api/posts", params=params)

    if as_json:
        click.echo(json.dumps(body, indent=2))
        return

    rows = [
        {
            "id": p["id"],
            "title": p["title"],
            "author": p["author"]["username"],
            "category": (p.get("category") or {}).get("name", "-"),
            "published": "yes" if p["isPublished"] else "no",
        }
        for p in body["data"]
    ]
    _print_table(rows, [
        ("ID", "id", 24),
        ("TITLE", "title", 40),
        ("AUTHOR", "author", 16),
        ("CATEGORY", "category", 16),
        ("PUB", "published", 3),
    ])
    pg = body["pagination"]
    click.echo(f"\nPage {pg['page']} of {pg['pages']} ({pg['total']} posts)")


@main.command()
def categories():
    """List categories alphabetically."""
    body = _get("/api/categories")
    _print_table(body["data"], [("ID", "id", 24), ("NAME", "name", 50)])


if __name__ == "__main__":
    main()
