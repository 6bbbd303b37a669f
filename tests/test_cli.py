"""CLI tests — the API is replaced by an httpx MockTransport."""

import httpx
import pytest
from click.testing import CliRunner

from inkpost.cli import main as cli

POSTS_BODY = {
    "success": True,
    "data": [
        {
            "id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "title": "Hello World",
            "author": {"id": "65a1f0c2e4b0a1b2c3d4e5f7", "username": "alice"},
            "category": {"id": "65a1f0c2e4b0a1b2c3d4e5f8", "name": "General"},
            "isPublished": True,
        }
    ],
    "pagination": {"total": 6, "page": 2, "pages": 2},
}


@pytest.fixture()
def requests_seen(monkeypatch):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/api/posts":
            return httpx.Response(200, json=POSTS_BODY)
        if request.url.path == "/api/categories":
            return httpx.Response(
                200,
                json={"success": True, "data": [{"id": "c" * 24, "name": "General"}]},
            )
        return httpx.Response(404, json={"success": False, "error": "Not Found"})

    monkeypatch.setattr(
        cli,
        "_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"),
    )
    return seen


def test_posts_lists_table_and_passes_paging(requests_seen):
    result = CliRunner().invoke(cli.main, ["posts", "--page", "2", "--limit", "5"])
    assert result.exit_code == 0, result.output
    assert "Hello World" in result.output
    assert "alice" in result.output
    assert "Page 2 of 2 (6 posts)" in result.output

    params = requests_seen[0].url.params
    assert params["page"] == "2"
    assert params["limit"] == "5"


def test_posts_category_filter(requests_seen):
    CliRunner().invoke(cli.main, ["posts", "--category", "k" * 24])
    assert requests_seen[0].url.params["category"] == "k" * 24


def test_categories(requests_seen):
    result = CliRunner().invoke(cli.main, ["categories"])
    assert result.exit_code == 0
    assert "General" in result.output


def test_api_error_exits_nonzero(monkeypatch):
    def handler(request):
        return httpx.Response(500, json={"success": False, "error": "Server Error"})

    monkeypatch.setattr(
        cli,
        "_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"),
    )
    result = CliRunner().invoke(cli.main, ["categories"])
    assert result.exit_code == 1
