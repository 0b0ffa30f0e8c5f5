"""Tests for the GitHub pull request source."""
import json

import httpx
import pytest

from prguard.exceptions import SourceError
from prguard.sources import GitHubSource

API = "https://api.github.com"
PULL = {
    "number": 7,
    "additions": 420,
    "deletions": 200,
    "assignee": {"login": "octocat"},
    "base": {"sha": "base-sha"},
    "head": {"sha": "head-sha"},
}


def make_handler(routes, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        key = request.url.path
        if "ref" in request.url.params:
            key = f"{key}@{request.url.params['ref']}"
        if "page" in request.url.params:
            key = f"{key}?page={request.url.params['page']}"
        if key not in routes:
            return httpx.Response(404, json={"message": "Not Found"})
        return routes[key]()
    return handler


def make_source(routes, calls=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(make_handler(routes, calls)), base_url=API)
    return GitHubSource("acme/widgets", 7, client=client)


@pytest.mark.asyncio
async def test_get_pull_request():
    source = make_source({"/repos/acme/widgets/pulls/7": lambda: httpx.Response(200, json=PULL)})

    info = await source.get_pull_request()

    assert info.additions == 420
    assert info.deletions == 200
    assert info.assignee == "octocat"
    assert info.size == 620


@pytest.mark.asyncio
async def test_get_pull_request_without_assignee():
    pull = dict(PULL, assignee=None)
    source = make_source({"/repos/acme/widgets/pulls/7": lambda: httpx.Response(200, json=pull)})

    assert (await source.get_pull_request()).assignee is None


@pytest.mark.asyncio
async def test_get_commits_follows_pagination():
    next_url = f"{API}/repos/acme/widgets/pulls/7/commits?per_page=100&page=2"
    routes = {
        "/repos/acme/widgets/pulls/7/commits": lambda: httpx.Response(
            200,
            json=[{"sha": "a1", "commit": {"message": "feat: first"}}],
            headers={"Link": f'<{next_url}>; rel="next"'},
        ),
        "/repos/acme/widgets/pulls/7/commits?page=2": lambda: httpx.Response(
            200,
            json=[{"sha": "b2", "commit": {"message": ""}}],
        ),
    }
    source = make_source(routes)

    commits = await source.get_commits()

    assert [(c.id, c.message) for c in commits] == [("a1", "feat: first"), ("b2", "")]


@pytest.mark.asyncio
async def test_get_modified_files_only_keeps_modified_status():
    files = [
        {"filename": "package.json", "status": "modified"},
        {"filename": "src/new.js", "status": "added"},
        {"filename": "src/old.js", "status": "removed"},
    ]
    source = make_source({"/repos/acme/widgets/pulls/7/files": lambda: httpx.Response(200, json=files)})

    assert await source.get_modified_files() == ["package.json"]


@pytest.mark.asyncio
async def test_get_manifest_texts_uses_base_and_head_shas():
    calls = []
    routes = {
        "/repos/acme/widgets/pulls/7": lambda: httpx.Response(200, json=PULL),
        "/repos/acme/widgets/contents/package.json@head-sha": lambda: httpx.Response(
            200, text=json.dumps({"dependencies": {"a": "1.0.0"}})
        ),
    }
    source = make_source(routes, calls)

    before, after = await source.get_manifest_texts("package.json")

    assert before is None
    assert json.loads(after) == {"dependencies": {"a": "1.0.0"}}
    assert calls[-1].headers["Accept"] == "application/vnd.github.raw+json"


@pytest.mark.asyncio
async def test_http_errors_raise_source_error():
    source = make_source({"/repos/acme/widgets/pulls/7": lambda: httpx.Response(500, json={})})
    with pytest.raises(SourceError, match="500"):
        await source.get_pull_request()


@pytest.mark.asyncio
async def test_contents_errors_raise_source_error():
    routes = {
        "/repos/acme/widgets/pulls/7": lambda: httpx.Response(200, json=PULL),
        "/repos/acme/widgets/contents/package.json@base-sha": lambda: httpx.Response(403, json={}),
    }
    with pytest.raises(SourceError, match="403"):
        await make_source(routes).get_manifest_texts("package.json")


def test_repository_must_be_owner_and_name():
    with pytest.raises(SourceError):
        GitHubSource("widgets", 7)


@pytest.mark.asyncio
async def test_token_is_sent_as_bearer():
    source = GitHubSource("acme/widgets", 7, token="secret")
    try:
        assert source.client.headers["Authorization"] == "Bearer secret"
    finally:
        await source.aclose()
