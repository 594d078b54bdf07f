"""Tests for the GitHub REST adapter using httpx.MockTransport."""

import asyncio

import httpx
import pytest

from repo_scanner.domain.exceptions import (
    ContentFetchError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    TreeListingError,
)
from repo_scanner.domain.value_objects import GitHubUrl
from repo_scanner.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_scanner.services.remote_scanner import RemoteScanner

URL = GitHubUrl.from_string("https://github.com/foo/bar")


def _run(handler, call, token=None):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await call(GitHubRestAdapter(client, token=token))

    return asyncio.run(go())


def test_fetch_tree_parses_entries():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "tree": [
                    {"path": "src", "type": "tree"},
                    {"path": "src/a.py", "type": "blob", "size": 12},
                    {"path": "b.md", "type": "blob"},
                ]
            },
        )

    entries = _run(handler, lambda a: a.fetch_tree(URL, "main"), token="t0ken")

    assert [(e.path, e.type, e.size) for e in entries] == [
        ("src", "tree", 0),
        ("src/a.py", "blob", 12),
        ("b.md", "blob", 0),
    ]
    req = requests[0]
    assert req.url.path == "/repos/foo/bar/git/trees/main"
    assert req.url.params["recursive"] == "1"
    assert req.headers["Authorization"] == "Bearer t0ken"


@pytest.mark.parametrize(
    "status,headers,exc_type",
    [
        (404, {}, RepositoryNotFoundError),
        (403, {}, RepositoryAccessDeniedError),
        (403, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "0"}, GitHubRateLimitError),
        (429, {}, GitHubRateLimitError),
        (500, {}, TreeListingError),
    ],
)
def test_tree_errors_carry_status(status, headers, exc_type):
    def handler(request):
        return httpx.Response(status, headers=headers, json={"message": "nope"})

    with pytest.raises(exc_type) as excinfo:
        _run(handler, lambda a: a.fetch_tree(URL, "main"))
    assert excinfo.value.status_code == status
    assert str(status) in str(excinfo.value)


def test_tree_network_error_has_no_status():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TreeListingError) as excinfo:
        _run(handler, lambda a: a.fetch_tree(URL, "main"))
    assert excinfo.value.status_code is None


def test_fetch_file_content_uses_raw_host_and_branch():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text="print('hi')\n")

    text = _run(handler, lambda a: a.fetch_file_content(URL, "src/a.py", "master"))
    assert text == "print('hi')\n"
    assert seen == ["https://raw.githubusercontent.com/foo/bar/master/src/a.py"]


def test_fetch_file_content_error():
    def handler(request):
        return httpx.Response(404)

    with pytest.raises(ContentFetchError):
        _run(handler, lambda a: a.fetch_file_content(URL, "gone.py", "main"))


def test_remote_scan_end_to_end_over_http():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.github.com":
            if request.url.path.endswith("/main"):
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(
                200,
                json={
                    "tree": [
                        {"path": "app.py", "type": "blob", "size": 20},
                        {"path": "broken.py", "type": "blob", "size": 20},
                    ]
                },
            )
        if request.url.path.endswith("/master/app.py"):
            return httpx.Response(200, text="try:\n    x()\nexcept:\n    pass\n")
        return httpx.Response(500)

    summary = _run(handler, lambda a: RemoteScanner(a).scan("https://github.com/foo/bar.git"))

    assert summary.structure == ("app.py", "broken.py")
    assert summary.file_count == 1
    assert summary.warnings == ("Failed to fetch broken.py",)
    assert summary.errors == ("app.py: Bare except clause (catches all exceptions)",)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"tree": "nope"}),
    ],
)
def test_malformed_tree_payload_is_a_listing_error(response):
    with pytest.raises(TreeListingError) as excinfo:
        _run(lambda request: response, lambda a: a.fetch_tree(URL, "main"))
    assert excinfo.value.status_code == 200
    assert str(excinfo.value).startswith("Failed to fetch repository: 200")


def test_malformed_main_listing_falls_back_to_master():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/trees/main"):
            return httpx.Response(200, text="<html>oops</html>")
        if request.url.host == "api.github.com":
            return httpx.Response(
                200, json={"tree": [{"path": "README.md", "type": "blob", "size": 5}]}
            )
        return httpx.Response(404)

    summary = _run(handler, lambda a: RemoteScanner(a).scan("https://github.com/foo/bar"))
    assert summary.structure == ("README.md",)


def test_fetch_file_content_encodes_path():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, text="# notes\n")

    text = _run(handler, lambda a: a.fetch_file_content(URL, "docs/a#b?.md", "main"))
    assert text == "# notes\n"
    assert seen[0].path == "/foo/bar/main/docs/a#b?.md"
    assert seen[0].query == b""
