"""Tests for the GitHub REST client."""

import asyncio

import httpx
import pytest

from talkforge.errors import LookupFailure

USER_JSON = {
    "login": "octocat",
    "name": "The Octocat",
    "avatar_url": "https://avatars.example/octocat.png",
    "bio": "Mascot",
    "public_repos": 8,
    "followers": 100,
    "following": 9,
    "company": "@github",
    "blog": "https://github.blog",
}

REPOS_JSON = [
    {
        "name": "hello-world",
        "description": "My first repo",
        "language": "Python",
        "stargazers_count": 42,
        "topics": ["demo"],
    },
    {"name": "spoon-knife", "description": None, "language": None, "stargazers_count": 0},
]


class TestFetchProfile:
    """Tests for the profile preview lookup."""

    def test_returns_profile(self, github_client_factory) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["agent"] = request.headers["User-Agent"]
            return httpx.Response(200, json=USER_JSON)

        profile = asyncio.run(github_client_factory(handler).fetch_profile("octocat"))

        assert profile is not None
        assert profile.login == "octocat"
        assert profile.name == "The Octocat"
        assert profile.public_repos == 8
        assert seen["path"] == "/users/octocat"
        assert seen["agent"] == "TalkForge-App"

    def test_not_found_returns_none(self, github_client_factory) -> None:
        client = github_client_factory(lambda request: httpx.Response(404, json={}))
        assert asyncio.run(client.fetch_profile("nobody-here")) is None

    def test_transport_error_raises_lookup_failure(self, github_client_factory) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        with pytest.raises(LookupFailure) as exc_info:
            asyncio.run(github_client_factory(handler).fetch_profile("octocat"))
        assert exc_info.value.message == "Failed to fetch GitHub profile"

    def test_invalid_json_raises_lookup_failure(self, github_client_factory) -> None:
        client = github_client_factory(lambda request: httpx.Response(200, text="oops"))
        with pytest.raises(LookupFailure):
            asyncio.run(client.fetch_profile("octocat"))

    def test_username_is_escaped(self, github_client_factory) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["raw_path"] = request.url.raw_path
            return httpx.Response(404)

        asyncio.run(github_client_factory(handler).fetch_profile("a/b"))
        assert seen["raw_path"] == b"/users/a%2Fb"


class TestFetchData:
    """Tests for the prompt-context fetch."""

    def test_fetches_user_and_repos(self, github_client_factory) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/repos"):
                seen["params"] = dict(request.url.params)
                return httpx.Response(200, json=REPOS_JSON)
            return httpx.Response(200, json=USER_JSON)

        data = asyncio.run(github_client_factory(handler).fetch_data("octocat"))

        assert data.user is not None
        assert data.user.blog == "https://github.blog"
        assert [r.name for r in data.repos] == ["hello-world", "spoon-knife"]
        assert data.repos[0].topics == ["demo"]
        assert data.repos[1].topics == []
        assert seen["params"] == {"sort": "stars", "per_page": "20"}

    def test_missing_user_gives_empty_data(self, github_client_factory) -> None:
        client = github_client_factory(lambda request: httpx.Response(404, json={}))
        assert asyncio.run(client.fetch_data("ghost")).is_empty

    def test_repo_failure_keeps_user(self, github_client_factory) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/repos"):
                return httpx.Response(500)
            return httpx.Response(200, json=USER_JSON)

        data = asyncio.run(github_client_factory(handler).fetch_data("octocat"))
        assert data.user is not None
        assert data.repos == []

    def test_transport_error_gives_empty_data(self, github_client_factory) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        assert asyncio.run(github_client_factory(handler).fetch_data("octocat")).is_empty

    def test_long_username_truncated(self, github_client_factory) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(404)

        asyncio.run(github_client_factory(handler).fetch_data("a" * 50))
        assert f"/users/{'a' * 39}" in paths
