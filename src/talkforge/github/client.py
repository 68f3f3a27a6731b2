"""GitHub REST client for profile previews and prompt context."""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from talkforge.errors import LookupFailure
from talkforge.models.github import GitHubData, GitHubProfile, GitHubRepo, GitHubUser
from talkforge.processors.validation import GITHUB_USERNAME_MAX_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_USER_AGENT = "TalkForge-App"
DEFAULT_TIMEOUT = 15.0

# Repos requested for prompt context, most-starred first
REPOS_PER_PAGE = 20


class GitHubClient:
    """Thin async wrapper over the public GitHub users API.

    Requests are never retried. Pass ``client`` to share a connection pool or
    to plug in a mock transport.
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.headers = {"User-Agent": user_agent, "Accept": "application/vnd.github+json"}
        self.timeout = timeout
        self._client = client

    def _user_url(self, username: str) -> str:
        return f"{self.api_base}/users/{quote(username, safe='')}"

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, params=params, headers=self.headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, params=params, headers=self.headers)

    async def fetch_profile(self, username: str) -> GitHubProfile | None:
        """Fetch the public profile for a username.

        Returns:
            GitHubProfile, or None when GitHub answers with a non-2xx status.

        Raises:
            LookupFailure: On network errors or an unreadable response.
        """
        try:
            response = await self._get(self._user_url(username))
        except httpx.HTTPError as e:
            logger.warning(f"GitHub profile lookup failed: {type(e).__name__}")
            raise LookupFailure() from e

        if not response.is_success:
            logger.info(f"GitHub profile lookup returned HTTP {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise LookupFailure() from e

        return GitHubProfile(
            login=data.get("login") or username,
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            public_repos=data.get("public_repos") or 0,
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            company=data.get("company"),
        )

    async def fetch_data(self, username: str) -> GitHubData:
        """Fetch the user record and top repositories for prompt context.

        Both requests run concurrently. Any failure yields empty data: the
        GitHub handle is optional context, never a reason to stop generation.
        """
        username = username[:GITHUB_USERNAME_MAX_LENGTH]
        user_url = self._user_url(username)
        try:
            user_response, repos_response = await asyncio.gather(
                self._get(user_url),
                self._get(
                    f"{user_url}/repos",
                    params={"sort": "stars", "per_page": REPOS_PER_PAGE},
                ),
            )
        except httpx.HTTPError as e:
            logger.warning(f"GitHub data fetch failed: {type(e).__name__}")
            return GitHubData()

        if not user_response.is_success:
            return GitHubData()

        try:
            user = user_response.json()
            repos = repos_response.json() if repos_response.is_success else []
        except ValueError:
            logger.warning("GitHub returned a non-JSON body")
            return GitHubData()

        data = GitHubData(
            user=GitHubUser(
                name=user.get("name"),
                bio=user.get("bio"),
                company=user.get("company"),
                blog=user.get("blog"),
                public_repos=user.get("public_repos") or 0,
                followers=user.get("followers") or 0,
            ),
            repos=[
                GitHubRepo(
                    name=repo.get("name") or "",
                    description=repo.get("description"),
                    language=repo.get("language"),
                    stargazers_count=repo.get("stargazers_count") or 0,
                    topics=repo.get("topics"),
                )
                for repo in repos
                if isinstance(repo, dict)
            ],
        )
        logger.info(f"Fetched GitHub context: {len(data.repos)} repos")
        return data
