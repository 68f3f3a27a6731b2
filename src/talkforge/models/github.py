"""GitHub profile models."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class GitHubProfile(BaseModel):
    """Public profile shown next to the username field."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    company: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


class GitHubUser(BaseModel):
    """Subset of the user record used as prompt context."""

    name: str | None = None
    bio: str | None = None
    company: str | None = None
    blog: str | None = None
    public_repos: int = 0
    followers: int = 0


class GitHubRepo(BaseModel):
    """Repository summary used as prompt context."""

    name: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    topics: list[str] = Field(default_factory=list)

    @field_validator("topics", mode="before")
    @classmethod
    def coerce_topics(cls, v: Any) -> list[str]:
        if not v:
            return []
        return [str(t) for t in v]


class GitHubData(BaseModel):
    """User record plus top repositories for one handle."""

    user: GitHubUser | None = None
    repos: list[GitHubRepo] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.user is None and not self.repos
