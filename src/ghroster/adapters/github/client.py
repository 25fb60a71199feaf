"""GitHub REST API client implementing the contributor source port."""

from __future__ import annotations

import asyncio
import time
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel

from ghroster.adapters.http_resilience import ResilientClient
from ghroster.domain.ports.fetching import SourceError, UserNotFoundError

from .schema import (
    CommitPayload,
    ContributorPayload,
    RepositoryPayload,
    SimpleUserPayload,
    TeamPayload,
    UserPayload,
)
from .translator import (
    translate_commit,
    translate_contributor,
    translate_repository,
    translate_team,
    translate_user,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from ghroster.config.github import GitHubConfig
    from ghroster.config.http_resilience import ResilienceConfig
    from ghroster.domain.model import Commit, Contributor, Repository, Team, UserProfile

log = getLogger(__name__)

PAGE_SIZE = 100
RATE_LIMIT_BUFFER_SECONDS = 1.0


class GitHubAPIError(SourceError):
    """Raised when the GitHub API answers with an error status or an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Synchronous GitHub client; every call runs its own event loop."""

    def __init__(
        self,
        *,
        config: GitHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._sleep = sleep or asyncio.sleep
        self._clock = clock

    def list_org_repositories(self, org: str) -> list[Repository]:
        payloads = asyncio.run(
            self._get_pages(f"orgs/{org}/repos", RepositoryPayload, params={"type": "all"})
        )
        return [translate_repository(payload) for payload in payloads]

    def get_repository(self, owner: str, name: str) -> Repository:
        payload = asyncio.run(self._get_one(f"repos/{owner}/{name}", RepositoryPayload))
        return translate_repository(payload)

    def list_contributors(
        self,
        repository: Repository,
        *,
        include_anonymous: bool = True,
    ) -> list[Contributor]:
        params = {"anon": "true"} if include_anonymous else {}
        payloads = asyncio.run(
            self._get_pages(
                f"repos/{repository.full_name}/contributors", ContributorPayload, params=params
            )
        )
        return [translate_contributor(payload) for payload in payloads]

    def list_commits(self, repository: Repository) -> list[Commit]:
        try:
            payloads = asyncio.run(
                self._get_pages(f"repos/{repository.full_name}/commits", CommitPayload)
            )
        except GitHubAPIError as exc:
            # empty repositories answer 409 Conflict
            if exc.status_code == 409:
                log.debug("%s is empty", repository.full_name)
                return []
            raise
        return [translate_commit(payload) for payload in payloads]

    def get_user(self, login: str) -> UserProfile:
        try:
            payload = asyncio.run(self._get_one(f"users/{login}", UserPayload))
        except GitHubAPIError as exc:
            if exc.status_code == 404:
                raise UserNotFoundError(login) from exc
            raise
        return translate_user(payload)

    def get_team(self, team_id: int) -> Team:
        payload = asyncio.run(self._get_one(f"teams/{team_id}", TeamPayload))
        return translate_team(payload)

    def get_team_members(self, team_id: int) -> list[UserProfile]:
        payloads = asyncio.run(self._get_pages(f"teams/{team_id}/members", SimpleUserPayload))
        return [translate_user(payload) for payload in payloads]

    async def _get_one[M: BaseModel](self, path: str, model: type[M]) -> M:
        async with self._client_factory(self._resilience) as client:
            response = await self._get(client, path)
            payload = self._json(response)
        if not isinstance(payload, dict):
            raise GitHubAPIError(f"Unexpected GitHub payload for {path}")
        return model.model_validate(payload)

    async def _get_pages[M: BaseModel](
        self,
        path: str,
        model: type[M],
        *,
        params: dict[str, str] | None = None,
    ) -> list[M]:
        items: list[M] = []
        url: str | None = path
        query: dict[str, str] | None = {"per_page": str(PAGE_SIZE), **(params or {})}
        async with self._client_factory(self._resilience) as client:
            while url is not None:
                response = await self._get(client, url, params=query)
                payload = self._json(response)
                if not isinstance(payload, list):
                    raise GitHubAPIError(f"Unexpected GitHub payload for {path}")
                items.extend(model.model_validate(item) for item in payload)
                url = response.links.get("next", {}).get("url")
                # the next link already carries the query string
                query = None
        return items

    async def _get(
        self,
        client: ResilientClient,
        url: str,
        *,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        while True:
            response = await client.get(url, params=params)
            wait = self._rate_limit_wait(response)
            if wait is None:
                return response
            log.warning(
                "GitHub rate limit exhausted. Sleeping for %.1fs until reset (X-RateLimit-Reset=%s)",
                wait,
                response.headers.get("X-RateLimit-Reset"),
            )
            await self._sleep(wait)

    def _rate_limit_wait(self, response: httpx.Response) -> float | None:
        if response.status_code != 403:
            return None
        if response.headers.get("X-RateLimit-Remaining") != "0":
            return None
        try:
            reset = float(response.headers.get("X-RateLimit-Reset", "0"))
        except ValueError:
            return RATE_LIMIT_BUFFER_SECONDS
        return max(0.0, reset - self._clock()) + RATE_LIMIT_BUFFER_SECONDS

    def _json(self, response: httpx.Response) -> object:
        if response.is_error:
            raise GitHubAPIError(
                f"GitHub API returned {response.status_code} for {response.request.url}",
                status_code=response.status_code,
            )
        return response.json()
