"""Async client for the GitHub REST and GraphQL APIs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .rate_limit import RateLimitMonitor

log = logging.getLogger(__name__)

API_URL = "https://api.github.com"


class GitHubAPIError(Exception):
    """A GitHub request came back with an error status or GraphQL errors."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Read-only GitHub API client.

    Use as an async context manager; the underlying ``httpx.AsyncClient`` is
    closed on exit.
    """

    def __init__(
        self,
        token: str,
        base_url: str = API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "User-Agent": "profile-badge",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            transport=transport,
        )
        self._rate_limit = RateLimitMonitor()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        await self._rate_limit.wait_if_needed()
        response = await self._http.request(method, path, **kwargs)
        self._rate_limit.update(response)
        log.debug("%s %s -> %d", method, response.request.url, response.status_code)
        if response.status_code >= 400:
            raise GitHubAPIError(
                response.status_code,
                f"GitHub API error {response.status_code} for {path}: {response.text[:200]}",
            )
        return response

    async def get_user(self, username: str) -> dict:
        response = await self._request("GET", f"/users/{username}")
        return response.json()

    async def get_authenticated_user(self) -> dict:
        response = await self._request("GET", "/user")
        return response.json()

    async def list_repos(self, username: str, page: int, per_page: int = 100) -> list[dict]:
        response = await self._request(
            "GET",
            f"/users/{username}/repos",
            params={"per_page": per_page, "page": page, "sort": "updated"},
        )
        return response.json()

    async def list_commits(
        self, owner: str, repo: str, author: str, per_page: int = 1
    ) -> tuple[list[dict], int | None]:
        """Return the first page of commits and the last page number, if linked."""
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/commits",
            params={"author": author, "per_page": per_page},
        )
        return response.json(), _last_page(response)

    async def search_issue_count(self, query: str) -> int:
        response = await self._request(
            "GET", "/search/issues", params={"q": query, "per_page": 1}
        )
        return int(response.json()["total_count"])

    async def list_public_events(self, username: str, page: int, per_page: int = 100) -> list[dict]:
        response = await self._request(
            "GET",
            f"/users/{username}/events/public",
            params={"per_page": per_page, "page": page},
        )
        return response.json()

    async def graphql(self, query: str, variables: dict[str, Any]) -> dict:
        response = await self._request(
            "POST", "/graphql", json={"query": query, "variables": variables}
        )
        payload = response.json()
        if payload.get("errors"):
            raise GitHubAPIError(response.status_code, f"GraphQL errors: {payload['errors']}")
        return payload.get("data") or {}


def _last_page(response: httpx.Response) -> int | None:
    last = response.links.get("last")
    if not last:
        return None
    page = httpx.URL(last["url"]).params.get("page")
    return int(page) if page and page.isdigit() else None
