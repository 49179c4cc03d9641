"""Tests for the repository collector."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from profile_badge.collector import collect_repositories
from profile_badge.github.client import GitHubAPIError, GitHubClient


def _client_with_repos(total: int, page_size: int = 100) -> AsyncMock:
    repos = [
        {"name": f"repo{i}", "fork": i % 2 == 1, "stargazers_count": i}
        for i in range(total)
    ]

    async def list_repos(username, page, per_page=100):
        start = (page - 1) * per_page
        return repos[start:start + per_page]

    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = list_repos
    return client


@pytest.mark.asyncio
@pytest.mark.parametrize("total", [100, 200])
async def test_exact_page_multiples_are_not_truncated(total):
    client = _client_with_repos(total)
    repos = await collect_repositories(client, "alice")
    assert len(repos) == total
    # One extra request confirms the last full page really was the last.
    assert client.list_repos.await_count == total // 100 + 1


@pytest.mark.asyncio
async def test_stops_on_short_page():
    client = _client_with_repos(150)
    repos = await collect_repositories(client, "alice")
    assert len(repos) == 150
    assert client.list_repos.await_count == 2
    assert repos[0].name == "repo0"
    assert repos[-1].name == "repo149"


@pytest.mark.asyncio
async def test_no_repositories():
    client = _client_with_repos(0)
    assert await collect_repositories(client, "alice") == []
    client.list_repos.assert_awaited_once_with("alice", page=1, per_page=100)


@pytest.mark.asyncio
async def test_descriptors_carry_fork_and_stars():
    client = _client_with_repos(2)
    first, second = await collect_repositories(client, "alice")
    assert (first.name, first.fork, first.stars) == ("repo0", False, 0)
    assert (second.name, second.fork, second.stars) == ("repo1", True, 1)


@pytest.mark.asyncio
async def test_custom_page_size():
    client = _client_with_repos(10)
    repos = await collect_repositories(client, "alice", page_size=5)
    assert len(repos) == 10
    assert client.list_repos.await_count == 3


@pytest.mark.asyncio
async def test_errors_propagate():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = GitHubAPIError(500, "boom")
    with pytest.raises(GitHubAPIError):
        await collect_repositories(client, "alice")
