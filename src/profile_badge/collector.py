"""Collect every repository owned by the subject user."""

from __future__ import annotations

import logging

from .github.client import GitHubClient
from .models import RepositoryDescriptor

log = logging.getLogger(__name__)

PAGE_SIZE = 100


async def collect_repositories(
    client: GitHubClient, username: str, page_size: int = PAGE_SIZE
) -> list[RepositoryDescriptor]:
    """Page through the user's repositories until a short page comes back.

    A full final page always costs one more (empty) request, so totals that
    are exact multiples of ``page_size`` are not truncated.
    """
    repos: list[RepositoryDescriptor] = []
    page = 1
    while True:
        batch = await client.list_repos(username, page=page, per_page=page_size)
        repos.extend(RepositoryDescriptor.from_api(item) for item in batch)
        if len(batch) < page_size:
            break
        page += 1

    log.info("Found %d repositories for %s", len(repos), username)
    return repos
