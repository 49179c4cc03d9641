"""Assemble a ProfileStats record from the individual collectors."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import date

from .aggregator import (
    count_commits,
    count_issues,
    count_pull_requests,
    estimate_lines_of_code,
    total_stars,
)
from .collector import collect_repositories
from .config import Settings
from .github.client import GitHubClient
from .models import ProfileStats
from .streak import calculate_streak

log = logging.getLogger(__name__)


async def assemble_profile_stats(
    client: GitHubClient,
    username: str,
    settings: Settings | None = None,
    *,
    today: date | None = None,
    rng: random.Random | None = None,
) -> ProfileStats:
    """Collect every metric for ``username`` into one immutable record.

    The profile and repository list are fetched first and any failure there
    propagates. Commits come next because their fallback path walks the
    repository list. The search and streak lookups then run concurrently;
    each of them substitutes its own fallback value on error.
    """
    settings = settings or Settings()
    fallbacks = settings.fallbacks

    user = await client.get_user(username)
    repos = await collect_repositories(client, username, page_size=settings.page_size)

    log.info("Counting commits (this may take a while)...")
    commits = await count_commits(
        client,
        username,
        repos,
        fallback=fallbacks.commits,
        delay=settings.commit_request_delay,
        include_forks=settings.include_forks_in_commits,
    )

    pull_requests, issues, streak = await asyncio.gather(
        count_pull_requests(client, username, fallback=fallbacks.pull_requests),
        count_issues(client, username, fallback=fallbacks.issues),
        calculate_streak(
            client,
            username,
            fallback=fallbacks.streak,
            today=today,
            max_event_pages=settings.max_event_pages,
        ),
    )
    # Stars and the size estimate only read the repository list, so they
    # are computed inline rather than scheduled with the network lookups.
    stars = total_stars(repos, include_forks=settings.include_forks_in_stars)
    lines_of_code = estimate_lines_of_code(
        repos,
        rng=rng,
        per_repository=settings.lines_per_repository,
        jitter=settings.lines_jitter,
    )

    defaults = settings.profile
    return ProfileStats(
        name=user.get("name") or username,
        username=username,
        location=user.get("location") or defaults.location,
        bio=user.get("bio") or defaults.bio,
        company=user.get("company") or defaults.company,
        blog=user.get("blog") or f"github.com/{username}",
        repositories=len(repos),
        followers=int(user.get("followers") or 0),
        following=int(user.get("following") or 0),
        commits=commits,
        pull_requests=pull_requests,
        issues=issues,
        stars=stars,
        streak=streak,
        lines_of_code=lines_of_code,
    )
