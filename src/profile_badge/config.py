"""Tunables and fallback values for a badge run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FallbackValues:
    """Literal values substituted when a metric cannot be fetched.

    ``streak`` defaults to 0 ("no data"). Older badge revisions reported 47;
    pass ``--streak-fallback 47`` to reproduce them.
    """

    pull_requests: int = 89
    issues: int = 156
    commits: int = 1247
    streak: int = 0


@dataclass(frozen=True)
class ProfileDefaults:
    """Text shown when the GitHub profile leaves a field empty."""

    location: str = "Planet Earth"
    bio: str = "Software developer"
    company: str = "@independent"


@dataclass(frozen=True)
class Settings:
    fallbacks: FallbackValues = field(default_factory=FallbackValues)
    profile: ProfileDefaults = field(default_factory=ProfileDefaults)
    page_size: int = 100
    commit_request_delay: float = 0.1
    max_event_pages: int = 3
    # Stars count forks while commits skip them; both are switchable.
    include_forks_in_stars: bool = True
    include_forks_in_commits: bool = False
    lines_per_repository: int = 500
    lines_jitter: int = 5000
