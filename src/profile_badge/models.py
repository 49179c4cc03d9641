"""Data models for profile-badge."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date


@dataclass(frozen=True)
class RepositoryDescriptor:
    name: str
    fork: bool
    stars: int

    @classmethod
    def from_api(cls, payload: dict) -> RepositoryDescriptor:
        return cls(
            name=payload["name"],
            fork=bool(payload.get("fork", False)),
            stars=int(payload.get("stargazers_count") or 0),
        )


@dataclass(frozen=True)
class ContributionDay:
    date: date
    count: int


@dataclass(frozen=True)
class ProfileStats:
    """Everything the badge shows, assembled once per run.

    ``lines_of_code`` is an estimate derived from the repository count,
    not a measurement.
    """

    name: str
    username: str
    location: str
    bio: str
    company: str
    blog: str
    repositories: int
    followers: int
    following: int
    commits: int
    pull_requests: int
    issues: int
    stars: int
    streak: int
    lines_of_code: int

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type == "int" and (not isinstance(value, int) or value < 0):
                raise ValueError(f"{f.name} must be a non-negative integer, got {value!r}")
