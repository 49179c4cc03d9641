"""Tests for the streak calculator."""

from __future__ import annotations

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from profile_badge.github.client import GitHubAPIError, GitHubClient
from profile_badge.streak import (
    CONTRIBUTION_CALENDAR_QUERY,
    calculate_streak,
    contribution_days,
    current_streak,
    event_streak,
)

TODAY = date(2024, 6, 15)


def _days_ago(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=n) for n in offsets]


def _calendar(active: dict[date, int], days: int = 21) -> dict:
    """Build a contributionCalendar payload covering the last ``days`` days."""
    all_days = [TODAY - timedelta(days=n) for n in range(days - 1, -1, -1)]
    weeks = [
        {
            "contributionDays": [
                {"date": d.isoformat(), "contributionCount": active.get(d, 0)}
                for d in all_days[i:i + 7]
            ]
        }
        for i in range(0, len(all_days), 7)
    ]
    return {"user": {"contributionsCollection": {"contributionCalendar": {"weeks": weeks}}}}


def _events(dates: list[date]) -> list[dict]:
    return [{"type": "PushEvent", "created_at": f"{d.isoformat()}T12:30:00Z"} for d in dates]


@pytest.mark.parametrize(
    ("offsets", "expected"),
    [
        ((0, 1, 2), 3),
        ((2,), 0),
        ((1, 3), 1),
        ((), 0),
        ((1, 2, 3, 4), 4),
        ((0, 2, 3), 1),
        ((0, 1, 2, 4, 5, 6, 7), 3),
    ],
)
def test_current_streak(offsets, expected):
    assert current_streak(_days_ago(*offsets), TODAY) == expected


def test_current_streak_ignores_input_order_and_duplicates():
    assert current_streak(_days_ago(2, 0, 1, 1), TODAY) == 3


def test_current_streak_full_year():
    assert current_streak(_days_ago(*range(365)), TODAY) == 365


@pytest.mark.parametrize(
    "offsets",
    [(0, 1, 2), (2,), (1, 3), (), (1, 2, 3, 4), (0, 2, 3), (0, 1, 2, 4, 5, 6, 7)],
)
def test_event_streak_matches_calendar_walk(offsets):
    dates = _days_ago(*offsets)
    assert event_streak(dates, TODAY) == current_streak(dates, TODAY)


def test_contribution_days_flattens_weeks():
    payload = _calendar({TODAY: 4}, days=10)
    weeks = payload["user"]["contributionsCollection"]["contributionCalendar"]["weeks"]
    days = contribution_days(weeks)
    assert len(days) == 10
    assert days[-1].date == TODAY
    assert days[-1].count == 4
    assert all(d.count == 0 for d in days[:-1])


@pytest.mark.asyncio
async def test_calculate_streak_from_calendar():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.return_value = _calendar({d: 2 for d in _days_ago(0, 1, 2, 5)})

    assert await calculate_streak(client, "alice", today=TODAY) == 3

    query, variables = client.graphql.await_args.args
    assert query == CONTRIBUTION_CALENDAR_QUERY
    assert variables["username"] == "alice"
    assert variables["from"].startswith("2023-06-16")
    assert variables["to"].startswith("2024-06-15")
    client.list_public_events.assert_not_called()


@pytest.mark.asyncio
async def test_calculate_streak_stale_calendar_is_zero():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.return_value = _calendar({d: 1 for d in _days_ago(2, 3, 4)})
    assert await calculate_streak(client, "alice", today=TODAY) == 0


@pytest.mark.asyncio
async def test_calculate_streak_falls_back_to_events():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.side_effect = GitHubAPIError(502, "bad gateway")
    client.list_public_events.return_value = _events(_days_ago(0, 0, 1, 3))

    assert await calculate_streak(client, "alice", today=TODAY) == 2
    client.list_public_events.assert_awaited_once_with("alice", page=1, per_page=100)


@pytest.mark.asyncio
async def test_event_fallback_agrees_with_calendar():
    offsets = (1, 2, 3, 5)
    calendar_client = AsyncMock(spec=GitHubClient)
    calendar_client.graphql.return_value = _calendar({d: 1 for d in _days_ago(*offsets)})

    events_client = AsyncMock(spec=GitHubClient)
    events_client.graphql.side_effect = GitHubAPIError(500, "boom")
    events_client.list_public_events.return_value = _events(_days_ago(*offsets))

    from_calendar = await calculate_streak(calendar_client, "alice", today=TODAY)
    from_events = await calculate_streak(events_client, "alice", today=TODAY)
    assert from_calendar == from_events == 3


@pytest.mark.asyncio
async def test_missing_user_triggers_event_fallback():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.return_value = {"user": None}
    client.list_public_events.return_value = _events(_days_ago(0))
    assert await calculate_streak(client, "ghost", today=TODAY) == 1


@pytest.mark.asyncio
async def test_event_pages_are_bounded():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.side_effect = GitHubAPIError(500, "boom")
    client.list_public_events.return_value = _events([TODAY] * 100)

    assert await calculate_streak(client, "alice", today=TODAY, max_event_pages=3) == 1
    assert client.list_public_events.await_count == 3


@pytest.mark.asyncio
async def test_both_strategies_failing_returns_fallback():
    client = AsyncMock(spec=GitHubClient)
    client.graphql.side_effect = GitHubAPIError(500, "boom")
    client.list_public_events.side_effect = GitHubAPIError(500, "boom")

    assert await calculate_streak(client, "alice", today=TODAY) == 0
    assert await calculate_streak(client, "alice", fallback=47, today=TODAY) == 47
