"""Current contribution streak.

The streak is the number of consecutive UTC days, ending today or
yesterday, with at least one contribution. The contribution calendar is the
primary source; the public events feed is a coarser fallback that only sees
event presence.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone

from .github.client import GitHubAPIError, GitHubClient
from .models import ContributionDay

log = logging.getLogger(__name__)

CALENDAR_DAYS = 365
MAX_EVENT_PAGES = 3
EVENTS_PAGE_SIZE = 100

CONTRIBUTION_CALENDAR_QUERY = """
query($username: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $username) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            contributionCount
            date
          }
        }
      }
    }
  }
}
"""

_ONE_DAY = timedelta(days=1)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def contribution_days(weeks: list[dict]) -> list[ContributionDay]:
    return [
        ContributionDay(date=date.fromisoformat(day["date"]), count=int(day["contributionCount"]))
        for week in weeks
        for day in week["contributionDays"]
    ]


def current_streak(dates: Iterable[date], today: date) -> int:
    """Walk backward from the latest contribution date.

    The latest date must be today or yesterday; after that each date has to
    be exactly one day before the previous one. The first gap ends the walk.
    """
    ordered = sorted(set(dates), reverse=True)
    if not ordered:
        return 0

    first = ordered[0]
    if first != today and first != today - _ONE_DAY:
        return 0

    streak = 1
    expected = first - _ONE_DAY
    for day in ordered[1:]:
        if day != expected:
            break
        streak += 1
        expected -= _ONE_DAY
    return streak


def event_streak(dates: Iterable[date], today: date) -> int:
    """Count days backward from today, tolerating a gap of at most one day."""
    streak = 0
    cursor = today
    for day in sorted(set(dates), reverse=True):
        if (cursor - day).days > 1:
            break
        streak += 1
        cursor = day
    return streak


async def calendar_streak(client: GitHubClient, username: str, today: date) -> int:
    # GitHub rejects calendar windows longer than one year.
    end = datetime.combine(today, time.max, tzinfo=timezone.utc)
    start = end - timedelta(days=CALENDAR_DAYS)
    data = await client.graphql(
        CONTRIBUTION_CALENDAR_QUERY,
        {"username": username, "from": start.isoformat(), "to": end.isoformat()},
    )
    user = data.get("user")
    if user is None:
        raise GitHubAPIError(404, f"No contribution calendar for {username}")

    weeks = user["contributionsCollection"]["contributionCalendar"]["weeks"]
    active = [d.date for d in contribution_days(weeks) if d.count > 0]
    return current_streak(active, today)


async def events_streak(
    client: GitHubClient, username: str, today: date, max_pages: int = MAX_EVENT_PAGES
) -> int:
    dates: set[date] = set()
    for page in range(1, max_pages + 1):
        events = await client.list_public_events(username, page=page, per_page=EVENTS_PAGE_SIZE)
        for event in events:
            created = datetime.fromisoformat(event["created_at"].replace("Z", "+00:00"))
            dates.add(created.astimezone(timezone.utc).date())
        if len(events) < EVENTS_PAGE_SIZE:
            break
    return event_streak(dates, today)


async def calculate_streak(
    client: GitHubClient,
    username: str,
    fallback: int = 0,
    today: date | None = None,
    max_event_pages: int = MAX_EVENT_PAGES,
) -> int:
    today = today or utc_today()
    try:
        streak = await calendar_streak(client, username, today)
        log.info("Current streak: %d days", streak)
        return streak
    except Exception as exc:
        log.warning("Contribution calendar unavailable, falling back to events: %s", exc)

    try:
        streak = await events_streak(client, username, today, max_pages=max_event_pages)
        log.info("Current streak from public events: %d days", streak)
        return streak
    except Exception as exc:
        log.error("Could not compute streak, using fallback %d: %s", fallback, exc)
        return fallback
