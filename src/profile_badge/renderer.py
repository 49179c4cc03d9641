"""Badge renderers: SVG card, README companion, rich terminal summary and JSON."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from xml.sax.saxutils import escape

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ProfileStats
from .streak import utc_today

THEMES: dict[str, dict[str, str]] = {
    "dark": {
        "background": "#0d1117",
        "card": "#161b22",
        "border": "#30363d",
        "accent": "#58a6ff",
        "accent_deep": "#1f6feb",
        "text": "#c9d1d9",
        "muted": "#8b949e",
        "avatar_text": "#ffffff",
    },
    "light": {
        "background": "#ffffff",
        "card": "#f6f8fa",
        "border": "#d0d7de",
        "accent": "#0969da",
        "accent_deep": "#0550ae",
        "text": "#24292f",
        "muted": "#656d76",
        "avatar_text": "#ffffff",
    },
}

FONT = "'Segoe UI', -apple-system, system-ui, sans-serif"

SVG_FILENAME = "profile.svg"
README_FILENAME = "README.md"


def _format_number(n: int) -> str:
    return f"{n:,}"


def _format_compact(n: int) -> str:
    if n >= 1000:
        return f"{n / 1000:.1f}k"
    return str(n)


def _initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part)[:2].upper()


def _activity_rows(stats: ProfileStats) -> list[tuple[str, str]]:
    return [
        (_format_compact(stats.commits), "commits this year"),
        (_format_compact(stats.pull_requests), "pull requests"),
        (_format_compact(stats.issues), "issues opened"),
        (str(stats.streak), "day streak"),
        (str(stats.repositories), "repositories"),
        (f"~{_format_compact(stats.lines_of_code)}", "lines of code (estimated)"),
    ]


def _tiles(stats: ProfileStats) -> list[tuple[str, str]]:
    return [
        (str(stats.repositories), "Repositories"),
        (_format_compact(stats.followers), "Followers"),
        (_format_compact(stats.following), "Following"),
        (_format_compact(stats.stars), "Stars"),
    ]


def render_svg(stats: ProfileStats, theme: str = "dark") -> str:
    """Render the profile card as a standalone SVG document."""
    try:
        colors = THEMES[theme]
    except KeyError:
        raise ValueError(f"Unknown theme {theme!r}, expected one of {sorted(THEMES)}") from None

    tiles = "\n".join(
        f'    <g transform="translate({i * 110}, 0)">\n'
        f'      <rect width="100" height="65" rx="10" fill="{colors["background"]}" '
        f'stroke="{colors["border"]}" stroke-width="2"/>\n'
        f'      <text x="50" y="30" fill="{colors["accent"]}" font-family="{FONT}" font-size="24" '
        f'font-weight="700" text-anchor="middle">{escape(value)}</text>\n'
        f'      <text x="50" y="50" fill="{colors["muted"]}" font-family="{FONT}" font-size="12" '
        f'text-anchor="middle">{label}</text>\n'
        f"    </g>"
        for i, (value, label) in enumerate(_tiles(stats))
    )

    activity = "\n".join(
        f'    <g transform="translate(0, {50 * (i + 1)})">\n'
        f'      <path d="M8 20 L12 12 L16 18 L20 10 L24 15" stroke="{colors["accent"]}" '
        f'stroke-width="2" fill="none"/>\n'
        f'      <text x="35" y="22" fill="{colors["text"]}" font-family="{FONT}" font-size="20" '
        f'font-weight="700">{escape(value)}</text>\n'
        f'      <text x="130" y="22" fill="{colors["muted"]}" font-family="{FONT}" '
        f'font-size="18">{label}</text>\n'
        f"    </g>"
        for i, (value, label) in enumerate(_activity_rows(stats))
    )

    return f"""<svg viewBox="0 0 1200 800" xmlns="http://www.w3.org/2000/svg">
  <rect width="1200" height="800" fill="{colors["background"]}"/>
  <rect x="50" y="50" width="1100" height="700" rx="20" fill="{colors["card"]}" stroke="{colors["border"]}" stroke-width="3"/>
  <line x1="600" y1="50" x2="600" y2="600" stroke="{colors["border"]}" stroke-width="3"/>

  <g transform="translate(50, 0)">
    <text x="250" y="120" fill="{colors["accent"]}" font-family="{FONT}" font-size="32" font-weight="700" text-anchor="middle">{escape(stats.name)}</text>
    <text x="250" y="155" fill="{colors["muted"]}" font-family="{FONT}" font-size="20" text-anchor="middle">@{escape(stats.username)}</text>
    <g transform="translate(80, 200)">
      <text x="0" y="0" fill="{colors["muted"]}" font-family="{FONT}" font-size="18">
        <tspan x="0" dy="0">\U0001f4cd {escape(stats.location)}</tspan>
        <tspan x="0" dy="40">\U0001f4bc {escape(stats.bio)}</tspan>
        <tspan x="0" dy="40">\U0001f3e2 {escape(stats.company)}</tspan>
        <tspan x="0" dy="40">\U0001f517 {escape(stats.blog)}</tspan>
      </text>
    </g>
  </g>

  <g transform="translate(110, 440)">
{tiles}
  </g>

  <g transform="translate(650, 100)">
    <text x="0" y="0" fill="{colors["text"]}" font-family="{FONT}" font-size="28" font-weight="700">Activity Stats</text>
{activity}
  </g>

  <g transform="translate(600, 660)">
    <circle cx="0" cy="0" r="45" fill="{colors["background"]}" stroke="{colors["accent"]}" stroke-width="3"/>
    <circle cx="0" cy="0" r="40" fill="url(#avatarGradient)"/>
    <text x="0" y="10" fill="{colors["avatar_text"]}" font-family="{FONT}" font-size="32" font-weight="700" text-anchor="middle">{escape(_initials(stats.name))}</text>
  </g>

  <defs>
    <radialGradient id="avatarGradient">
      <stop offset="0%" stop-color="{colors["accent"]}"/>
      <stop offset="100%" stop-color="{colors["accent_deep"]}"/>
    </radialGradient>
  </defs>
</svg>
"""


def render_readme(stats: ProfileStats, today: date | None = None) -> str:
    """Render the Markdown document that embeds the badge."""
    today = today or utc_today()
    rows = [
        ("Repositories", _format_number(stats.repositories)),
        ("Stars", _format_number(stats.stars)),
        ("Followers", _format_number(stats.followers)),
        ("Commits (this year)", _format_number(stats.commits)),
        ("Pull requests", _format_number(stats.pull_requests)),
        ("Issues", _format_number(stats.issues)),
        ("Current streak", f"{stats.streak} days"),
        ("Lines of code (estimate)", f"~{_format_number(stats.lines_of_code)}"),
    ]
    table = "\n".join(f"| {label} | {value} |" for label, value in rows)
    return f"""<div align="center">

![{stats.name}](./{SVG_FILENAME})

</div>

## \U0001f44b Hi, I'm {stats.name}

{stats.bio}

## \U0001f4c8 GitHub Stats

| Metric | Value |
|---|---|
{table}

## \U0001f4eb Connect

- GitHub: [@{stats.username}](https://github.com/{stats.username})
- Web: {stats.blog}

---

<div align="center">

**Last Updated:** {today:%B} {today.day}, {today.year}

*This README is generated automatically.*

</div>
"""


def render_summary(stats: ProfileStats, console: Console | None = None) -> None:
    """Print the collected stats to the terminal using rich."""
    console = console or Console()
    console.print(Panel(
        Text(f"profile-badge: {stats.name} (@{stats.username})", justify="center"),
        style="bold cyan",
    ))

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("label", style="dim")
    summary.add_column("value", style="bold")
    summary.add_row("Repositories", _format_number(stats.repositories))
    summary.add_row("Followers", _format_number(stats.followers))
    summary.add_row("Following", _format_number(stats.following))
    summary.add_row("Stars", _format_number(stats.stars))
    summary.add_row("Commits", _format_number(stats.commits))
    summary.add_row("Pull Requests", _format_number(stats.pull_requests))
    summary.add_row("Issues", _format_number(stats.issues))
    summary.add_row("Streak", f"{stats.streak} days")
    summary.add_row("Lines of Code (est.)", _format_number(stats.lines_of_code))
    console.print(summary)


def render_json(stats: ProfileStats) -> None:
    """Print the collected stats as JSON."""
    print(json.dumps(asdict(stats), indent=2, ensure_ascii=False))
