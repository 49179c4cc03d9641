"""Orchestrator: fetch stats, render the badge and write the output files."""

from __future__ import annotations

import logging

from rich.console import Console

from .assembler import assemble_profile_stats
from .config import Settings
from .github.client import GitHubClient
from .models import ProfileStats
from .renderer import (
    README_FILENAME,
    SVG_FILENAME,
    render_json,
    render_readme,
    render_summary,
    render_svg,
)
from .writer import atomic_outputs

log = logging.getLogger(__name__)


async def run(
    *,
    token: str,
    username: str | None = None,
    theme: str = "dark",
    output_dir: str = ".",
    settings: Settings | None = None,
    output_format: str = "table",
) -> ProfileStats:
    """Run one badge generation pass and return the collected stats."""
    async with GitHubClient(token) as client:
        if not username:
            username = (await client.get_authenticated_user())["login"]
            log.info("No username given, using token owner %s", username)
        stats = await assemble_profile_stats(client, username, settings)

    svg = render_svg(stats, theme=theme)
    readme = render_readme(stats)
    with atomic_outputs(output_dir) as stage:
        svg_path = stage.write(SVG_FILENAME, svg)
        readme_path = stage.write(README_FILENAME, readme)

    if output_format == "json":
        render_json(stats)
    else:
        console = Console()
        render_summary(stats, console=console)
        console.print(f"Saved to {svg_path} and {readme_path}")
    return stats
