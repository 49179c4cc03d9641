"""Command-line entry point."""

from __future__ import annotations

import asyncio
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import FallbackValues, Settings
from .orchestrator import run


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.command()
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub access token (or GITHUB_TOKEN env).")
@click.option(
    "--username",
    envvar="GITHUB_USERNAME",
    help="User to profile (or GITHUB_USERNAME env). Defaults to the token owner.",
)
@click.option(
    "--theme",
    type=click.Choice(["dark", "light"]),
    default="dark",
    envvar="PROFILE_THEME",
    show_default=True,
    help="Badge color palette.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory that receives profile.svg and README.md.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Terminal summary format.",
)
@click.option(
    "--streak-fallback",
    type=click.IntRange(min=0),
    default=0,
    envvar="PROFILE_STREAK_FALLBACK",
    show_default=True,
    help="Streak reported when no streak source is reachable.",
)
@click.option(
    "--include-forks-in-stars/--exclude-forks-in-stars",
    default=True,
    show_default=True,
    help="Count stars of forked repositories.",
)
@click.option(
    "--commit-delay",
    type=click.FloatRange(min=0),
    default=0.1,
    show_default=True,
    help="Seconds between per-repository commit requests.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="profile-badge")
def main(
    token: str | None,
    username: str | None,
    theme: str,
    output_dir: str,
    output_format: str,
    streak_fallback: int,
    include_forks_in_stars: bool,
    commit_delay: float,
    verbose: bool,
) -> None:
    """Generate a GitHub profile badge (profile.svg) and README.md."""
    _configure_logging(verbose)

    if not token:
        Console(stderr=True).print(
            "[bold red]Error:[/bold red] GITHUB_TOKEN environment variable is required.\n"
            "Set it with: export GITHUB_TOKEN=your_token_here"
        )
        raise SystemExit(1)

    settings = Settings(
        fallbacks=FallbackValues(streak=streak_fallback),
        include_forks_in_stars=include_forks_in_stars,
        commit_request_delay=commit_delay,
    )
    asyncio.run(run(
        token=token,
        username=username,
        theme=theme,
        output_dir=output_dir,
        settings=settings,
        output_format=output_format,
    ))
