"""CLI entrypoints for bundlediff."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import BundleDiffConfig, load_config
from .diff import BundleDiff, diff_manifests
from .errors import BundleDiffError
from .manifests import load_manifest
from .publisher import (
    CommentPublisher,
    connect,
    resolve_api_url,
    resolve_pull_request,
    resolve_token,
)
from .reporting import render_comment, render_rich_table, render_table, write_report

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(help="Compare esbuild metafiles and report bundle size changes per entrypoint.")


class OutputFormat(str, Enum):
    """How the diff table is printed."""

    MARKDOWN = "markdown"
    RICH = "rich"


ConfigPathOption = Annotated[
    str,
    typer.Option(
        "--config",
        "-c",
        help="Path to a bundlediff.yml file or the directory containing it.",
    ),
]
ReportDirOption = Annotated[
    Path | None,
    typer.Option("--report-dir", help="Also write the diff as JSON into this directory."),
]
BasePathArgument = Annotated[
    Path | None,
    typer.Argument(help="Metafile built from the base branch (defaults to base_path in config)."),
]
PrPathArgument = Annotated[
    Path | None,
    typer.Argument(help="Metafile built from the pull request (defaults to pr_path in config)."),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bundlediff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Compare esbuild metafiles and report bundle size changes per entrypoint."""
    _configure_logging(verbose)


@app.command("print")
def print_diff(
    base: BasePathArgument = None,
    pr: PrPathArgument = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Markdown table or a terminal table."),
    ] = OutputFormat.MARKDOWN,
    config_path: ConfigPathOption = ".",
    report_dir: ReportDirOption = None,
) -> None:
    """Print the size diff table to standard output."""
    config = _load(config_path)
    diff = _compute_diff(config, base, pr)

    if output_format is OutputFormat.RICH:
        console.print(render_rich_table(diff, title=config.title))
    else:
        console.print(render_table(diff), markup=False, highlight=False, emoji=False, soft_wrap=True)

    _maybe_write_report(diff, report_dir)


@app.command()
def comment(  # noqa: PLR0913
    base: BasePathArgument = None,
    pr: PrPathArgument = None,
    token: Annotated[
        str | None,
        typer.Option("--token", help="GitHub token (falls back to config, then GITHUB_TOKEN)."),
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option("--repository", "-r", help="Repository as owner/name."),
    ] = None,
    pr_number: Annotated[
        int | None,
        typer.Option("--pr-number", "-n", min=1, help="Pull request to comment on."),
    ] = None,
    marker: Annotated[
        str | None,
        typer.Option("--marker", help="Override the hidden marker identifying the comment."),
    ] = None,
    config_path: ConfigPathOption = ".",
    report_dir: ReportDirOption = None,
) -> None:
    """Create or update the bundle size comment on a pull request."""
    config = _load(config_path)
    comment_marker = marker or config.marker

    try:
        github_token = resolve_token(config, token)
        target = resolve_pull_request(config, repository=repository, number=pr_number)
    except BundleDiffError as exc:
        console.print(f"[bold red]Cannot publish comment[/]: {exc}")
        raise typer.Exit(code=1) from exc

    diff = _compute_diff(config, base, pr)
    body = render_comment(diff, marker=comment_marker, title=config.title)

    client = connect(github_token, resolve_api_url(config))
    publisher = CommentPublisher.for_pull_request(client, target, comment_marker)
    result = publisher.publish(body)

    verb = "Updated" if result.updated else "Created"
    console.print(
        f"[bold green]{verb}[/] comment {result.comment_id} on {target.repository}#{target.number}"
    )
    if result.url:
        console.print(result.url, markup=False, highlight=False, soft_wrap=True)

    _maybe_write_report(diff, report_dir)


def _compute_diff(config: BundleDiffConfig, base: Path | None, pr: Path | None) -> BundleDiff:
    base_path = base or config.base_path
    pr_path = pr or config.pr_path
    if base_path is None:
        raise typer.BadParameter("No base metafile given; pass BASE or set base_path in the config.")
    if pr_path is None:
        raise typer.BadParameter("No pull request metafile given; pass PR or set pr_path in the config.")

    logger.debug("Comparing %s against %s", base_path, pr_path)
    return diff_manifests(load_manifest(base_path), load_manifest(pr_path))


def _maybe_write_report(diff: BundleDiff, report_dir: Path | None) -> None:
    if report_dir is None:
        return
    path = write_report(diff, report_dir)
    logger.info("Wrote diff report to %s", path)


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _load(path: str) -> BundleDiffConfig:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
