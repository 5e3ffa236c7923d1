"""Render bundle diffs as Markdown, terminal tables and JSON reports."""

from __future__ import annotations

import json
from pathlib import Path

from rich.table import Table
from rich.text import Text

from .diff import BundleDiff, ChangeKind, SizeChange
from .formatting import bytes_to_size, escape_pipes, format_percent

COMMENT_MARKER = "<!-- esbuild-bundle-size-diff-comment -->"
DEFAULT_TITLE = "Bundle size diff"
REPORT_FILENAME = "bundle-diff.json"

COLUMN_HEADINGS = ("Entrypoint", "Path", "Old size", "New size", "Diff")


def describe_change(change: SizeChange) -> str:
    """Diff cell text: ``new``, ``deleted`` or ``"<delta> (<percent>)"``."""
    if change.kind is ChangeKind.NEW:
        return "new"
    if change.kind is ChangeKind.DELETED:
        return "deleted"
    return f"{bytes_to_size(change.delta)} ({format_percent(change.percent)})"


def _size_cell(value: int | None) -> str:
    return "n/a" if value is None else bytes_to_size(value)


def table_rows(diff: BundleDiff) -> list[tuple[bool, list[str]]]:
    """Flatten ``diff`` into ``(is_path_row, cells)`` pairs in display order."""
    rows: list[tuple[bool, list[str]]] = []
    for entry in diff.entrypoints:
        rows.append(
            (
                False,
                [
                    entry.entrypoint,
                    "*",
                    _size_cell(entry.change.old_bytes),
                    _size_cell(entry.change.new_bytes),
                    describe_change(entry.change),
                ],
            )
        )
        for item in entry.paths:
            rows.append(
                (
                    True,
                    [
                        "",
                        item.path,
                        _size_cell(item.change.old_bytes),
                        _size_cell(item.change.new_bytes),
                        describe_change(item.change),
                    ],
                )
            )
    return rows


def render_table(diff: BundleDiff) -> str:
    """Render a GitHub-flavoured Markdown table; per-path rows use ``<sub>`` text."""
    lines = [
        _markdown_row(list(COLUMN_HEADINGS)),
        _markdown_row(["---"] * len(COLUMN_HEADINGS)),
    ]
    for is_path_row, cells in table_rows(diff):
        if is_path_row:
            # <sub> shrinks the font inside GitHub tables
            cells = [f"<sub>{cell}</sub>" for cell in cells]
        lines.append(_markdown_row(cells))
    return "\n".join(lines)


def render_comment(
    diff: BundleDiff,
    *,
    marker: str = COMMENT_MARKER,
    title: str = DEFAULT_TITLE,
) -> str:
    """Build the pull request comment body; the marker must stay on the first line."""
    return f"{marker}\n## {title}\n\n{render_table(diff)}\n"


def render_rich_table(diff: BundleDiff, *, title: str = DEFAULT_TITLE) -> Table:
    table = Table(title=title)
    table.add_column(COLUMN_HEADINGS[0], style="bold")
    table.add_column(COLUMN_HEADINGS[1])
    for heading in COLUMN_HEADINGS[2:]:
        table.add_column(heading, justify="right")

    for is_path_row, cells in table_rows(diff):
        table.add_row(*(Text(cell) for cell in cells), style="dim" if is_path_row else None)
    return table


def write_report(diff: BundleDiff, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / REPORT_FILENAME
    with target.open("w", encoding="utf-8") as handle:
        json.dump(diff.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target


def _markdown_row(cells: list[str]) -> str:
    return "| " + " | ".join(escape_pipes(cell) for cell in cells) + " |"
