"""Attribute metafile outputs to the entrypoints that produced them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .manifests import Manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OutputSize:
    """One generated file counted towards an entrypoint."""

    path: str
    bytes: int


def compute_size_by_entrypoint(manifest: Manifest) -> dict[str, list[OutputSize]]:
    """Group output files by entrypoint, folding in each entrypoint's CSS bundle.

    Outputs without an entrypoint (shared chunks, source maps) are skipped.
    A stylesheet bundle shared by several outputs of the same entrypoint is
    counted once; a bundle path missing from the manifest is ignored.
    """
    result: dict[str, list[OutputSize]] = {}
    for path, output in manifest.outputs.items():
        if not output.entry_point:
            continue

        files = result.setdefault(output.entry_point, [])
        if not any(item.path == path for item in files):
            files.append(OutputSize(path=path, bytes=output.bytes))

        if not output.css_bundle:
            continue
        css_output = manifest.get(output.css_bundle)
        if css_output is None:
            logger.debug("CSS bundle %s for %s not found in outputs", output.css_bundle, path)
            continue
        if any(item.path == output.css_bundle for item in files):
            continue
        files.append(OutputSize(path=output.css_bundle, bytes=css_output.bytes))

    return result


def total_bytes(sizes: Iterable[OutputSize]) -> int:
    return sum(item.bytes for item in sizes)
