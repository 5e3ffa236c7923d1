"""Reading metafiles from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import Manifest

logger = logging.getLogger(__name__)


def load_manifest(path: str | Path) -> Manifest:
    """Parse the metafile at ``path``.

    Read errors, invalid JSON and schema violations are not caught; callers
    see the underlying ``OSError``, ``json.JSONDecodeError`` or
    ``pydantic.ValidationError``.
    """
    source = Path(path)
    with source.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    manifest = Manifest.model_validate(data)
    logger.debug("Loaded %d output(s) from %s", len(manifest.outputs), source)
    return manifest
