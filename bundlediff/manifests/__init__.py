"""Metafile data structures and helpers."""

from .loader import load_manifest
from .models import Manifest, ManifestOutput

__all__ = [
    "Manifest",
    "ManifestOutput",
    "load_manifest",
]
