"""Compare per-entrypoint bundle sizes between two metafiles."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .manifests import Manifest
from .sizes import OutputSize, compute_size_by_entrypoint, total_bytes

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CHANGED = "changed"
    NEW = "new"
    DELETED = "deleted"


class SizeChange(BaseModel):
    """Old and new byte counts; ``None`` means absent from that manifest."""

    old_bytes: Optional[int] = Field(default=None, ge=0)
    new_bytes: Optional[int] = Field(default=None, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kind(self) -> ChangeKind:
        if self.old_bytes is None:
            return ChangeKind.NEW
        if self.new_bytes is None:
            return ChangeKind.DELETED
        return ChangeKind.CHANGED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def delta(self) -> int:
        return (self.new_bytes or 0) - (self.old_bytes or 0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percent(self) -> Optional[float]:
        """Relative change against the old size, undefined for a zero-byte baseline."""
        if self.kind is not ChangeKind.CHANGED:
            return None
        if not self.old_bytes:
            return 0.0 if self.delta == 0 else None
        return self.delta / self.old_bytes * 100


class PathDiff(BaseModel):
    path: str
    change: SizeChange


class EntrypointDiff(BaseModel):
    entrypoint: str
    change: SizeChange
    paths: list[PathDiff] = Field(default_factory=list)


class BundleDiff(BaseModel):
    """Full comparison of two metafiles, entrypoints in lexicographic order."""

    entrypoints: list[EntrypointDiff] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def totals(self) -> SizeChange:
        old = sum(entry.change.old_bytes or 0 for entry in self.entrypoints)
        new = sum(entry.change.new_bytes or 0 for entry in self.entrypoints)
        return SizeChange(old_bytes=old, new_bytes=new)

    def get(self, entrypoint: str) -> Optional[EntrypointDiff]:
        for entry in self.entrypoints:
            if entry.entrypoint == entrypoint:
                return entry
        return None


def diff_manifests(base: Manifest, pr: Manifest) -> BundleDiff:
    """Diff ``base`` (before) against ``pr`` (after)."""
    base_sizes = compute_size_by_entrypoint(base)
    pr_sizes = compute_size_by_entrypoint(pr)

    entries: list[EntrypointDiff] = []
    for entrypoint in sorted(set(base_sizes) | set(pr_sizes)):
        entries.append(_diff_entrypoint(entrypoint, base_sizes.get(entrypoint), pr_sizes.get(entrypoint)))

    logger.debug(
        "Compared %d entrypoint(s): %d in base, %d in pr",
        len(entries),
        len(base_sizes),
        len(pr_sizes),
    )
    return BundleDiff(entrypoints=entries)


def _diff_entrypoint(
    entrypoint: str,
    base_files: Optional[list[OutputSize]],
    pr_files: Optional[list[OutputSize]],
) -> EntrypointDiff:
    change = SizeChange(
        old_bytes=total_bytes(base_files) if base_files is not None else None,
        new_bytes=total_bytes(pr_files) if pr_files is not None else None,
    )

    base_by_path = {item.path: item.bytes for item in base_files or []}
    pr_by_path = {item.path: item.bytes for item in pr_files or []}
    paths = [
        PathDiff(
            path=path,
            change=SizeChange(old_bytes=base_by_path.get(path), new_bytes=pr_by_path.get(path)),
        )
        for path in sorted(set(base_by_path) | set(pr_by_path))
    ]
    return EntrypointDiff(entrypoint=entrypoint, change=change, paths=paths)
