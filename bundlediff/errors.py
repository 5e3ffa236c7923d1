"""Exceptions raised by bundlediff."""

from __future__ import annotations


class BundleDiffError(RuntimeError):
    """Base class for errors reported to the user without a traceback."""


class MissingTokenError(BundleDiffError):
    """Raised when no GitHub token can be found."""


class PullRequestNotFoundError(BundleDiffError):
    """Raised when the target repository or pull request cannot be determined."""
