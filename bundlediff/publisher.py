"""Create or update the bundle size comment on a GitHub pull request."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from github import Auth, Github

from .config import BundleDiffConfig
from .errors import MissingTokenError, PullRequestNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PullRequestRef:
    repository: str
    number: int


@dataclass(frozen=True, slots=True)
class CommentResult:
    """Outcome of a publish call."""

    action: str
    comment_id: int
    url: str | None = None

    @property
    def updated(self) -> bool:
        return self.action == "updated"


def resolve_token(
    config: BundleDiffConfig,
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    env = os.environ if environ is None else environ
    token = explicit or config.github.token or env.get("GITHUB_TOKEN")
    if not token:
        raise MissingTokenError(
            "GitHub token not found; looked in --token, github.token in the config file "
            "and env.GITHUB_TOKEN"
        )
    return token


def resolve_pull_request(
    config: BundleDiffConfig,
    *,
    repository: str | None = None,
    number: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> PullRequestRef:
    """Determine the target pull request from options, config, then the Actions environment."""
    env = os.environ if environ is None else environ

    repo_name = repository or config.github.repository or env.get("GITHUB_REPOSITORY")
    if not repo_name:
        raise PullRequestNotFoundError(
            "Repository not found; pass --repository, set github.repository or GITHUB_REPOSITORY."
        )

    pr_number = number or config.github.pull_request
    if pr_number is None:
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path:
            pr_number = _number_from_event(Path(event_path))
    if pr_number is None:
        raise PullRequestNotFoundError(
            "Pull request number not found; pass --pr-number, set github.pull_request "
            "or run from a pull_request event."
        )
    return PullRequestRef(repository=repo_name, number=pr_number)


def _number_from_event(path: Path) -> Optional[int]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload: dict[str, Any] = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise PullRequestNotFoundError(f"Cannot read GitHub event payload {path}: {exc}") from exc
    if not isinstance(payload, dict):
        return None
    for key in ("pull_request", "issue"):
        section = payload.get(key)
        if isinstance(section, dict) and isinstance(section.get("number"), int):
            return section["number"]
    number = payload.get("number")
    return number if isinstance(number, int) else None


def resolve_api_url(config: BundleDiffConfig, environ: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if environ is None else environ
    return config.github.api_url or env.get("GITHUB_API_URL") or None


def connect(token: str, api_url: str | None = None) -> Github:
    """Build a lazy client: objects are only fetched when an attribute needs it."""
    kwargs: dict[str, Any] = {"auth": Auth.Token(token), "lazy": True}
    if api_url:
        kwargs["base_url"] = api_url
    return Github(**kwargs)


class CommentPublisher:
    """Keeps a single marker-tagged comment per pull request up to date.

    Pull request conversation comments live on the issue with the same number,
    so a publish costs one list request plus one edit or create request.
    """

    def __init__(self, issue: Any, marker: str, *, number: int | None = None) -> None:
        if not marker:
            raise ValueError("marker must be non-empty")
        self.issue = issue
        self.marker = marker
        self.number = number

    @classmethod
    def for_pull_request(cls, client: Github, ref: PullRequestRef, marker: str) -> "CommentPublisher":
        repo = client.get_repo(ref.repository, lazy=True)
        return cls(repo.get_issue(ref.number), marker, number=ref.number)

    def find_comment(self) -> Any | None:
        for comment in self.issue.get_comments():
            if (comment.body or "").startswith(self.marker):
                return comment
        return None

    def publish(self, body: str) -> CommentResult:
        if not body.startswith(self.marker):
            body = f"{self.marker}\n{body}"

        existing = self.find_comment()
        if existing is not None:
            existing.edit(body=body)
            logger.info("Updated comment %s on pull request #%s", existing.id, self.number)
            return CommentResult(action="updated", comment_id=existing.id, url=existing.html_url)

        created = self.issue.create_comment(body=body)
        logger.info("Created comment %s on pull request #%s", created.id, self.number)
        return CommentResult(action="created", comment_id=created.id, url=created.html_url)
