from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest


@dataclass
class FakeComment:
    """Stand-in for ``github.IssueComment.IssueComment``."""

    id: int
    body: str | None
    html_url: str = ""
    edits: list[str] = field(default_factory=list)

    def edit(self, body: str) -> None:
        self.edits.append(body)
        self.body = body


@dataclass
class FakeIssue:
    """Stand-in for the issue behind a pull request."""

    number: int = 7
    comments: list[FakeComment] = field(default_factory=list)
    created: list[str] = field(default_factory=list)

    def get_comments(self) -> list[FakeComment]:
        return list(self.comments)

    def create_comment(self, body: str) -> FakeComment:
        self.created.append(body)
        comment_id = 100 + len(self.comments)
        comment = FakeComment(id=comment_id, body=body, html_url=f"https://github.test/c/{comment_id}")
        self.comments.append(comment)
        return comment


@dataclass
class FakeRepo:
    issue: FakeIssue
    requested: list[int] = field(default_factory=list)

    def get_issue(self, number: int) -> FakeIssue:
        self.requested.append(number)
        return self.issue


@dataclass
class FakeGithub:
    repo: FakeRepo
    names: list[str] = field(default_factory=list)
    lazy: list[bool] = field(default_factory=list)

    def get_repo(self, name: str, lazy: bool = False) -> FakeRepo:
        self.names.append(name)
        self.lazy.append(lazy)
        return self.repo


@pytest.fixture
def make_github() -> Callable[..., FakeGithub]:
    """Build a fake client whose pull request issue already carries comments with ``bodies``."""

    def _factory(number: int = 7, bodies: list[str | None] | None = None) -> FakeGithub:
        comments = [
            FakeComment(id=index, body=body, html_url=f"https://github.test/c/{index}")
            for index, body in enumerate(bodies or [], start=1)
        ]
        issue = FakeIssue(number=number, comments=comments)
        return FakeGithub(repo=FakeRepo(issue=issue))

    return _factory
