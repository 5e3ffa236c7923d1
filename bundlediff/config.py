"""Configuration model and loader for bundlediff."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .reporting import COMMENT_MARKER, DEFAULT_TITLE

CONFIG_FILENAME = "bundlediff.yml"


class GitHubConfig(BaseModel):
    """Where to publish the comment and how to authenticate."""

    token: str | None = Field(
        default=None,
        description="Access token; GITHUB_TOKEN from the environment is used when unset.",
    )
    repository: str | None = Field(
        default=None,
        description="Repository in 'owner/name' form; defaults to GITHUB_REPOSITORY.",
    )
    pull_request: int | None = Field(
        default=None,
        ge=1,
        description="Pull request number; defaults to the one in the GitHub Actions event payload.",
    )
    api_url: str | None = Field(
        default=None,
        description="REST API root for GitHub Enterprise; defaults to GITHUB_API_URL or api.github.com.",
    )

    @field_validator("token", "repository", "api_url", mode="before")
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None


class BundleDiffConfig(BaseModel):
    base_path: Path | None = Field(default=None, description="Metafile produced from the base branch.")
    pr_path: Path | None = Field(default=None, description="Metafile produced from the pull request.")
    marker: str = Field(
        default=COMMENT_MARKER,
        min_length=1,
        description="First line of the comment, used to find and update it on later runs.",
    )
    title: str = Field(default=DEFAULT_TITLE)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @field_validator("base_path", "pr_path", mode="before")
    def _ensure_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)


def load_config(path: str | Path) -> BundleDiffConfig:
    """Load configuration and resolve manifest paths against the config location.

    ``path`` may name a YAML file, which must exist, or a directory. A
    directory without a ``bundlediff.yml`` yields the defaults.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = BundleDiffConfig(**data)

    def _abs_optional(value: Path | None) -> Path | None:
        if value is None:
            return None
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.base_path = _abs_optional(cfg.base_path)
    cfg.pr_path = _abs_optional(cfg.pr_path)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Configuration file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping.")
    return data
