from pathlib import Path

import pytest
from pydantic import ValidationError

from bundlediff.config import BundleDiffConfig, load_config
from bundlediff.reporting import COMMENT_MARKER


def test_directory_without_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.base_path is None
    assert config.pr_path is None
    assert config.marker == COMMENT_MARKER
    assert config.github.token is None


def test_manifest_paths_resolve_relative_to_config(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    config_file = project / "bundlediff.yml"
    config_file.write_text(
        "base_path: meta/base.json\n"
        "pr_path: /abs/pr.json\n"
        "title: Sizes\n"
        "github:\n"
        "  repository: acme/web\n"
        "  pull_request: 42\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.base_path == (project / "meta" / "base.json").resolve()
    assert config.pr_path == Path("/abs/pr.json")
    assert config.title == "Sizes"
    assert config.github.repository == "acme/web"
    assert config.github.pull_request == 42


def test_directory_argument_reads_config_file(tmp_path: Path) -> None:
    (tmp_path / "bundlediff.yml").write_text("pr_path: pr.json\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.pr_path == (tmp_path / "pr.json").resolve()


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bundlediff.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_blank_token_is_treated_as_unset() -> None:
    config = BundleDiffConfig.model_validate({"github": {"token": "   "}})
    assert config.github.token is None


def test_pull_request_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        BundleDiffConfig.model_validate({"github": {"pull_request": 0}})


def test_invalid_yaml_is_reported_as_value_error(tmp_path: Path) -> None:
    path = tmp_path / "bundlediff.yml"
    path.write_text("github: {repository: acme/web\n", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_config(path)
