import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from bundlediff.manifests import Manifest, ManifestOutput, load_manifest


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_manifest_reads_esbuild_keys(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "meta.json",
        {
            "inputs": {"src/index.ts": {"bytes": 10, "imports": []}},
            "outputs": {
                "dist/index.js": {
                    "bytes": 1200,
                    "entryPoint": "src/index.ts",
                    "cssBundle": "dist/index.css",
                    "imports": [],
                    "exports": [],
                    "inputs": {},
                },
                "dist/index.css": {"bytes": 300, "inputs": {}},
            },
        },
    )

    manifest = load_manifest(path)

    js = manifest.outputs["dist/index.js"]
    assert js.bytes == 1200
    assert js.entry_point == "src/index.ts"
    assert js.css_bundle == "dist/index.css"
    assert manifest.outputs["dist/index.css"].entry_point is None


def test_missing_outputs_means_empty_manifest(tmp_path: Path) -> None:
    manifest = load_manifest(_write(tmp_path / "meta.json", {"inputs": {}}))
    assert manifest.outputs == {}


def test_missing_file_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "absent.json")


def test_malformed_json_propagates(tmp_path: Path) -> None:
    path = tmp_path / "meta.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_manifest(path)


def test_negative_sizes_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate({"outputs": {"dist/a.js": {"bytes": -1}}})


def test_output_accepts_python_field_names() -> None:
    output = ManifestOutput(bytes=5, entry_point="src/a.ts")
    assert output.entry_point == "src/a.ts"
    assert output.css_bundle is None
