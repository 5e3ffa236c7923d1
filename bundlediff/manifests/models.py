"""Pydantic models describing esbuild metafile structures."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ManifestOutput(BaseModel):
    """A single generated file listed under ``outputs``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    bytes: int = Field(ge=0)
    entry_point: Optional[str] = Field(default=None, alias="entryPoint")
    css_bundle: Optional[str] = Field(
        default=None,
        alias="cssBundle",
        description="Output path of the stylesheet bundle emitted alongside this entrypoint.",
    )


class Manifest(BaseModel):
    """Build metadata mapping each output path to its size information."""

    model_config = ConfigDict(extra="ignore")

    outputs: dict[str, ManifestOutput] = Field(default_factory=dict)

    def get(self, path: str) -> Optional[ManifestOutput]:
        return self.outputs.get(path)
