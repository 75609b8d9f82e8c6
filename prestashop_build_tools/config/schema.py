"""
Pydantic models describing one invocation of each pipeline.

Both models are frozen: they are built once from CLI flags merged with
manifest defaults and never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.logging import STAGING_DIRNAME


class BuildConfig(BaseModel):
    """Inputs of the artifact builder."""

    model_config = ConfigDict(frozen=True)

    working_dir: Path
    output_dir: Path
    module_name: str = Field(..., min_length=1)
    exclude_file: Path
    license_file: Path
    authoritative: bool = False

    @field_validator("module_name")
    @classmethod
    def _plain_name(cls, v: str) -> str:
        """Reject names that would escape the staging directory."""
        if "/" in v or "\\" in v or v in {".", ".."}:
            raise ValueError(f"invalid module name: {v!r}")
        return v

    @property
    def tmp_dir(self) -> Path:
        return self.working_dir / STAGING_DIRNAME

    @property
    def build_dir(self) -> Path:
        return self.tmp_dir / self.module_name

    @property
    def artifact_name(self) -> str:
        return f"{self.module_name}.zip"


class PrefixConfig(BaseModel):
    """Inputs of the vendor prefixer."""

    model_config = ConfigDict(frozen=True)

    working_dir: Path
    vendor_dir: Path
    vendor_prefixed_dir: Path
    config_file: Path
    prefix: str = Field(..., min_length=1)
    move_vendor: bool = True

    @field_validator("prefix")
    @classmethod
    def _strip_separators(cls, v: str) -> str:
        """Drop leading/trailing backslashes; PHP-Scoper adds its own."""
        v = v.strip().strip("\\")
        if not v:
            raise ValueError("prefix must not be empty")
        return v
