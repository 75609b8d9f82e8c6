"""
Immutable result objects returned by the pipelines.

Every class inherits from :class:`pydantic.BaseModel` with ``frozen=True`` so
callers (the CLI, tests) cannot mutate a result once a pipeline returned it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel


class BuildResult(BaseModel, frozen=True):
    """Outcome of :func:`prestashop_build_tools.pipelines.build.build_module`.

    Attributes
    ----------
    artifact
        Final location of ``<module>.zip``.
    build_dir
        Staged module tree the archive was created from.
    marker_files
        ``index.php`` files injected into the staged tree.
    stamped_files
        Files whose license header was rewritten.
    """

    artifact: Path
    build_dir: Path
    marker_files: List[Path] = []
    stamped_files: List[Path] = []


class PrefixResult(BaseModel, frozen=True):
    """Outcome of :func:`prestashop_build_tools.pipelines.prefix.prefix_vendor`.

    Attributes
    ----------
    packages
        ``vendor/package`` paths relative to the vendor directory.
    vendor_dir
        Vendor directory that was processed.
    moved
        Whether the prefixed copies were swapped into ``vendor_dir``.
    """

    packages: List[Path]
    vendor_dir: Path
    moved: bool = True


class ScaffoldResult(BaseModel, frozen=True):
    """Outcome of :func:`prestashop_build_tools.pipelines.scaffold.configure_module`."""

    data: Dict[str, str]
    rewritten: List[Path] = []
    entry_file: Path
