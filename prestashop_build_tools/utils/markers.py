"""Inject the ``index.php`` stub PrestaShop requires in every directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

import structlog

from .paths import is_within, walk_tree

log = structlog.get_logger()


def inject_markers(root: Path, template: Path, *, name: str = "index.php") -> List[Path]:
    """Copy *template* into every directory under *root* lacking *name*.

    The root directory itself is included and symlinked directories are
    followed. Existing marker files are never overwritten, and nothing is
    written through a link that leaves *root*.

    Args:
        root: Top of the staged tree.
        template: Stub file copied into each directory.
        name: Marker filename.

    Returns:
        Paths of the marker files that were created, in walk order.
    """
    created: list[Path] = []
    for dirpath, _, _ in walk_tree(root):
        target = dirpath / name
        if target.exists() or target.is_symlink():
            continue
        if not is_within(dirpath, root):
            log.warning("markers.outside-root", path=str(dirpath))
            continue
        shutil.copyfile(template, target)
        created.append(target)

    log.info("markers.injected", root=str(root), count=len(created))
    return created
