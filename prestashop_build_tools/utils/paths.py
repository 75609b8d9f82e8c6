"""Resolve packaged defaults and project-level overrides.

Search precedence for each support file (first match wins):

1. An explicit path given on the command line.
2. ``<working-dir>/<name>``, the project-local override.
3. The default shipped inside :mod:`prestashop_build_tools.resources`.

The tree helpers at the bottom are shared by every step that walks the
staged module, which may contain symlinks kept by ``rsync -a``.
"""

from __future__ import annotations

import os
from importlib.resources import as_file, files
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

import structlog

log = structlog.get_logger()

EXCLUDES_FILE = "excludes.txt"
LICENSE_FILE = "copyright.txt"
SCOPER_CONFIG_FILE = "scoper.inc.php"
INDEX_PHP_FILE = "index.php"
SCOPER_MARKER_FILE = "build-tools.txt"


def resource_path(name: str) -> Path:
    """Return a filesystem path to the packaged resource *name*."""
    with as_file(files("prestashop_build_tools.resources") / name) as p:
        return Path(p)


def resolve_support_file(
    explicit: Optional[Path],
    working_dir: Path,
    name: str,
) -> Path:
    """Return the support file to use for *name*.

    Args:
        explicit: Path supplied by the caller, used verbatim when given.
        working_dir: Module working directory searched for an override.
        name: Plain filename, e.g. ``"excludes.txt"``.

    Returns:
        The resolved path. Existence of an *explicit* path is not checked here
        so the pipeline can report it with a proper configuration error.
    """
    if explicit is not None:
        return Path(explicit).expanduser().resolve()

    override = working_dir / name
    if override.is_file():
        log.debug("support-file.override", name=name, path=str(override))
        return override.resolve()
    return resource_path(name)


def is_within(path: Path, root: Path) -> bool:
    """Return ``True`` when *path* resolves to a location below *root*."""
    real = os.path.realpath(path)
    top = os.path.realpath(root)
    return real == top or real.startswith(top + os.sep)


def is_dangling(path: Path) -> bool:
    return path.is_symlink() and not path.exists()


def walk_tree(root: Path) -> Iterator[Tuple[Path, List[str], List[str]]]:
    """Walk *root* top-down like :func:`os.walk`, following directory symlinks.

    A directory whose real path is already one of its own ancestors is a
    cycle: it is logged and not descended into. Names are yielded sorted;
    callers may prune ``dirnames`` in place.
    """
    ancestors: Dict[str, FrozenSet[str]] = {}
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        chain = ancestors.pop(dirpath, frozenset())
        if real in chain:
            log.warning("walk.symlink-cycle", path=dirpath)
            dirnames[:] = []
            continue
        dirnames.sort()
        filenames.sort()
        yield Path(dirpath), dirnames, filenames
        chain = chain | {real}
        for d in dirnames:
            ancestors[os.path.join(dirpath, d)] = chain
