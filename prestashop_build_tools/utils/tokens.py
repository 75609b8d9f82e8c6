"""Literal ``___TOKEN___`` substitution over template files."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Iterable, List, Mapping

import structlog

log = structlog.get_logger()

TOKEN_DELIMITER = "___"


def token(key: str) -> str:
    """Return the placeholder written in templates for *key*."""
    return f"{TOKEN_DELIMITER}{key}{TOKEN_DELIMITER}"


def replace_tokens(content: str, data: Mapping[str, str]) -> str:
    """Replace every known placeholder in *content* with its value.

    All placeholders are matched in a single pass, longest key first, so a
    value that itself looks like a placeholder is never expanded again.
    Replacement is literal.
    """
    if not data:
        return content
    pattern = re.compile(
        "|".join(re.escape(token(k)) for k in sorted(data, key=len, reverse=True))
    )
    width = len(TOKEN_DELIMITER)
    return pattern.sub(lambda m: str(data[m.group(0)[width:-width]]), content)


def contains_token(content: str, keys: Iterable[str]) -> bool:
    return any(token(k) in content for k in keys)


def _write_atomic(path: Path, content: str) -> None:
    """Write *content* to a sibling temp file and rename it over *path*."""
    mode = path.stat().st_mode
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def rewrite_file(path: Path, data: Mapping[str, str]) -> bool:
    """Substitute tokens in *path* in place.

    Returns:
        ``True`` when the file content changed.
    """
    with path.open(encoding="utf-8", newline="") as fh:
        content = fh.read()
    replaced = replace_tokens(content, data)
    if replaced == content:
        return False
    _write_atomic(path, replaced)
    log.debug("tokens.rewritten", path=str(path))
    return True


def collect_targets(
    root: Path,
    files: Iterable[str],
    directories: Iterable[str],
    keys: Iterable[str],
) -> List[Path]:
    """Return the files that take part in the substitution pass.

    Args:
        root: Module working directory.
        files: Well-known files relative to *root*; missing ones are skipped.
        directories: Directories relative to *root*; every text file below
            them containing at least one placeholder is selected.
        keys: Token keys used to detect placeholders.

    Returns:
        Sorted, de-duplicated list of absolute paths.
    """
    keys = list(keys)
    targets: set[Path] = set()
    for rel in files:
        p = root / rel
        if p.is_file():
            targets.add(p)

    for rel in directories:
        base = root / rel
        if not base.is_dir():
            continue
        for p in base.rglob("*"):
            if not p.is_file() or p in targets:
                continue
            try:
                content = p.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                continue
            if contains_token(content, keys):
                targets.add(p)
    return sorted(targets)
