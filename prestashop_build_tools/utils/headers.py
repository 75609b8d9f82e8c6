"""
License header stamping for staged module files.

Every recognised file gets the license text rendered as a comment in the
syntax of its type:

======================  ==========================
Extension               Comment delimiters
======================  ==========================
php, js, css, scss      ``/**`` … ``*/``
tpl (Smarty)            ``{**`` … ``*}``
html.twig               ``{#**`` … ``#}``
vue                     ``<!--**`` … ``-->``
======================  ==========================

For PHP the header goes right after the ``<?php`` opening tag; files that do
not start with it (pure templates, inline HTML) are left alone. A comment
already sitting at the top of the file is replaced when it is our own header
or mentions a copyright/license, otherwise the header is inserted above it.
The rewrite is idempotent: stamping a stamped file yields the same bytes.
Broken symlinks and links resolving outside the tree are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import structlog

from .paths import is_dangling, is_within, walk_tree

log = structlog.get_logger()

DEFAULT_EXTENSIONS: tuple[str, ...] = ("php", "js", "css", "scss", "tpl", "html.twig", "vue")
DEFAULT_EXCLUDES: tuple[str, ...] = ("vendor",)


@dataclass(frozen=True)
class CommentStyle:
    """Delimiters used to render and detect a header comment."""

    opening: str
    prefix: str
    closing: str
    pattern: re.Pattern[str]


_C_STYLE = CommentStyle("/**", " *", " */", re.compile(r"/\*.*?\*/", re.S))

COMMENT_STYLES: dict[str, CommentStyle] = {
    "php": _C_STYLE,
    "js": _C_STYLE,
    "css": _C_STYLE,
    "scss": _C_STYLE,
    "tpl": CommentStyle("{**", " *", " *}", re.compile(r"\{\*.*?\*\}", re.S)),
    "html.twig": CommentStyle("{#**", " *", " #}", re.compile(r"\{#.*?#\}", re.S)),
    "vue": CommentStyle("<!--**", " *", " * -->", re.compile(r"<!--.*?-->", re.S)),
}

_PHP_OPEN = re.compile(r"<\?php[ \t]*\r?\n")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")
_LICENSE_WORDS = re.compile(r"copyright|licen[cs]e", re.I)


def extension_of(path: Path) -> str | None:
    """Return the recognised extension key for *path* or ``None``."""
    name = path.name.lower()
    if name.endswith(".html.twig"):
        return "html.twig"
    suffix = path.suffix.lower().lstrip(".")
    return suffix if suffix in COMMENT_STYLES else None


def render_header(license_text: str, style: CommentStyle) -> str:
    """Render *license_text* as a comment block using *style*."""
    lines = [style.opening]
    for line in license_text.strip("\r\n").splitlines():
        line = line.rstrip()
        lines.append(f"{style.prefix} {line}" if line else style.prefix)
    lines.append(style.closing)
    return "\n".join(lines)


def _is_replaceable(comment: str, header: str) -> bool:
    return comment == header or bool(_LICENSE_WORDS.search(comment))


def stamp_text(content: str, ext: str, license_text: str) -> str:
    """Return *content* with its header comment rewritten.

    Args:
        content: Full file content.
        ext: Extension key from :data:`COMMENT_STYLES`.
        license_text: Raw license text (without comment delimiters).

    Returns:
        The rewritten content, or *content* unchanged for PHP files lacking
        an opening ``<?php`` tag.
    """
    style = COMMENT_STYLES[ext]
    header = render_header(license_text, style)

    prefix = ""
    rest = content
    if ext == "php":
        m = _PHP_OPEN.match(content)
        if m is None:
            return content
        prefix = "<?php\n"
        rest = content[m.end():]

    rest = _LEADING_BLANK_LINES.sub("", rest)
    existing = style.pattern.match(rest)
    if existing and _is_replaceable(existing.group(0), header):
        rest = _LEADING_BLANK_LINES.sub("", rest[existing.end():].lstrip(" \t"))

    body = f"\n\n{rest}" if rest else "\n"
    return f"{prefix}{header}{body}"


def _iter_candidates(
    root: Path, extensions: Sequence[str], excludes: Iterable[str]
) -> Iterable[Path]:
    excluded = {Path(e).as_posix().strip("/") for e in excludes}
    for dirpath, dirnames, filenames in walk_tree(root):
        rel_dir = dirpath.relative_to(root)
        dirnames[:] = [d for d in dirnames if (rel_dir / d).as_posix() not in excluded]
        for fname in filenames:
            path = dirpath / fname
            ext = extension_of(path)
            if ext is None or ext not in extensions:
                continue
            if is_dangling(path):
                log.warning("headers.skip-broken-link", path=str(path))
                continue
            if not is_within(path, root):
                log.warning("headers.skip-outside-root", path=str(path))
                continue
            yield path


def stamp_tree(
    root: Path,
    license_text: str,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
) -> List[Path]:
    """Rewrite the license header of every recognised file below *root*.

    Args:
        root: Directory to process.
        license_text: Raw license text.
        extensions: Extension keys to process.
        excludes: Directory paths relative to *root* that are skipped
            together with everything below them.

    Returns:
        Files whose content actually changed.
    """
    changed: list[Path] = []
    for path in _iter_candidates(root, extensions, excludes):
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            log.warning("headers.skip-binary", path=str(path))
            continue
        stamped = stamp_text(content, extension_of(path), license_text)
        if stamped != content:
            path.write_text(stamped, encoding="utf-8")
            changed.append(path)

    log.info("headers.stamped", root=str(root), count=len(changed))
    return changed
