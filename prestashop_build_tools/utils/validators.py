"""Field validators for the interactive module scaffolder.

Each validator takes the raw answer and returns ``True`` when it is
acceptable. They never raise; the prompt loop simply asks again.
"""

from __future__ import annotations

import re

_NAME = re.compile(r"[a-zA-Z0-9_-]+")
_DISPLAY_NAME = re.compile(r'[^\x00-\x1f0-9!<>,;?=+()@#"°{}_$%:¤|]*')
# A PHP label: ASCII letter/underscore or any non-ASCII char, then the same
# set plus digits.
_IDENTIFIER = re.compile(r"[a-zA-Z_\x80-\U0010ffff][a-zA-Z0-9_\x80-\U0010ffff]*")
_VERSION = re.compile(r"v?(\d+(?:\.\d+)*)(.*)")

MIN_VERSION = (0, 0, 1)


def is_valid_name(value: str) -> bool:
    return bool(_NAME.fullmatch(value or ""))


def is_valid_display_name(value: str) -> bool:
    return bool(_DISPLAY_NAME.fullmatch(value or ""))


def version_tuple(value: str) -> tuple[tuple[int, ...], str] | None:
    """Split *value* into its numeric release and trailing suffix.

    Returns ``None`` when *value* does not start with a dotted number.
    """
    m = _VERSION.fullmatch(value or "")
    if m is None:
        return None
    nums = tuple(int(n) for n in m.group(1).split("."))
    nums = nums + (0,) * (3 - len(nums))
    return nums, m.group(2)


def is_valid_version(value: str, minimum: tuple[int, ...] = MIN_VERSION) -> bool:
    """Return ``True`` for a non-empty version not lower than *minimum*.

    A pre-release suffix (``1.0.0-beta``) sorts below its release, so
    ``0.0.1-alpha`` is rejected while ``0.1.0-alpha`` is accepted.
    """
    parsed = version_tuple(value)
    if parsed is None:
        return False
    nums, suffix = parsed
    if nums != minimum:
        return nums > minimum
    return not suffix or suffix.startswith("+")


def is_valid_description(value: str) -> bool:
    return True


def is_valid_author(value: str) -> bool:
    return bool(value and value.strip())


def is_valid_identifier(value: str) -> bool:
    return bool(_IDENTIFIER.fullmatch(value or ""))


def is_valid_namespace(value: str) -> bool:
    """Return ``True`` when every ``\\``-separated segment is an identifier."""
    if not value:
        return False
    return all(is_valid_identifier(seg) for seg in value.split("\\"))
