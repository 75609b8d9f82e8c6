"""
Configure a freshly cloned module template.

The scaffolder asks for the module metadata field by field, each answer
being re-asked until its validator accepts it, then replaces the
``___TOKEN___`` placeholders of the template, renames ``main.php`` to
``<name>.php`` and lets Composer resolve the dependencies.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import click
import structlog

from ..config.manifest import Manifest
from ..tools import ComposerConfig, ComposerTool
from ..tools.base import Runner
from ..tools.composer import UPDATE
from ..utils import validators as v
from ..utils.errors import ConfigurationError
from ..utils.tokens import collect_targets, rewrite_file
from .types import ScaffoldResult

log = structlog.get_logger()

#: Template file renamed to ``<NAME>.php`` once configured.
ENTRY_FILE = "main.php"

#: Well-known template files that always go through substitution.
TEMPLATE_FILES: tuple[str, ...] = (
    ENTRY_FILE,
    "composer.json",
    "config.xml",
    "README.md",
    "scoper.inc.php",
    ".php-cs-fixer.dist.php",
)

#: Directories whose files are rewritten when they contain a placeholder.
TEMPLATE_DIRS: tuple[str, ...] = (
    "src",
    "views",
    "controllers",
    "config",
    "translations",
    "upgrade",
    "tests",
)

Ask = Callable[[str, Optional[str]], str]


@dataclass(frozen=True)
class FieldSpec:
    """Prompt definition for one metadata field.

    Attributes:
        label: Prompt text.
        validator: Predicate accepting the raw answer.
        default: Callable computing the default from the answers so far.
        error: Message echoed when the validator rejects an answer.
    """

    label: str
    validator: Callable[[str], bool]
    default: Callable[[Dict[str, str]], Optional[str]]
    error: str


def _strip_tags(value: str) -> str:
    return re.sub(r"<[^>]*>", "", value)


def sanitize(value: str) -> str:
    """Drop HTML tags and every non-word ASCII character from *value*."""
    return re.sub(r"\W+", "", _strip_tags(value), flags=re.ASCII)


def _ucwords(value: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in value.split(" "))


def default_name(working_dir: Path) -> str:
    return working_dir.name.replace(" ", "").lower()


FIELDS: Dict[str, FieldSpec] = {
    "NAME": FieldSpec(
        "Module name",
        v.is_valid_name,
        lambda d: d.get("NAME"),
        "Only letters, digits, '-' and '_' are allowed.",
    ),
    "DISPLAY_NAME": FieldSpec(
        "Module display name",
        v.is_valid_display_name,
        lambda d: _ucwords(re.sub(r"[-_]", " ", d["NAME"])),
        "Digits and special characters are not allowed.",
    ),
    "VERSION": FieldSpec(
        "Module version",
        v.is_valid_version,
        lambda d: "1.0.0",
        "Version must be 0.0.1 or higher.",
    ),
    "DESCRIPTION": FieldSpec(
        "Module description",
        v.is_valid_description,
        lambda d: "",
        "",
    ),
    "AUTHOR": FieldSpec(
        "Module author",
        v.is_valid_author,
        lambda d: None,
        "Author must not be empty.",
    ),
    "CLASS_NAME": FieldSpec(
        "Module class name",
        v.is_valid_identifier,
        lambda d: sanitize(d["DISPLAY_NAME"]),
        "Not a valid PHP class name.",
    ),
    "NAMESPACE": FieldSpec(
        "Module namespace",
        v.is_valid_namespace,
        lambda d: f"{sanitize(d['AUTHOR'])}\\{d['CLASS_NAME']}",
        "Every namespace segment must be a valid PHP identifier.",
    ),
    "VENDOR_PREFIX": FieldSpec(
        "Module vendor prefix",
        v.is_valid_namespace,
        lambda d: f"{d['NAMESPACE']}\\Vendor",
        "Every namespace segment must be a valid PHP identifier.",
    ),
}


def _click_ask(label: str, default: Optional[str]) -> str:
    """Prompt once via :func:`click.prompt`; empty input yields *default*."""
    return click.prompt(
        label,
        default=default if default is not None else "",
        show_default=bool(default),
    )


def ask_field(key: str, spec: FieldSpec, data: Dict[str, str], ask: Ask) -> str:
    """Ask for *key* until the answer passes ``spec.validator``."""
    default = spec.default(data)
    while True:
        answer = ask(spec.label, default)
        if spec.validator(answer):
            return answer
        click.echo(f"[ERROR] {spec.error}", err=True)
        log.debug("scaffold.rejected", field=key, answer=answer)


def collect_metadata(
    working_dir: Path,
    *,
    ask: Ask | None = None,
    today: datetime.date | None = None,
) -> Dict[str, str]:
    """Return the complete token mapping for the template.

    Args:
        working_dir: Template checkout; its basename seeds the name default.
        ask: Callable ``(label, default) -> answer``. Defaults to a
            :func:`click.prompt` wrapper.
        today: Date used for ``YEAR``; defaults to the current date.
    """
    ask = ask or _click_ask
    year = str((today or datetime.date.today()).year)

    data: Dict[str, str] = {"NAME": default_name(working_dir)}
    for key, spec in FIELDS.items():
        data[key] = ask_field(key, spec, data, ask)

    data["NAME_UPPERCASE"] = data["NAME"].upper()
    data["YEAR"] = year
    data["NAMESPACE_ESCAPED"] = data["NAMESPACE"].replace("\\", "\\\\")
    data["VENDOR_PREFIX_ESCAPED"] = data["VENDOR_PREFIX"].replace("\\", "\\\\")
    return data


def apply_template(
    working_dir: Path,
    data: Dict[str, str],
    *,
    files: Sequence[str] = TEMPLATE_FILES,
    directories: Sequence[str] = TEMPLATE_DIRS,
) -> list[Path]:
    """Replace placeholders in every template target; return changed files."""
    rewritten = [
        p
        for p in collect_targets(working_dir, files, directories, data.keys())
        if rewrite_file(p, data)
    ]
    log.info("scaffold.rewritten", count=len(rewritten))
    return rewritten


def rename_entry_file(working_dir: Path, name: str) -> Path:
    """Rename ``main.php`` to ``<name>.php`` and return the new path."""
    src = working_dir / ENTRY_FILE
    dst = working_dir / f"{name}.php"
    if src != dst:
        src.rename(dst)
    return dst


def refresh_dependencies(working_dir: Path, runner: Runner | None = None) -> None:
    ComposerTool(ComposerConfig(working_dir=working_dir, command=UPDATE)).execute(runner)


def configure_module(
    working_dir: Path,
    *,
    ask: Ask | None = None,
    runner: Runner | None = None,
    today: datetime.date | None = None,
) -> ScaffoldResult:
    """Run the interactive scaffolder against *working_dir*.

    Raises:
        ManifestError: When ``composer.json`` is missing or invalid.
        ConfigurationError: When the template lacks ``main.php`` or the
            target ``<name>.php`` already exists.
        ToolError: When ``composer update`` fails; the message carries its
            captured error output.
    """
    working_dir = working_dir.resolve()
    Manifest(working_dir / "composer.json")
    if not (working_dir / ENTRY_FILE).is_file():
        raise ConfigurationError(f"Template entry file not found: {working_dir / ENTRY_FILE}")

    data = collect_metadata(working_dir, ask=ask, today=today)

    target = working_dir / f"{data['NAME']}.php"
    if data["NAME"] != Path(ENTRY_FILE).stem and target.exists():
        raise ConfigurationError(f"{target} already exists")

    rewritten = apply_template(working_dir, data)
    entry = rename_entry_file(working_dir, data["NAME"])
    refresh_dependencies(working_dir, runner)

    log.info("scaffold.done", module=data["NAME"], entry=str(entry))
    return ScaffoldResult(data=data, rewritten=rewritten, entry_file=entry)
