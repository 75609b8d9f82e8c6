"""Test helpers for prestashop_build_tools modules."""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

from prestashop_build_tools.utils.errors import ToolError


def write_manifest(root: Path, extra: dict | None = None) -> Path:
    """Write a ``composer.json`` carrying *extra* under ``prestashop-build-tools``."""
    doc = {"name": "acme/mymodule", "type": "prestashop-module"}
    if extra is not None:
        doc["extra"] = {"prestashop-build-tools": extra}
    path = root / "composer.json"
    path.write_text(json.dumps(doc))
    return path


def make_module(root: Path) -> Path:
    """Create a small module source tree under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    write_manifest(root, {"name": "mymodule", "prefix": "Acme\\Vendor"})
    (root / "mymodule.php").write_text("<?php\n\nclass MyModule extends Module\n{\n}\n")
    (root / "src" / "Controller").mkdir(parents=True)
    (root / "src" / "Controller" / "Admin.php").write_text("<?php\nnamespace Acme;\n")
    (root / "views" / "templates").mkdir(parents=True)
    (root / "views" / "templates" / "hook.tpl").write_text("<div>{$foo}</div>\n")
    (root / "views" / "js").mkdir(parents=True)
    (root / "views" / "js" / "front.js").write_text("console.log(1);\n")
    (root / "views" / "index.php").write_text("<?php // custom\n")
    (root / "vendor" / "acme" / "lib").mkdir(parents=True)
    (root / "vendor" / "acme" / "lib" / "Lib.php").write_text("<?php\nnamespace Lib;\n")
    (root / "tests").mkdir()
    (root / "tests" / "FooTest.php").write_text("<?php\n")
    (root / "node_modules" / "x").mkdir(parents=True)
    (root / "node_modules" / "x" / "x.js").write_text("x\n")
    return root


def _fake_rsync(cmd: list[str]) -> None:
    """Copy source to destination honouring plain name-based exclusions."""
    exclude_from = next(a for a in cmd if a.startswith("--exclude-from="))
    patterns = [
        line.strip().strip("/")
        for line in Path(exclude_from.split("=", 1)[1]).read_text().splitlines()
        if line.strip()
    ]
    patterns += [a.split("=", 1)[1].strip("/") for a in cmd if a.startswith("--exclude=")]
    src, dst = Path(cmd[-2]), Path(cmd[-1])
    shutil.copytree(src, dst, dirs_exist_ok=True, ignore=shutil.ignore_patterns(*patterns))


def _fake_scoper(cmd: list[str], prefix_marker: str) -> None:
    """Copy every ``vendor/package`` into the output dir with a marker line."""
    opts = dict(a[2:].split("=", 1) for a in cmd if a.startswith("--") and "=" in a)
    vendor, out = Path(opts["working-dir"]), Path(opts["output-dir"])
    out.mkdir(parents=True, exist_ok=True)
    for pkg_vendor in vendor.iterdir():
        if not pkg_vendor.is_dir():
            continue
        for pkg in pkg_vendor.iterdir():
            if not pkg.is_dir():
                continue
            target = out / pkg.relative_to(vendor)
            shutil.copytree(pkg, target)
            for php in target.rglob("*.php"):
                php.write_text(
                    php.read_text().replace(
                        "namespace ", f"namespace {opts['prefix']}\\", 1
                    )
                    + f"// {prefix_marker}\n"
                )
    (out / "build-tools.txt").touch()


def fake_run_factory(calls: list[list[str]], *, fail: str | None = None, stderr: str = ""):
    """Create a fake runner recording commands and emulating external tools.

    Args:
        calls: List receiving every command vector.
        fail: Program name whose invocation raises :class:`ToolError`.
        stderr: Error output attached to the failure.
    """

    def _fake_run(cmd, *, cwd=None, env=None, capture=True):
        cmd = [str(c) for c in cmd]
        calls.append(cmd)
        prog = cmd[0]
        if prog == fail:
            raise ToolError(cmd, 1, stderr)
        if prog == "rsync":
            _fake_rsync(cmd)
        elif prog == "php-scoper":
            _fake_scoper(cmd, "prefixed")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    return _fake_run
