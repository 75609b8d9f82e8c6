from __future__ import annotations

from pathlib import Path
import json
import zipfile

import pytest
from click.testing import CliRunner

from prestashop_build_tools.cli import main as cli_main
from prestashop_build_tools.utils import process

from .utils import fake_run_factory, make_module, write_manifest


@pytest.fixture
def calls(monkeypatch) -> list[list[str]]:
    """Monkeypatch :func:`prestashop_build_tools.utils.process.run_cmd`.

    Returns:
        List receiving every command the CLI tried to run.
    """
    recorded: list[list[str]] = []
    monkeypatch.setattr(process, "run_cmd", fake_run_factory(recorded))
    return recorded


def test_help_lists_commands() -> None:
    result = CliRunner().invoke(cli_main, ["--help"])
    assert result.exit_code == 0
    for name in ("build-module", "prefix-vendor", "install"):
        assert name in result.output


def test_version_flag() -> None:
    result = CliRunner().invoke(cli_main, ["--version"])
    assert result.exit_code == 0


def test_build_module_cli(tmp_path: Path, calls) -> None:
    wd = make_module(tmp_path / "mymodule")
    out = tmp_path / "dist"

    result = CliRunner().invoke(
        cli_main, ["build-module", "-d", str(wd), "-b", str(out), "--authoritative"]
    )

    assert result.exit_code == 0, result.output
    assert "Created" in result.output
    assert [c[0] for c in calls] == ["composer", "rsync"]
    assert "--classmap-authoritative" in calls[0]
    with zipfile.ZipFile(out / "mymodule.zip") as zf:
        assert "mymodule/mymodule.php" in zf.namelist()


def test_build_module_name_override(tmp_path: Path, calls) -> None:
    wd = make_module(tmp_path / "src")

    result = CliRunner().invoke(
        cli_main, ["build-module", "-d", str(wd), "-m", "othername"]
    )

    assert result.exit_code == 0, result.output
    assert (wd / "othername.zip").is_file()


def test_build_module_without_name_fails(tmp_path: Path, calls) -> None:
    wd = tmp_path / "mymodule"
    wd.mkdir()
    write_manifest(wd, {})

    result = CliRunner().invoke(cli_main, ["build-module", "-d", str(wd)])

    assert result.exit_code == 1
    assert "module name" in result.output.lower()
    assert calls == []


def test_build_module_tool_failure_shows_stderr(tmp_path: Path, monkeypatch) -> None:
    wd = make_module(tmp_path / "mymodule")
    monkeypatch.setattr(
        process,
        "run_cmd",
        fake_run_factory([], fail="rsync", stderr="rsync: permission denied"),
    )

    result = CliRunner().invoke(cli_main, ["build-module", "-d", str(wd)])

    assert result.exit_code == 1
    assert "permission denied" in result.output
    assert not (wd / "mymodule.zip").exists()


def test_prefix_vendor_cli(tmp_path: Path, calls) -> None:
    wd = make_module(tmp_path / "mymodule")

    result = CliRunner().invoke(cli_main, ["prefix-vendor", "-d", str(wd)])

    assert result.exit_code == 0, result.output
    assert "Prefixed 1 package(s)" in result.output
    assert "acme/lib" in result.output
    assert "Acme\\Vendor" in (wd / "vendor" / "acme" / "lib" / "Lib.php").read_text()
    assert [c[0] for c in calls] == ["php-scoper", "composer"]


def test_prefix_vendor_option_overrides_manifest(tmp_path: Path, calls) -> None:
    wd = make_module(tmp_path / "mymodule")

    result = CliRunner().invoke(
        cli_main, ["prefix-vendor", "-d", str(wd), "-p", "Other\\Deps", "--no-move-vendor"]
    )

    assert result.exit_code == 0, result.output
    assert "--prefix=Other\\Deps" in calls[0]
    assert not (wd / "vendor" / "acme" / "lib").exists()
    assert (wd / "vendor-prefixed" / "acme" / "lib" / "Lib.php").exists()


def test_prefix_vendor_missing_prefix(tmp_path: Path, calls) -> None:
    wd = tmp_path / "mymodule"
    (wd / "vendor" / "acme" / "lib").mkdir(parents=True)
    write_manifest(wd, {"name": "mymodule"})

    result = CliRunner().invoke(cli_main, ["prefix-vendor", "-d", str(wd)])

    assert result.exit_code == 1
    assert "prefix" in result.output.lower()
    assert calls == []


def test_install_cli(tmp_path: Path, calls, monkeypatch) -> None:
    wd = tmp_path / "template"
    wd.mkdir()
    (wd / "main.php").write_text("<?php\nclass ___CLASS_NAME___ {}\n")
    (wd / "composer.json").write_text(
        json.dumps({"extra": {"prestashop-build-tools": {"name": "___NAME___"}}})
    )
    monkeypatch.chdir(wd)

    answers = "\n".join([
        "bad name!",   # rejected
        "shop-helper",
        "",            # display name default
        "2.0.0",
        "Helps the shop",
        "Acme",
        "", "", "",    # class name, namespace, vendor prefix defaults
    ]) + "\n"
    result = CliRunner().invoke(cli_main, ["install"], input=answers)

    assert result.exit_code == 0, result.output
    assert "[ERROR]" in result.output
    entry = wd / "shop-helper.php"
    assert entry.read_text() == "<?php\nclass ShopHelper {}\n"
    assert json.loads((wd / "composer.json").read_text())["extra"] == {
        "prestashop-build-tools": {"name": "shop-helper"}
    }
    assert calls[-1][:2] == ["composer", "update"]


def test_install_without_template(tmp_path: Path, calls, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_main, ["install"])

    assert result.exit_code == 1
    assert "composer.json" in result.output


def test_install_leaves_no_log_dir_in_template(tmp_path: Path, calls, monkeypatch) -> None:
    monkeypatch.delenv("PBT_LOG_DIR", raising=False)
    wd = tmp_path / "template"
    wd.mkdir()
    (wd / "main.php").write_text("<?php\n")
    (wd / "composer.json").write_text("{}")
    monkeypatch.chdir(wd)

    answers = "\n".join(["shop", "", "1.0.0", "", "Acme", "", "", ""]) + "\n"
    result = CliRunner().invoke(cli_main, ["install"], input=answers)

    assert result.exit_code == 0, result.output
    assert not (wd / ".pbt").exists()
    assert (wd / "shop.php").is_file()
