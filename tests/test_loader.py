from pathlib import Path

import pytest

from prestashop_build_tools.config import load_build_config, load_prefix_config
from prestashop_build_tools.utils.errors import ConfigurationError, ManifestError
from prestashop_build_tools.utils.paths import resource_path

from .utils import write_manifest

EXTRA = {"name": "mymodule", "prefix": "Acme\\Vendor"}


def _project(tmp_path: Path, extra=EXTRA) -> Path:
    wd = tmp_path / "module"
    (wd / "vendor").mkdir(parents=True)
    write_manifest(wd, extra)
    return wd


def test_module_name_from_manifest(tmp_path: Path) -> None:
    """Verify the module name falls back to the manifest extra section."""
    wd = _project(tmp_path)
    cfg = load_build_config(working_dir=wd)
    assert cfg.module_name == "mymodule"
    assert cfg.artifact_name == "mymodule.zip"
    assert cfg.build_dir == wd / ".pbt" / "mymodule"
    assert cfg.output_dir == wd


def test_prefix_from_manifest(tmp_path: Path) -> None:
    """Verify the prefix falls back to the manifest extra section."""
    wd = _project(tmp_path)
    cfg = load_prefix_config(working_dir=wd)
    assert cfg.prefix == "Acme\\Vendor"
    assert cfg.vendor_dir == wd / "vendor"
    assert cfg.vendor_prefixed_dir == wd / "vendor-prefixed"
    assert cfg.move_vendor is True


def test_explicit_flags_win(tmp_path: Path) -> None:
    wd = _project(tmp_path)
    assert load_build_config(working_dir=wd, module_name="other").module_name == "other"
    assert load_prefix_config(working_dir=wd, prefix="X\\Y").prefix == "X\\Y"


def test_explicit_flags_do_not_need_manifest(tmp_path: Path) -> None:
    wd = tmp_path / "bare"
    (wd / "vendor").mkdir(parents=True)
    assert load_build_config(working_dir=wd, module_name="bare").module_name == "bare"


def test_missing_manifest_raises(tmp_path: Path) -> None:
    wd = tmp_path / "bare"
    wd.mkdir()
    with pytest.raises(ManifestError):
        load_build_config(working_dir=wd)


def test_missing_name_in_manifest_raises(tmp_path: Path) -> None:
    wd = _project(tmp_path, extra={})
    with pytest.raises(ConfigurationError, match="No module name"):
        load_build_config(working_dir=wd)


def test_missing_working_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Working directory"):
        load_build_config(working_dir=tmp_path / "missing", module_name="x")


def test_packaged_defaults_used(tmp_path: Path) -> None:
    wd = _project(tmp_path)
    cfg = load_build_config(working_dir=wd)
    assert cfg.exclude_file == resource_path("excludes.txt")
    assert cfg.license_file == resource_path("copyright.txt")
    assert load_prefix_config(working_dir=wd).config_file == resource_path("scoper.inc.php")


def test_project_overrides_used(tmp_path: Path) -> None:
    """Verify support files in the working directory override the defaults."""
    wd = _project(tmp_path)
    (wd / "excludes.txt").write_text("/tests\n")
    (wd / "copyright.txt").write_text("Mine\n")
    cfg = load_build_config(working_dir=wd)
    assert cfg.exclude_file == (wd / "excludes.txt").resolve()
    assert cfg.license_file == (wd / "copyright.txt").resolve()


def test_missing_explicit_exclude_file_raises(tmp_path: Path) -> None:
    wd = _project(tmp_path)
    with pytest.raises(ConfigurationError, match="Exclude file"):
        load_build_config(working_dir=wd, exclude_file=tmp_path / "nope.txt")


def test_missing_vendor_dir_raises(tmp_path: Path) -> None:
    wd = _project(tmp_path)
    with pytest.raises(ConfigurationError, match="Vendor directory"):
        load_prefix_config(working_dir=wd, vendor_dir=Path("libs"))


def test_module_name_with_separator_rejected(tmp_path: Path) -> None:
    wd = _project(tmp_path)
    with pytest.raises(ConfigurationError):
        load_build_config(working_dir=wd, module_name="../evil")


def test_config_is_frozen(tmp_path: Path) -> None:
    cfg = load_build_config(working_dir=_project(tmp_path))
    with pytest.raises(Exception):
        cfg.module_name = "changed"
