from pathlib import Path
import os

from prestashop_build_tools.utils.markers import inject_markers
from prestashop_build_tools.utils.paths import resource_path


def test_every_directory_gets_one_marker(tmp_path: Path):
    """Verify every directory, root included, ends with an index.php."""
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "c").mkdir()
    template = resource_path("index.php")

    created = inject_markers(tmp_path, template)

    dirs = [tmp_path, tmp_path / "a", tmp_path / "a" / "b", tmp_path / "c"]
    assert sorted(created) == sorted(d / "index.php" for d in dirs)
    for d in dirs:
        assert (d / "index.php").read_bytes() == template.read_bytes()


def test_existing_marker_is_not_overwritten(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "index.php").write_text("<?php // mine\n")

    created = inject_markers(tmp_path, resource_path("index.php"))

    assert created == [tmp_path / "index.php"]
    assert (tmp_path / "a" / "index.php").read_text() == "<?php // mine\n"


def test_symlinked_directories_are_followed(tmp_path: Path):
    root = tmp_path / "m"
    (root / "views" / "js").mkdir(parents=True)
    os.symlink("views/js", root / "assets")

    inject_markers(root, resource_path("index.php"))

    assert (root / "views" / "js" / "index.php").is_file()
    assert (root / "assets" / "index.php").is_file()


def test_links_leaving_root_are_not_written(tmp_path: Path):
    outside = tmp_path / "shared"
    outside.mkdir()
    root = tmp_path / "m"
    root.mkdir()
    os.symlink(outside, root / "shared")

    created = inject_markers(root, resource_path("index.php"))

    assert created == [root / "index.php"]
    assert list(outside.iterdir()) == []


def test_symlink_cycle_terminates(tmp_path: Path):
    (tmp_path / "a").mkdir()
    os.symlink("..", tmp_path / "a" / "loop")

    created = inject_markers(tmp_path, resource_path("index.php"))

    assert sorted(created) == [tmp_path / "a" / "index.php", tmp_path / "index.php"]
