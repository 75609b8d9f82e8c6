from pathlib import Path

from prestashop_build_tools.utils.tokens import (
    collect_targets,
    replace_tokens,
    rewrite_file,
    token,
)


def test_token_delimiters():
    assert token("NAME") == "___NAME___"


def test_replace_is_literal_and_handles_overlapping_keys():
    data = {"NAME": "mymodule", "NAMESPACE": "Acme\\My", "NAMESPACE_ESCAPED": "Acme\\\\My"}
    src = "___NAME___ ___NAMESPACE___ ___NAMESPACE_ESCAPED___ ___UNKNOWN___ $1 \\1"
    assert replace_tokens(src, data) == "mymodule Acme\\My Acme\\\\My ___UNKNOWN___ $1 \\1"


def test_rewrite_file_in_place(tmp_path: Path):
    f = tmp_path / "composer.json"
    f.write_text('{"name": "___NAME___"}\r\n')
    assert rewrite_file(f, {"NAME": "mod"}) is True
    assert f.read_bytes() == b'{"name": "mod"}\r\n'
    assert rewrite_file(f, {"NAME": "mod"}) is False
    assert [p.name for p in tmp_path.iterdir()] == ["composer.json"]


def test_collect_targets(tmp_path: Path):
    (tmp_path / "main.php").write_text("<?php")
    (tmp_path / "src" / "Sub").mkdir(parents=True)
    (tmp_path / "src" / "A.php").write_text("namespace ___NAMESPACE___;")
    (tmp_path / "src" / "Sub" / "B.php").write_text("no tokens")
    (tmp_path / "src" / "logo.png").write_bytes(b"\x89PNG\xff\xfe")
    (tmp_path / "other").mkdir()
    (tmp_path / "other" / "C.php").write_text("___NAME___")

    targets = collect_targets(
        tmp_path,
        files=["main.php", "missing.json"],
        directories=["src", "nope"],
        keys=["NAME", "NAMESPACE"],
    )

    assert targets == sorted([tmp_path / "main.php", tmp_path / "src" / "A.php"])


def test_values_are_never_expanded_again():
    data = {"DESCRIPTION": "since ___YEAR___", "YEAR": "2024", "NAME": "___NAME___"}
    src = "___DESCRIPTION___ (___YEAR___) ___NAME___"
    assert replace_tokens(src, data) == "since ___YEAR___ (2024) ___NAME___"
