"""Pytest configuration for prestashop_build_tools tests."""

import pytest


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path_factory, monkeypatch):
    """Send JSON logs to a scratch directory instead of the module tree."""
    monkeypatch.setenv("PBT_LOG_DIR", str(tmp_path_factory.mktemp("logs")))
