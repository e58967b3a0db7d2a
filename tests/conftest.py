"""Root test configuration: isolate tests from user config and MDSCHEMA_* env vars"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test from an empty directory with no MDSCHEMA_* variables set."""
    for name in list(os.environ):
        if name.startswith("MDSCHEMA_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
