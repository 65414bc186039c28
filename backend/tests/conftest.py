"""Root conftest — shared test configuration."""

import os

import pytest

from docstore.config import Settings

# Ensure tests never inherit a real shared secret from the environment
os.environ["STORAGE_KEY"] = ""


@pytest.fixture
def data_root(tmp_path):
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def make_settings(data_root):
    """Build Settings without reading .env; keyword overrides win."""
    def _make(**overrides) -> Settings:
        values = {"data_root": data_root, "storage_key": ""}
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make
