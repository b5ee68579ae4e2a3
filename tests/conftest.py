import sys
from pathlib import Path

import pytest


def _add_root_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_add_root_to_path()

from bundleguard import config as config_module  # noqa: E402
from bundleguard.config import DEFAULT_CONFIG, Config  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the developer's config.json and environment out of every test."""
    for key in DEFAULT_CONFIG:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_FILE_PATH", tmp_path / "config.json")
    monkeypatch.setattr(Config, "values", {})
    monkeypatch.setattr(Config, "_loaded", False)
    return tmp_path / "config.json"
