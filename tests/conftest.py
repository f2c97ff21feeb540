"""
Shared test fixtures for tabfit tests.
Keeps every test away from the real ~/.tabfit config and .env files.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Ensure every test starts with a clean config state."""
    from tabfit import config

    monkeypatch.setattr(config, "_ENV_PATHS", [])
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "missing-config.toml")
    for name in ("TABFIT_MODE", "TABFIT_NULL_VALUE", "TABFIT_WIDTH"):
        monkeypatch.delenv(name, raising=False)
