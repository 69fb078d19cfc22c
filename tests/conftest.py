"""Root test configuration: isolate each test from config.yaml and MDCOMPILE_* env vars"""

import pytest

from mdcompile.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove MDCOMPILE_<FIELD> env vars so settings come from defaults and overrides only."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDCOMPILE_{name.upper()}", raising=False)
