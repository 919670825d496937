from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

DEMO_ENV = {
    "SUBSCRIPTION": "00000000-0000-0000-0000-000000000000",
    "RESOURCE_GROUP": "rg-adx",
    "LOCATION": "westeurope",
    "CLUSTER_NAME_PREFIX": "demo",
    "DATABASE_NAME_PREFIX": "demo",
}

ALL_CONFIG_VARS = [
    *DEMO_ENV,
    "AZURE_SUBSCRIPTION_ID",
    "AZURE_RESOURCE_GROUP",
    "AZURE_LOCATION",
]


@pytest.fixture
def demo_env(monkeypatch):
    """Populate the process environment with a complete demo configuration."""
    for name in ALL_CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    for name, value in DEMO_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(DEMO_ENV)
