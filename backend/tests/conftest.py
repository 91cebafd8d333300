"""
Root pytest configuration for backend tests.

Provides:
- backend/ on sys.path so `import paramcontract` works without installing
- Environment isolation for contract settings
"""

import sys
from pathlib import Path

# Add backend directory to Python path so `from paramcontract import ...` works
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest

CONTRACT_ENV_VARS = (
    "CONTRACT_MODE",
    "CONTRACT_STRICT_ENDPOINTS",
    "CONTRACT_MAX_DEPTH",
    "CONTRACT_MISSING_INNER",
    "ENV",
    "FLASK_ENV",
    "APP_ENV",
)


@pytest.fixture(autouse=True)
def contract_env(monkeypatch):
    """Start every test from default contract settings, whatever .env holds."""
    for name in CONTRACT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
