"""
Pytest fixtures for contract validation tests.
"""

import pytest
from flask import Flask

from paramcontract import CONTRACTS, build_contract


@pytest.fixture
def contract():
    """One required string param and one optional integer restricted to 1..3."""
    return build_contract([
        {"name": "param", "checks": {"required": True, "type": "string"}},
        {"name": "param2", "checks": {"type": "integer", "in": [1, 2, 3]}},
    ])


@pytest.fixture
def map_contract():
    return build_contract([
        {
            "name": "map_param",
            "checks": {
                "type": "map",
                "inner": {
                    "a": {"type": "integer", "required": True},
                    "b": {"type": "string", "length": {"min": 7}},
                },
            },
        },
    ])


@pytest.fixture
def list_contract():
    """A list whose elements are maps with their own inner contract."""
    return build_contract([
        {
            "name": "list_param",
            "checks": {
                "type": "list",
                "inner": {
                    "name": "map_param",
                    "checks": {
                        "type": "map",
                        "inner": {
                            "a": {"type": "integer", "required": True},
                            "b": {"type": "string", "required": True, "length": {"min": 7}},
                        },
                    },
                },
            },
        },
    ])


@pytest.fixture
def clean_registry():
    """Snapshot and restore the named contract registry."""
    previous = dict(CONTRACTS)
    CONTRACTS.clear()
    try:
        yield CONTRACTS
    finally:
        CONTRACTS.clear()
        CONTRACTS.update(previous)


@pytest.fixture
def app():
    """Bare Flask application for decorator tests."""
    app = Flask(__name__)
    app.config['TESTING'] = True
    return app
