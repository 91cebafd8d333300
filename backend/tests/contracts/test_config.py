"""
Environment-driven configuration tests.
"""

from paramcontract.config import (
    DEFAULT_MAX_DEPTH,
    MissingInnerPolicy,
    get_max_depth,
    get_missing_inner_policy,
    get_strict_endpoints,
    is_production_env,
)
from paramcontract.validate import Validator


def test_max_depth_default(monkeypatch):
    monkeypatch.delenv("CONTRACT_MAX_DEPTH", raising=False)
    assert get_max_depth() == DEFAULT_MAX_DEPTH


def test_max_depth_from_env(monkeypatch):
    monkeypatch.setenv("CONTRACT_MAX_DEPTH", "5")
    assert get_max_depth() == 5
    assert Validator().max_depth == 5


def test_max_depth_invalid_falls_back(monkeypatch):
    monkeypatch.setenv("CONTRACT_MAX_DEPTH", "deep")
    assert get_max_depth() == DEFAULT_MAX_DEPTH

    monkeypatch.setenv("CONTRACT_MAX_DEPTH", "0")
    assert get_max_depth() == DEFAULT_MAX_DEPTH


def test_missing_inner_policy(monkeypatch):
    monkeypatch.delenv("CONTRACT_MISSING_INNER", raising=False)
    assert get_missing_inner_policy() is MissingInnerPolicy.REPORT

    monkeypatch.setenv("CONTRACT_MISSING_INNER", "FATAL")
    assert get_missing_inner_policy() is MissingInnerPolicy.FATAL

    monkeypatch.setenv("CONTRACT_MISSING_INNER", "explode")
    assert get_missing_inner_policy() is MissingInnerPolicy.REPORT


def test_production_detection(monkeypatch):
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.delenv("FLASK_ENV", raising=False)
    monkeypatch.setenv("APP_ENV", "prod")
    assert is_production_env()

    monkeypatch.setenv("APP_ENV", "staging")
    assert not is_production_env()


def test_strict_endpoints(monkeypatch):
    monkeypatch.setenv("CONTRACT_STRICT_ENDPOINTS", "a, b,,c")
    assert get_strict_endpoints() == ["a", "b", "c"]

    monkeypatch.delenv("CONTRACT_STRICT_ENDPOINTS")
    assert get_strict_endpoints() == []
