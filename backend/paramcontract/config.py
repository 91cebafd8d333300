"""
Runtime configuration for contract enforcement.

Values come from the environment (a local .env file is loaded on import).
Every getter reads the environment at call time so tests and long-running
processes can flip settings without re-importing.

Variables:
    CONTRACT_MODE              warn | strict (default: warn)
    CONTRACT_STRICT_ENDPOINTS  comma-separated contract names forced strict in production
    ENV / FLASK_ENV / APP_ENV  deployment environment name
    CONTRACT_MAX_DEPTH         max nested `inner` descent per pass (default: 32)
    CONTRACT_MISSING_INNER     report | fatal (default: report)
"""

import logging
import os
from enum import Enum
from typing import List

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger('paramcontract.config')

DEFAULT_MAX_DEPTH = 32

DEFAULT_STRICT_ENDPOINTS: List[str] = []


class MissingInnerPolicy(Enum):
    """What to do when a declared inner key is absent from a nested value."""
    REPORT = "report"  # Emit an Invalid outcome for the inner key
    FATAL = "fatal"    # Raise MalformedNestedLookup


def is_production_env() -> bool:
    """Detect production environment for contract enforcement."""
    env = (
        os.environ.get("ENV")
        or os.environ.get("FLASK_ENV")
        or os.environ.get("APP_ENV")
        or ""
    ).lower()
    return env in {"prod", "production"}


def get_strict_endpoints() -> List[str]:
    """Get contract names that must be strict in production."""
    raw = os.environ.get("CONTRACT_STRICT_ENDPOINTS")
    if raw:
        return [e.strip() for e in raw.split(",") if e.strip()]
    return list(DEFAULT_STRICT_ENDPOINTS)


def get_mode_name() -> str:
    return os.environ.get('CONTRACT_MODE', 'warn').lower()


def get_max_depth() -> int:
    raw = os.environ.get('CONTRACT_MAX_DEPTH')
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer CONTRACT_MAX_DEPTH={raw!r}")
        return DEFAULT_MAX_DEPTH
    return depth if depth > 0 else DEFAULT_MAX_DEPTH


def get_missing_inner_policy() -> MissingInnerPolicy:
    raw = os.environ.get('CONTRACT_MISSING_INNER', 'report').lower()
    try:
        return MissingInnerPolicy(raw)
    except ValueError:
        logger.warning(f"Unknown CONTRACT_MISSING_INNER={raw!r}, using 'report'")
        return MissingInnerPolicy.REPORT
