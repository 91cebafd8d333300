"""
Key lookup over received value sets.

Received values may be a mapping, a sequence of (key, value) pairs, or a
struct-like object whose attributes are the keys. Lookup is explicit about
absence: it returns Found(value) or MISSING, never raises.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Mapping, Union


@dataclass(frozen=True)
class Found:
    value: Any


class _Missing:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()

Lookup = Union[Found, _Missing]


def _is_pair_list(received: Any) -> bool:
    if not isinstance(received, (list, tuple)):
        return False
    return all(isinstance(item, (list, tuple)) and len(item) == 2 for item in received)


def is_addressable(value: Any) -> bool:
    """True if keys can be looked up in value (mapping, pair list or struct)."""
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return False
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (list, tuple)):
        return _is_pair_list(value)
    return hasattr(value, "__dict__") or hasattr(value, "__slots__")


def lookup(received: Any, key: Hashable) -> Lookup:
    """Look up key in a received value set."""
    if isinstance(received, Mapping):
        if key in received:
            return Found(received[key])
        return MISSING

    if isinstance(received, (list, tuple)):
        # Association list: first matching pair wins
        for item in received:
            if isinstance(item, (list, tuple)) and len(item) == 2 and item[0] == key:
                return Found(item[1])
        return MISSING

    if received is None or not isinstance(key, str):
        return MISSING

    if is_addressable(received) and hasattr(received, key):
        return Found(getattr(received, key))
    return MISSING


def get_value(received: Any, key: Hashable, default: Any = None) -> Any:
    """Value under key, or default when missing."""
    found = lookup(received, key)
    if isinstance(found, Found):
        return found.value
    return default


def is_absent(received: Any, key: Hashable) -> bool:
    """Missing or explicitly None."""
    return get_value(received, key) is None
