"""
Stock primitive checks.

Each check has the signature:

    check(received, field_name, check_spec) -> True | {field_name: message} | [ ... ]

`received` is the whole received value set (a mapping, pair list or struct),
so checks look their value up by field name. Checks other than `required`
and `allow_nil` pass when the value is absent or None; absence is reported
by `required` alone.

PRIMITIVE_CHECKS maps check names to functions and is the default set the
validator's registry is built from. Callers may supply their own mapping.
"""

import dataclasses
import logging
import re
from collections.abc import Mapping as MappingABC
from typing import Any, Callable, Dict, Hashable, List, Mapping, Union

from .received import Found, get_value, lookup

logger = logging.getLogger('paramcontract.checks')

CheckResult = Union[bool, Dict[Hashable, str], List[Any]]
CheckFn = Callable[[Any, Hashable, Any], CheckResult]

PRIMITIVE_CHECKS: Dict[str, CheckFn] = {}


def primitive_check(*names: str):
    """Register a function under one or more check names."""
    def decorator(fn: CheckFn) -> CheckFn:
        for name in names:
            PRIMITIVE_CHECKS[name] = fn
        return fn
    return decorator


def _error(field_name: Hashable, message: str) -> Dict[Hashable, str]:
    return {field_name: message}


# =============================================================================
# PRESENCE
# =============================================================================

@primitive_check("required")
def check_required(received: Any, field_name: Hashable, required: Any) -> CheckResult:
    if not required:
        return True
    if get_value(received, field_name) is None:
        return _error(field_name, "is required")
    return True


@primitive_check("allow_nil")
def check_allow_nil(received: Any, field_name: Hashable, allow_nil: Any) -> CheckResult:
    if allow_nil:
        return True
    found = lookup(received, field_name)
    if isinstance(found, Found) and found.value is None:
        return _error(field_name, "doesn't allow nil")
    return True


# =============================================================================
# TYPE
# =============================================================================

def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_map(value: Any) -> bool:
    # Dataclass instances are struct-shaped maps
    if isinstance(value, MappingABC):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


TYPE_PREDICATES: Dict[str, Callable[[Any], bool]] = {
    "integer": _is_integer,
    "float": lambda v: isinstance(v, float),
    "number": _is_number,
    "string": lambda v: isinstance(v, str),
    "boolean": lambda v: isinstance(v, bool),
    "map": _is_map,
    "list": lambda v: isinstance(v, list),
    "tuple": lambda v: isinstance(v, tuple),
    "function": callable,
}


@primitive_check("type")
def check_type(received: Any, field_name: Hashable, expected: Any) -> CheckResult:
    value = get_value(received, field_name)
    if value is None:
        return True

    if isinstance(expected, type):
        if expected is int:
            ok = _is_integer(value)
        else:
            ok = isinstance(value, expected)
    else:
        predicate = TYPE_PREDICATES.get(str(expected).lower())
        if predicate is None:
            logger.warning(f"Unknown type {expected!r} declared for '{field_name}', skipping type check")
            return True
        ok = predicate(value)

    return True if ok else _error(field_name, "has wrong type")


@primitive_check("struct")
def check_struct(received: Any, field_name: Hashable, struct: type) -> CheckResult:
    value = get_value(received, field_name)
    if value is None or isinstance(value, struct):
        return True
    return _error(field_name, "is not expected struct")


# =============================================================================
# VALUE
# =============================================================================

NUMERICALITY_RULES = (
    # (option names, predicate, message template)
    (("equal_to", "eq"), lambda v, x: v == x, "must be equal to {}"),
    (("greater_than", "gt"), lambda v, x: v > x, "must be greater than {}"),
    (("greater_than_or_equal_to", "gte", "min"), lambda v, x: v >= x,
     "must be greater than or equal to {}"),
    (("less_than", "lt"), lambda v, x: v < x, "must be less than {}"),
    (("less_than_or_equal_to", "lte", "max"), lambda v, x: v <= x,
     "must be less than or equal to {}"),
)


@primitive_check("numericality")
def check_numericality(received: Any, field_name: Hashable, rules: Mapping) -> CheckResult:
    value = get_value(received, field_name)
    if value is None:
        return True
    if not _is_number(value):
        return _error(field_name, "must be a number")

    results: List[Any] = []
    for option_names, predicate, template in NUMERICALITY_RULES:
        for option in option_names:
            if option in rules:
                bound = rules[option]
                results.append(True if predicate(value, bound) else _error(field_name, template.format(bound)))
    return results or True


@primitive_check("in")
def check_in(received: Any, field_name: Hashable, allowed: Any) -> CheckResult:
    value = get_value(received, field_name)
    if value is None or value in allowed:
        return True
    return _error(field_name, f"must be one of {list(allowed)!r}")


@primitive_check("not_in")
def check_not_in(received: Any, field_name: Hashable, forbidden: Any) -> CheckResult:
    value = get_value(received, field_name)
    if value is None or value not in forbidden:
        return True
    return _error(field_name, f"must not be included in {list(forbidden)!r}")


@primitive_check("equals", "exactly")
def check_equals(received: Any, field_name: Hashable, expected: Any) -> CheckResult:
    value = get_value(received, field_name)
    if value is None or value == expected:
        return True
    return _error(field_name, f"must be equal to {expected!r}")


@primitive_check("format", "regex")
def check_format(received: Any, field_name: Hashable, pattern: Any) -> CheckResult:
    value = get_value(received, field_name)
    if value is None:
        return True
    if isinstance(value, str) and re.search(pattern, value):
        return True
    return _error(field_name, "has invalid format")


@primitive_check("func")
def check_func(received: Any, field_name: Hashable, fn: Callable[[Any], Any]) -> CheckResult:
    value = get_value(received, field_name)
    if value is None:
        return True
    result = fn(value)
    if isinstance(result, str):
        return _error(field_name, result)
    return True if result else _error(field_name, "isn't valid")


# =============================================================================
# LENGTH
# =============================================================================

@primitive_check("length")
def check_length(received: Any, field_name: Hashable, rules: Mapping) -> CheckResult:
    value = get_value(received, field_name)
    if value is None:
        return True
    try:
        actual = len(value)
    except TypeError:
        return _error(field_name, "has no length")

    results: List[Any] = []
    if "min" in rules:
        results.append(
            True if actual >= rules["min"]
            else _error(field_name, f"length must be greater than or equal to {rules['min']}")
        )
    if "max" in rules:
        results.append(
            True if actual <= rules["max"]
            else _error(field_name, f"length must be less than or equal to {rules['max']}")
        )
    if "is" in rules:
        results.append(
            True if actual == rules["is"]
            else _error(field_name, f"length must be equal to {rules['is']}")
        )
    if "in" in rules:
        low, high = rules["in"]
        results.append(
            True if low <= actual <= high
            else _error(field_name, f"length must be in range {low}..{high}")
        )
    return results or True
