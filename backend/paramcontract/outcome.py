"""
Check outcomes.

Every check invocation ends up as a flat list of VALID / Invalid leaves.
Check functions are allowed looser return shapes (True, a {field: message}
mapping, or nested lists of those from recursion); normalize_outcomes() turns
any of them into the canonical form.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Mapping, Union

GENERIC_FAILURE_MESSAGE = "is invalid"


class _Valid:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "VALID"


VALID = _Valid()


@dataclass(frozen=True)
class Invalid:
    field: Hashable
    message: str


CheckOutcome = Union[_Valid, Invalid]


def is_valid(outcome: CheckOutcome) -> bool:
    return outcome is VALID


def normalize_outcomes(result: Any, field: Hashable) -> List[CheckOutcome]:
    """
    Flatten a raw check result into VALID / Invalid leaves.

    Args:
        result: Whatever the check returned
        field: Field the check ran against, used for bare falsy failures

    Returns:
        Flat, order-preserving list of outcomes
    """
    outcomes: List[CheckOutcome] = []
    _collect(result, field, outcomes)
    return outcomes


def _collect(result: Any, field: Hashable, out: List[CheckOutcome]) -> None:
    if result is VALID or result is True:
        out.append(VALID)
    elif isinstance(result, Invalid):
        out.append(result)
    elif isinstance(result, str):
        out.append(Invalid(field, result))
    elif isinstance(result, Mapping):
        # {field: message} failure; a multi-key mapping yields one outcome per key
        if not result:
            out.append(VALID)
        for item_name, message in result.items():
            out.append(Invalid(item_name, str(message)))
    elif isinstance(result, (list, tuple)):
        for item in result:
            _collect(item, field, out)
    else:
        out.append(Invalid(field, GENERIC_FAILURE_MESSAGE))


def all_valid(outcomes: Iterable[CheckOutcome]) -> bool:
    return all(outcome is VALID for outcome in outcomes)
