"""
Contract validation engine.

Walks a contract field by field against a received value set:

- Optional fields that were not supplied (missing or None) are skipped
  entirely; none of their checks run.
- Every other field has each declared check dispatched in declaration order.
- Dispatch resolves a check through the CheckRegistry: the structural `inner`
  check recurses into nested maps/lists, primitive checks are invoked
  directly, and unknown check names pass silently.

The result of validate() is a flat, ordered list of VALID / Invalid outcomes;
valid() consolidates it into a ValidationResult.

Usage:
    contract = build_contract([
        {"name": "param", "checks": {"required": True, "type": "string"}},
    ])
    result = valid(contract, {"param": "hello"})
    if not result:
        print(result.message())
"""

import logging
from collections.abc import Sequence
from typing import Any, Hashable, Iterable, List, Mapping, Optional, Tuple

from .config import MissingInnerPolicy, get_max_depth, get_missing_inner_policy
from .errors import ContractDepthExceeded, MalformedNestedLookup
from .outcome import VALID, CheckOutcome, Invalid, all_valid, normalize_outcomes
from .received import Found, get_value, is_absent, is_addressable, lookup
from .registry import CheckRegistry, Primitive, Structural, default_registry
from .report import ValidationResult, consolidate
from .schema import (
    REQUIRED_CHECK,
    TYPE_CHECK,
    CheckPair,
    Contract,
    FieldSpec,
    build_contract,
    check_spec,
    element_spec,
    normalize_checks,
)

logger = logging.getLogger('paramcontract.validate')

LIST_TYPES = ("list", list, tuple)

MISSING_INNER_MESSAGE = "is missing"


class Validator:
    """
    Validates received values against contracts using one CheckRegistry.

    The validator holds no per-pass state, so one instance can serve
    concurrent passes.

    Args:
        registry: Check implementations (default: stock primitive checks)
        max_depth: Bound on nested `inner` descent (default: CONTRACT_MAX_DEPTH)
        missing_inner: Policy for declared inner keys absent from the value
            (default: CONTRACT_MISSING_INNER)
    """

    def __init__(
        self,
        registry: Optional[CheckRegistry] = None,
        *,
        max_depth: Optional[int] = None,
        missing_inner: Optional[MissingInnerPolicy] = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        # None means "read the environment when needed"
        self._max_depth = max_depth
        self._missing_inner = missing_inner

    @property
    def max_depth(self) -> int:
        return self._max_depth if self._max_depth is not None else get_max_depth()

    @property
    def missing_inner(self) -> MissingInnerPolicy:
        if self._missing_inner is not None:
            return self._missing_inner
        return get_missing_inner_policy()

    # =========================================================================
    # CONTRACT WALKER
    # =========================================================================

    def validate(self, contract: Iterable[Any], received: Any) -> List[CheckOutcome]:
        """
        Validate received params over a contract, accumulating outcomes.

        Returns:
            Flat list of outcomes in field order, then check order
        """
        return self._walk(_as_contract(contract), received, depth=0)

    def valid(self, contract: Iterable[Any], received: Any) -> ValidationResult:
        outcomes = self.validate(contract, received)
        if all_valid(outcomes):
            return ValidationResult()
        return ValidationResult(errors=consolidate(outcomes))

    def _walk(self, contract: Contract, received: Any, depth: int) -> List[CheckOutcome]:
        outcomes: List[CheckOutcome] = []
        for field_spec in contract:
            if not field_spec.required and is_absent(received, field_spec.name):
                continue
            for check_name, spec in field_spec.checks:
                outcomes.extend(
                    self._dispatch(check_name, spec, field_spec.name, received, field_spec.checks, depth)
                )
        return outcomes

    # =========================================================================
    # CHECK DISPATCHER
    # =========================================================================

    def dispatch(
        self,
        check_name: Hashable,
        spec: Any,
        field_name: Hashable,
        received: Any,
        siblings: Iterable[CheckPair] = (),
    ) -> List[CheckOutcome]:
        """
        Run one check for one field.

        Args:
            check_name: Declared check name
            spec: The check's configuration
            field_name: Field being checked
            received: Received value set the field lives in
            siblings: All checks declared on the field (the structural
                `inner` check reads the sibling `type` from here)
        """
        return self._dispatch(check_name, spec, field_name, received, tuple(siblings), 0)

    def _dispatch(
        self,
        check_name: Hashable,
        spec: Any,
        field_name: Hashable,
        received: Any,
        siblings: Tuple[CheckPair, ...],
        depth: int,
    ) -> List[CheckOutcome]:
        entry = self.registry.resolve(check_name)

        if isinstance(entry, Structural):
            max_depth = self.max_depth
            if depth >= max_depth:
                raise ContractDepthExceeded(field_name, max_depth)
            if check_spec(siblings, TYPE_CHECK) in LIST_TYPES:
                return self._inner_list(spec, field_name, received, depth + 1)
            return self._inner_map(spec, field_name, received, depth + 1)

        if isinstance(entry, Primitive):
            return normalize_outcomes(entry.fn(received, field_name, spec), field_name)

        logger.debug(f"No check implements '{check_name}' on '{field_name}', passing")
        return [VALID]

    # =========================================================================
    # STRUCTURAL: INNER
    # =========================================================================

    def _inner_map(self, inner: Any, field_name: Hashable, received: Any, depth: int) -> List[CheckOutcome]:
        """
        Dispatch every inner key's checks against the field's own value.

        An inner key missing from the value is skipped unless its checks set
        `required`, in which case the MissingInnerPolicy applies.
        """
        inner_received = get_value(received, field_name)
        if not is_addressable(inner_received):
            # Absent or wrong-shaped parent is reported by its own checks
            return []

        inner_fields = _inner_fields(inner)
        if inner_fields is None:
            logger.warning(f"Unusable map inner spec on '{field_name}': {inner!r}")
            return []

        outcomes: List[CheckOutcome] = []
        for inner_key, checks in inner_fields:
            if not isinstance(lookup(inner_received, inner_key), Found):
                if check_spec(checks, REQUIRED_CHECK, False):
                    outcomes.append(self._missing_inner_outcome(field_name, inner_key))
                continue
            for check_name, spec in checks:
                outcomes.extend(
                    self._dispatch(check_name, spec, inner_key, inner_received, checks, depth)
                )
        return outcomes

    def _missing_inner_outcome(self, field_name: Hashable, inner_key: Hashable) -> CheckOutcome:
        if self.missing_inner is MissingInnerPolicy.FATAL:
            raise MalformedNestedLookup(field_name, inner_key)
        return Invalid(inner_key, MISSING_INNER_MESSAGE)

    def _inner_list(self, inner: Any, field_name: Hashable, received: Any, depth: int) -> List[CheckOutcome]:
        """Validate every element against the element contract."""
        items = get_value(received, field_name)
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
            return []

        resolved = element_spec(inner)
        if resolved is None:
            logger.warning(f"Unusable list inner spec on '{field_name}': {inner!r}")
            return []
        _, checks = resolved

        outcomes: List[CheckOutcome] = []
        for index, item in enumerate(items):
            item_name = f"{field_name}_{index}"
            element_contract = (FieldSpec(name=item_name, checks=checks),)
            outcomes.extend(self._walk(element_contract, {item_name: item}, depth))
        return outcomes


def _inner_fields(inner: Any) -> Optional[List[Tuple[Hashable, Tuple[CheckPair, ...]]]]:
    """(inner_key, checks) pairs from a mapping or pair sequence, or None if unusable."""
    if not isinstance(inner, (Mapping, list, tuple)):
        return None
    try:
        return [(key, normalize_checks(checks)) for key, checks in normalize_checks(inner)]
    except (TypeError, ValueError):
        return None


def _as_contract(contract: Iterable[Any]) -> Contract:
    if isinstance(contract, tuple) and all(isinstance(item, FieldSpec) for item in contract):
        return contract
    return build_contract(contract)


_DEFAULT_VALIDATOR: Optional[Validator] = None


def default_validator() -> Validator:
    global _DEFAULT_VALIDATOR
    if _DEFAULT_VALIDATOR is None:
        _DEFAULT_VALIDATOR = Validator()
    return _DEFAULT_VALIDATOR


def validate(contract: Iterable[Any], received: Any) -> List[CheckOutcome]:
    """Validate with the stock checks. See Validator.validate."""
    return default_validator().validate(contract, received)


def valid(contract: Iterable[Any], received: Any) -> ValidationResult:
    """
    Validate received params over a contract.

    Example:
        >>> valid([{"name": "param", "checks": {"required": True}}], {"param": "hello"}).ok
        True
    """
    return default_validator().valid(contract, received)
