"""
Registries.

CheckRegistry - check name -> implementation, built once and read-only.
    Entries are either Primitive(fn), supplied by the caller, or
    Structural(kind), owned by the validator. Structural entries are merged
    last so they shadow any primitive registered under the same name.

CONTRACTS - named contract registry used by the decorators in wrapper.py and
    operation.py, with per-contract enforcement mode.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Hashable, List, Mapping, Optional, Union

from .checks import PRIMITIVE_CHECKS, CheckFn
from .config import get_mode_name, get_strict_endpoints, is_production_env
from .schema import INNER_CHECK, Contract, build_contract

logger = logging.getLogger('paramcontract.registry')


# =============================================================================
# CHECK REGISTRY
# =============================================================================

@dataclass(frozen=True)
class Primitive:
    fn: CheckFn


@dataclass(frozen=True)
class Structural:
    kind: str


CheckEntry = Union[Primitive, Structural]

STRUCTURAL_CHECKS: Mapping[Hashable, Structural] = MappingProxyType({
    INNER_CHECK: Structural(kind=INNER_CHECK),
})


class CheckRegistry:
    """Immutable lookup from check name to CheckEntry."""

    def __init__(self, checks: Optional[Mapping[Hashable, CheckFn]] = None):
        entries: Dict[Hashable, CheckEntry] = {}
        for name, fn in (checks if checks is not None else PRIMITIVE_CHECKS).items():
            if not callable(fn):
                raise TypeError(f"Check '{name}' is not callable: {fn!r}")
            entries[name] = Primitive(fn)

        shadowed = [name for name in STRUCTURAL_CHECKS if name in entries]
        if shadowed:
            logger.debug(f"Structural checks shadow primitives: {shadowed}")
        entries.update(STRUCTURAL_CHECKS)

        self._entries = MappingProxyType(entries)

    def resolve(self, check_name: Hashable) -> Optional[CheckEntry]:
        """Entry for check_name, or None when nothing implements it."""
        try:
            return self._entries.get(check_name)
        except TypeError:
            # Unhashable check name can't be registered
            return None

    def names(self) -> List[Hashable]:
        return list(self._entries.keys())

    def extend(self, checks: Mapping[Hashable, CheckFn]) -> "CheckRegistry":
        """New registry with extra (or replaced) primitive checks."""
        merged = {
            name: entry.fn for name, entry in self._entries.items()
            if isinstance(entry, Primitive)
        }
        merged.update(checks)
        return CheckRegistry(merged)

    def __contains__(self, check_name: Hashable) -> bool:
        return self.resolve(check_name) is not None

    def __repr__(self):
        return f"CheckRegistry({sorted(map(str, self._entries))})"


_DEFAULT_REGISTRY: Optional[CheckRegistry] = None


def default_registry() -> CheckRegistry:
    """Process-wide registry of the stock primitive checks, built on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = CheckRegistry(PRIMITIVE_CHECKS)
    return _DEFAULT_REGISTRY


# =============================================================================
# NAMED CONTRACTS
# =============================================================================

class SchemaMode(Enum):
    """Contract enforcement mode."""
    WARN = "warn"      # Log violations, don't fail
    STRICT = "strict"  # Fail on violations


def _get_default_mode() -> SchemaMode:
    """Get schema mode from environment."""
    return SchemaMode.STRICT if get_mode_name() == 'strict' else SchemaMode.WARN


@dataclass
class EndpointContract:
    """A named contract with its enforcement mode."""
    name: str
    contract: Contract
    version: str = "v1"
    description: str = ""
    mode: SchemaMode = field(default_factory=_get_default_mode)

    def __post_init__(self):
        # Accept raw field mappings
        if not isinstance(self.contract, tuple):
            self.contract = build_contract(self.contract)


# Global registry instance
CONTRACTS: Dict[str, EndpointContract] = {}


def register_contract(contract: EndpointContract) -> None:
    """
    Register a named contract.

    Re-registering a name replaces the previous contract. In production,
    names listed in CONTRACT_STRICT_ENDPOINTS are forced to STRICT.
    """
    if contract.name in CONTRACTS:
        logger.debug(f"Replacing contract '{contract.name}'")
    if is_production_env() and contract.name in get_strict_endpoints():
        contract.mode = SchemaMode.STRICT
    CONTRACTS[contract.name] = contract


def get_contract(name: str) -> Optional[EndpointContract]:
    return CONTRACTS.get(name)


def list_contracts() -> List[str]:
    """Get list of registered contract names."""
    return list(CONTRACTS.keys())


def set_contract_mode(name: str, mode: SchemaMode) -> bool:
    """
    Switch one registered contract to mode.

    Returns:
        False when no contract is registered under name
    """
    contract = get_contract(name)
    if contract is None:
        logger.warning(f"Cannot set mode on unregistered contract '{name}'")
        return False
    if contract.mode != mode:
        logger.info(f"Contract '{name}' mode {contract.mode.value} -> {mode.value}")
        contract.mode = mode
    return True


def set_global_mode(mode: SchemaMode) -> List[str]:
    """Switch every registered contract to mode; returns the names that changed."""
    changed = [name for name, contract in CONTRACTS.items() if contract.mode != mode]
    for name in changed:
        CONTRACTS[name].mode = mode
    if changed:
        logger.info(f"Contracts switched to {mode.value}: {changed}")
    return changed
