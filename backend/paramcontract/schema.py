"""
Contract data model.

A Contract is an ordered tuple of FieldSpec. A FieldSpec pairs a field name
with its ordered (check_name, check_spec) pairs. Contracts are built once by
the caller and only read by the validator.

Accepted input shapes:
    FieldSpec(name="param", checks=[("required", True), ("type", "string")])
    {"name": "param", "checks": {"required": True, "type": "string"}}
    {"name": "param", "opts": [("required", True)]}
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping, Optional, Tuple

CheckPair = Tuple[Hashable, Any]

REQUIRED_CHECK = "required"
TYPE_CHECK = "type"
INNER_CHECK = "inner"


def normalize_checks(checks: Any) -> Tuple[CheckPair, ...]:
    """Turn a checks mapping or pair sequence into an ordered tuple of pairs."""
    if checks is None:
        return ()
    if isinstance(checks, Mapping):
        return tuple(checks.items())
    pairs = []
    for item in checks:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Check entry must be a (name, spec) pair, got {item!r}")
        pairs.append((item[0], item[1]))
    return tuple(pairs)


@dataclass(frozen=True)
class FieldSpec:
    """Specification for a single field."""
    name: Hashable
    checks: Tuple[CheckPair, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.checks, tuple) or not all(
            isinstance(pair, tuple) for pair in self.checks
        ):
            object.__setattr__(self, "checks", normalize_checks(self.checks))

    def get_check(self, check_name: Hashable, default: Any = None) -> Any:
        return check_spec(self.checks, check_name, default)

    @property
    def required(self) -> bool:
        return bool(self.get_check(REQUIRED_CHECK, False))

    @classmethod
    def coerce(cls, item: Any) -> "FieldSpec":
        """Build a FieldSpec from a FieldSpec or a mapping with name + checks/opts."""
        if isinstance(item, FieldSpec):
            return item
        if isinstance(item, Mapping) and "name" in item:
            checks = item.get("checks", item.get("opts"))
            return cls(name=item["name"], checks=normalize_checks(checks))
        raise ValueError(f"Cannot build a field spec from {item!r}")


Contract = Tuple[FieldSpec, ...]


def check_spec(checks: Iterable[CheckPair], check_name: Hashable, default: Any = None) -> Any:
    """First spec declared for check_name, or default."""
    for name, spec in checks:
        if name == check_name:
            return spec
    return default


def build_contract(items: Iterable[Any]) -> Contract:
    """Build an immutable Contract from FieldSpecs or field mappings."""
    return tuple(FieldSpec.coerce(item) for item in items)


def element_spec(inner: Any) -> Optional[Tuple[Hashable, Tuple[CheckPair, ...]]]:
    """
    Resolve the element contract of a list-shaped `inner` declaration.

    Returns (declared_name, checks); declared_name is None for a bare
    checks mapping.
    """
    if isinstance(inner, FieldSpec):
        return inner.name, inner.checks
    if isinstance(inner, Mapping) and ("checks" in inner or "opts" in inner):
        checks = inner.get("checks", inner.get("opts"))
        return inner.get("name"), normalize_checks(checks)
    if isinstance(inner, (Mapping, list, tuple)):
        return None, normalize_checks(inner)
    return None
