"""
Exceptions raised around contract validation.

A failed validation is a normal result (see report.ValidationResult) and is
never raised by the engine. ContractViolation is what callers raise when they
want a failed result to abort an operation. ContractError subclasses signal
that the contract or the received shape could not be walked at all.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable


@dataclass
class ContractViolation(Exception):
    """Raised when received params do not satisfy a contract."""
    message: str
    details: Dict[str, Any]

    def __str__(self):
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "message": self.message,
            "details": self.details,
        }


class ContractError(RuntimeError):
    """Non-recoverable failure while walking a contract."""


class MalformedNestedLookup(ContractError):
    """A declared inner key is absent from the nested received value."""

    def __init__(self, field: Hashable, inner_key: Hashable):
        super().__init__(f"Inner key {inner_key!r} missing from value of {field!r}")
        self.field = field
        self.inner_key = inner_key


class ContractDepthExceeded(ContractError):
    """Nested `inner` contracts went deeper than the configured bound."""

    def __init__(self, field: Hashable, max_depth: int):
        super().__init__(f"Nesting under {field!r} exceeds max depth {max_depth}")
        self.field = field
        self.max_depth = max_depth
