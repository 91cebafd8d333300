"""
Error consolidation and rendering.

consolidate() reduces a flat outcome list into {field: [messages]}. Messages
are prepended as they are seen, so for a single field the last failing check
is listed first.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List

from .errors import ContractViolation
from .outcome import CheckOutcome, Invalid

ValidationReport = Dict[Hashable, List[str]]


def consolidate(outcomes: Iterable[CheckOutcome]) -> ValidationReport:
    report: ValidationReport = {}
    for outcome in outcomes:
        if not isinstance(outcome, Invalid):
            continue
        report[outcome.field] = [outcome.message] + report.get(outcome.field, [])
    return report


def errors_message(report: ValidationReport) -> str:
    """Render a report as "field: msg1\\n\\tmsg2" lines joined by newlines."""
    return "\n".join(
        f"{item_name}: " + "\n\t".join(messages)
        for item_name, messages in report.items()
    )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass. Truthy when the params are valid."""
    errors: ValidationReport = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self):
        return self.ok

    def message(self) -> str:
        return errors_message(self.errors)

    def raise_for_errors(self, message: str = "Contract validation failed") -> None:
        """Raise ContractViolation carrying the report if validation failed."""
        if self.ok:
            return
        raise ContractViolation(
            message=f"{message}: {len(self.errors)} field error(s)",
            details={"errors": {str(k): v for k, v in self.errors.items()}},
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "ok": self.ok,
            "errors": {str(k): v for k, v in self.errors.items()},
        }
