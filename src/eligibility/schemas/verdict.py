"""Eligibility verdict value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NO_REQUIREMENTS = "No requirements specified"

DEFAULT_SUGGESTIONS: tuple[str, ...] = (
    "Consider improving your grades in the required subjects",
    "Explore alternative courses with lower requirements",
    "Contact the institution for special consideration",
    "Look for bridging programs or foundation courses",
)


@dataclass(frozen=True, slots=True)
class RequirementCheck:
    """Normalized evaluator output for one requirement field."""

    method: str
    field: str
    met: bool
    detail: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EligibilityVerdict:
    """Qualify/not-qualify result for one (candidate, offering) pair."""

    qualified: bool
    satisfied: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    checks: tuple[RequirementCheck, ...] = ()
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "qualified": self.qualified,
            "satisfied": list(self.satisfied),
            "missing": list(self.missing),
            "suggestions": list(self.suggestions),
            "checks": [
                {
                    "method": check.method,
                    "field": check.field,
                    "met": check.met,
                    "detail": check.detail,
                    "metadata": dict(check.metadata),
                }
                for check in self.checks
            ],
        }


__all__ = ["DEFAULT_SUGGESTIONS", "EligibilityVerdict", "RequirementCheck", "NO_REQUIREMENTS"]
