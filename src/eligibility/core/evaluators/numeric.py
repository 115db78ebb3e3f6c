"""Numeric floor checks (points, GPA)."""

from __future__ import annotations

from typing import Any

from ...schemas import AttributeSnapshot
from ...schemas.fields import optional_float, optional_int


def format_decimal(value: float) -> str:
    """Render ``3.0`` as ``3.0`` and ``3.25`` as ``3.25``."""
    text = f"{value:.2f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


class PointsFloorEvaluator:
    """Minimum admission points; absent candidate points count as 0."""

    method = "points"
    field = "min_points"

    def evaluate(self, requirement: Any, candidate: AttributeSnapshot | dict[str, Any]) -> dict[str, Any]:
        snapshot = AttributeSnapshot.model_validate(candidate)
        required = optional_int(requirement) or 0
        met = snapshot.points >= required

        if met:
            detail = f"Meets minimum points requirement ({required})"
        else:
            detail = f"Minimum {required} points required (your points: {snapshot.points})"

        return {
            "method": self.method,
            "field": self.field,
            "met": met,
            "detail": detail,
            "metadata": {
                "required": required,
                "candidate_value": snapshot.points,
                "gap": max(required - snapshot.points, 0),
            },
        }


class GpaFloorEvaluator:
    """Minimum GPA on the 0.0-4.0 scale; absent GPA counts as 0.0."""

    method = "gpa"
    field = "min_gpa"

    def evaluate(self, requirement: Any, candidate: AttributeSnapshot | dict[str, Any]) -> dict[str, Any]:
        snapshot = AttributeSnapshot.model_validate(candidate)
        required = optional_float(requirement) or 0.0
        met = snapshot.gpa >= required

        if met:
            detail = f"Meets minimum GPA requirement ({format_decimal(required)})"
        else:
            shown = format_decimal(snapshot.gpa)
            if shown == format_decimal(required):
                # Rounded value would read as meeting the floor.
                shown = repr(snapshot.gpa)
            detail = f"Minimum GPA of {format_decimal(required)} required (your GPA: {shown})"

        return {
            "method": self.method,
            "field": self.field,
            "met": met,
            "detail": detail,
            "metadata": {
                "required": required,
                "candidate_value": snapshot.gpa,
                "gap": round(max(required - snapshot.gpa, 0.0), 4),
            },
        }
