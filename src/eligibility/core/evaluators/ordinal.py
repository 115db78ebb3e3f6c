"""Floor checks over ordinal scales (grade, education, experience)."""

from __future__ import annotations

from typing import Any

from ...schemas import AttributeSnapshot
from ..scales import EDUCATION_SCALE, EXPERIENCE_SCALE, GRADE_SCALE, OrdinalScale


class OrdinalFloorEvaluator:
    """Compare one candidate label against a required minimum tier."""

    method = "ordinal_floor"
    field = ""
    attribute = ""
    noun = ""
    absent_label = "not provided"
    default_scale = GRADE_SCALE

    def __init__(self, *, scale: OrdinalScale | None = None) -> None:
        self._scale = scale or self.default_scale

    @property
    def scale(self) -> OrdinalScale:
        return self._scale

    def evaluate(self, requirement: Any, candidate: AttributeSnapshot | dict[str, Any]) -> dict[str, Any]:
        snapshot = AttributeSnapshot.model_validate(candidate)
        actual = getattr(snapshot, self.attribute)
        required_rank = self._scale.rank(requirement)
        candidate_rank = self._scale.rank(actual)
        met = candidate_rank >= required_rank

        if met:
            detail = f"Meets minimum {self.noun} requirement ({requirement})"
        else:
            shown = actual if actual is not None else self.absent_label
            detail = f"Minimum {self.noun} of {requirement} required (your {self.noun}: {shown})"

        return {
            "method": self.method,
            "field": self.field,
            "met": met,
            "detail": detail,
            "metadata": {
                "required": requirement,
                "required_rank": required_rank,
                "candidate_value": actual,
                "candidate_rank": candidate_rank,
                "scale": self._scale.name,
            },
        }


class GradeFloorEvaluator(OrdinalFloorEvaluator):
    """Overall letter grade floor; an absent grade ranks as F."""

    method = "grade"
    field = "min_grade"
    attribute = "overall_grade"
    noun = "grade"
    absent_label = "F"
    default_scale = GRADE_SCALE


class EducationFloorEvaluator(OrdinalFloorEvaluator):
    method = "education"
    field = "min_education"
    attribute = "education_level"
    noun = "education"
    default_scale = EDUCATION_SCALE


class ExperienceFloorEvaluator(OrdinalFloorEvaluator):
    method = "experience"
    field = "min_experience"
    attribute = "experience_level"
    noun = "experience"
    default_scale = EXPERIENCE_SCALE
