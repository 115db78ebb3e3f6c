"""Core eligibility engine components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .eligibility import EligibilityEngine, default_evaluators, evaluate
from .evaluators import (
    CoverageConfig,
    EducationFloorEvaluator,
    ExperienceFloorEvaluator,
    GpaFloorEvaluator,
    GradeFloorEvaluator,
    PointsFloorEvaluator,
    QualificationCoverageEvaluator,
    SkillCoverageEvaluator,
    SubjectCoverageEvaluator,
)
from .filtering import (
    ApplicationGate,
    OfferingPipeline,
    OfferingQuery,
    application_gate,
    apply_query,
    filter_offerings,
    is_accepting_applications,
)
from .scales import EDUCATION_SCALE, EXPERIENCE_SCALE, GRADE_SCALE, OrdinalScale


@runtime_checkable
class Evaluator(Protocol):
    """Evaluator contract for a single requirement field."""

    method: str
    field: str

    def evaluate(self, requirement: Any, candidate: Any) -> dict:
        """Return ``method``, ``field``, ``met``, ``detail`` and ``metadata``."""


__all__ = [
    "ApplicationGate",
    "CoverageConfig",
    "EDUCATION_SCALE",
    "EXPERIENCE_SCALE",
    "EducationFloorEvaluator",
    "EligibilityEngine",
    "Evaluator",
    "ExperienceFloorEvaluator",
    "GRADE_SCALE",
    "GpaFloorEvaluator",
    "GradeFloorEvaluator",
    "OfferingPipeline",
    "OfferingQuery",
    "OrdinalScale",
    "PointsFloorEvaluator",
    "QualificationCoverageEvaluator",
    "SkillCoverageEvaluator",
    "SubjectCoverageEvaluator",
    "application_gate",
    "apply_query",
    "default_evaluators",
    "evaluate",
    "filter_offerings",
    "is_accepting_applications",
]
