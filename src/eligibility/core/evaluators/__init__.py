"""Requirement evaluator implementations, one per requirement field."""

from .coverage import (
    CoverageConfig,
    QualificationCoverageEvaluator,
    SkillCoverageEvaluator,
    SubjectCoverageEvaluator,
)
from .numeric import GpaFloorEvaluator, PointsFloorEvaluator
from .ordinal import (
    EducationFloorEvaluator,
    ExperienceFloorEvaluator,
    GradeFloorEvaluator,
    OrdinalFloorEvaluator,
)

__all__ = [
    "CoverageConfig",
    "EducationFloorEvaluator",
    "ExperienceFloorEvaluator",
    "GpaFloorEvaluator",
    "GradeFloorEvaluator",
    "OrdinalFloorEvaluator",
    "PointsFloorEvaluator",
    "QualificationCoverageEvaluator",
    "SkillCoverageEvaluator",
    "SubjectCoverageEvaluator",
]
