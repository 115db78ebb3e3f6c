"""Canonical candidate attribute snapshot."""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from .fields import optional_float, optional_label, string_tuple, subject_mapping

LOWEST_EDUCATION = "high-school"
LOWEST_EXPERIENCE = "entry"


def _points(value: Any) -> int:
    # Fractional points round down.
    points = optional_float(value)
    return 0 if points is None else math.floor(points)


def _gpa(value: Any) -> float:
    gpa = optional_float(value)
    return 0.0 if gpa is None else gpa


def _education(value: Any) -> str:
    return optional_label(value) or LOWEST_EDUCATION


def _experience(value: Any) -> str:
    return optional_label(value) or LOWEST_EXPERIENCE


class AttributeSnapshot(BaseModel):
    """Comparable attributes of one candidate, independent of any offering.

    Callers project whatever stored profile they hold into this shape before
    evaluation (see :mod:`eligibility.adapters`). Missing or malformed values
    fall back to the most conservative default.
    """

    overall_grade: Annotated[str | None, BeforeValidator(optional_label)] = Field(
        default=None,
        validation_alias=AliasChoices("overall_grade", "overallGrade", "overall"),
    )
    points: Annotated[int, BeforeValidator(_points)] = 0
    gpa: Annotated[float, BeforeValidator(_gpa)] = 0.0
    subjects: Annotated[dict[str, Any], BeforeValidator(subject_mapping)] = Field(
        default_factory=dict
    )
    education_level: Annotated[str, BeforeValidator(_education)] = Field(
        default=LOWEST_EDUCATION,
        validation_alias=AliasChoices("education_level", "educationLevel"),
    )
    experience_level: Annotated[str, BeforeValidator(_experience)] = Field(
        default=LOWEST_EXPERIENCE,
        validation_alias=AliasChoices("experience_level", "experienceLevel"),
    )
    skills: Annotated[tuple[str, ...], BeforeValidator(string_tuple)] = ()
    qualifications: Annotated[tuple[str, ...], BeforeValidator(string_tuple)] = Field(
        default=(),
        validation_alias=AliasChoices("qualifications", "certifications", "certificates"),
    )

    model_config = ConfigDict(extra="ignore", frozen=True)


__all__ = ["AttributeSnapshot", "LOWEST_EDUCATION", "LOWEST_EXPERIENCE"]
