"""Requirement set attached to a course or job offering."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from .fields import optional_float, optional_int, optional_label, string_tuple

OptionalLabel = Annotated[str | None, BeforeValidator(optional_label)]
OptionalInt = Annotated[int | None, BeforeValidator(optional_int)]
OptionalFloat = Annotated[float | None, BeforeValidator(optional_float)]
LabelTuple = Annotated[tuple[str, ...], BeforeValidator(string_tuple)]

# Evaluation order of requirement fields; verdict lines follow it.
REQUIREMENT_FIELDS: tuple[str, ...] = (
    "min_grade",
    "min_points",
    "min_gpa",
    "required_subjects",
    "min_education",
    "min_experience",
    "required_skills",
    "required_qualifications",
)


class RequirementSet(BaseModel):
    """Declarative constraints of an offering. Absent fields constrain nothing."""

    min_grade: OptionalLabel = Field(
        default=None, validation_alias=AliasChoices("min_grade", "minGrade")
    )
    min_points: OptionalInt = Field(
        default=None, validation_alias=AliasChoices("min_points", "minPoints")
    )
    min_gpa: OptionalFloat = Field(
        default=None, validation_alias=AliasChoices("min_gpa", "minGPA", "minGpa")
    )
    required_subjects: LabelTuple = Field(
        default=(),
        validation_alias=AliasChoices("required_subjects", "requiredSubjects", "subjects"),
    )
    min_education: OptionalLabel = Field(
        default=None, validation_alias=AliasChoices("min_education", "minEducation")
    )
    min_experience: OptionalLabel = Field(
        default=None, validation_alias=AliasChoices("min_experience", "minExperience")
    )
    required_skills: LabelTuple = Field(
        default=(), validation_alias=AliasChoices("required_skills", "requiredSkills")
    )
    required_qualifications: LabelTuple = Field(
        default=(),
        validation_alias=AliasChoices("required_qualifications", "requiredQualifications"),
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    def populated_fields(self) -> list[str]:
        return [name for name in REQUIREMENT_FIELDS if _is_populated(getattr(self, name))]

    def is_empty(self) -> bool:
        return not self.populated_fields()


def _is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, tuple):
        return bool(value)
    return True


__all__ = ["RequirementSet", "REQUIREMENT_FIELDS"]
