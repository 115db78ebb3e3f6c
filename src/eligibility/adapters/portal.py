"""Course and job adapters for the portal's document store records."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..schemas import AttributeSnapshot, Offering
from ..schemas.fields import optional_float


def _first(data: Mapping[str, Any] | None, *keys: str) -> Any:
    if not data:
        return None
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def _floor(value: Any) -> Any:
    # Stored forms default unset floors to 0.
    if optional_float(value) == 0:
        return None
    return value


def _mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _dig(data: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _load(blob: bytes | str | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(blob, Mapping):
        return dict(blob)
    if isinstance(blob, bytes):
        blob = blob.decode("utf-8")
    try:
        data = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValueError("Invalid portal document") from exc
    if not isinstance(data, dict):
        raise ValueError("Portal document must be a JSON object")
    return data


class CourseAdapter:
    """Project course documents and the student's academic record.

    Screens have saved grades under ``grades``, ``academicRecords`` or
    ``qualifications.grades``; the first non-empty record wins.
    """

    kind = "course"

    _GRADE_LOCATIONS: tuple[tuple[str, ...], ...] = (
        ("grades",),
        ("academicRecords",),
        ("qualifications", "grades"),
    )

    def project_candidate(self, document: bytes | str | Mapping[str, Any]) -> AttributeSnapshot | None:
        data = _load(document)
        grades = None
        for path in self._GRADE_LOCATIONS:
            record = _mapping(_dig(data, path))
            if record:
                grades = record
                break
        if grades is None:
            return None

        certificates = _first(grades, "certificates", "certifications") or _dig(
            data, ("qualifications", "certificates")
        )
        return AttributeSnapshot.model_validate(
            {
                "overall_grade": _first(grades, "overall", "overallGrade", "grade"),
                "points": grades.get("points"),
                "gpa": _first(grades, "gpa"),
                "subjects": grades.get("subjects"),
                "qualifications": certificates,
            }
        )

    def project_offering(self, document: bytes | str | Mapping[str, Any]) -> Offering:
        data = _load(document)
        raw = _mapping(data.get("requirements"))
        requirements = None
        if raw is not None:
            requirements = {
                "min_grade": _first(raw, "minGrade", "min_grade"),
                "min_points": _floor(_first(raw, "minPoints", "min_points")),
                "min_gpa": _floor(_first(raw, "minGPA", "minGpa", "min_gpa")),
                "required_subjects": _first(raw, "requiredSubjects", "required_subjects", "subjects"),
                "required_qualifications": _first(
                    raw,
                    "requiredQualifications",
                    "required_qualifications",
                    "requiredCertificates",
                    "certificates",
                ),
            }

        return Offering.model_validate(
            {
                "offering_id": _first(data, "id", "courseId", "offering_id"),
                "kind": self.kind,
                "title": _first(data, "name", "title"),
                "description": data.get("description"),
                "organization_id": _first(data, "institutionId", "organization_id"),
                "organization_name": _first(data, "institutionName")
                or _dig(data, ("institution", "name")),
                "status": data.get("status"),
                "deadline": _first(data, "applicationDeadline", "deadline"),
                "created_at": data.get("createdAt"),
                "requirements": requirements,
                "faculty_id": data.get("facultyId"),
                "duration": data.get("duration"),
            }
        )


class JobAdapter:
    """Project job postings and the student's professional qualifications."""

    kind = "job"

    def project_candidate(self, document: bytes | str | Mapping[str, Any]) -> AttributeSnapshot | None:
        data = _load(document)
        qualifications = _mapping(data.get("qualifications"))
        fallback_skills = data.get("skills")
        fallback_education = data.get("educationLevel")
        if qualifications is None and fallback_skills is None and fallback_education is None:
            return None
        qualifications = qualifications or {}

        return AttributeSnapshot.model_validate(
            {
                "gpa": _first(qualifications, "gpa"),
                "education_level": _first(qualifications, "educationLevel", "education_level")
                or fallback_education,
                "experience_level": _first(
                    qualifications, "experienceLevel", "experience_level", "experience"
                ),
                "skills": _first(qualifications, "skills") or fallback_skills,
                "qualifications": _first(
                    qualifications, "certificates", "certifications", "qualifications"
                ),
            }
        )

    def project_offering(self, document: bytes | str | Mapping[str, Any]) -> Offering:
        data = _load(document)
        raw = _mapping(data.get("requirements"))
        requirements = None
        if raw is not None:
            requirements = {
                "min_gpa": _floor(_first(raw, "minGPA", "minGpa", "min_gpa")),
                "min_education": _first(
                    raw,
                    "minEducation",
                    "min_education",
                    "educationLevel",
                    "educationalLevel",
                    "education",
                ),
                "min_experience": _first(
                    raw, "minExperience", "min_experience", "experienceLevel", "experience"
                ),
                "required_skills": _first(raw, "requiredSkills", "required_skills", "skills"),
                "required_qualifications": _first(
                    raw,
                    "requiredQualifications",
                    "required_qualifications",
                    "requiredCertificates",
                    "certifications",
                ),
            }

        return Offering.model_validate(
            {
                "offering_id": _first(data, "id", "jobId", "offering_id"),
                "kind": self.kind,
                "title": data.get("title"),
                "description": data.get("description"),
                "organization_id": _first(data, "companyId", "organization_id"),
                "organization_name": _first(data, "companyName")
                or _dig(data, ("company", "name")),
                "status": data.get("status"),
                "deadline": _first(data, "deadline", "applicationDeadline"),
                "created_at": data.get("createdAt"),
                "requirements": requirements,
                "job_type": data.get("jobType"),
                "location": data.get("location"),
            }
        )
