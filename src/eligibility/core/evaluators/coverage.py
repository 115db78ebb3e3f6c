"""Set coverage checks: subjects, skills and qualifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from rapidfuzz import fuzz

from ...schemas import AttributeSnapshot
from ...schemas.fields import string_tuple


@dataclass
class CoverageConfig:
    """Matching options for free-text coverage checks.

    ``min_similarity`` enables a rapidfuzz ``token_set_ratio`` fallback (0-100)
    after containment fails. ``None`` keeps containment as the only rule.
    """

    min_similarity: float | None = None


class SubjectCoverageEvaluator:
    """Every required subject must be a key of the candidate's subject record."""

    method = "subjects"
    field = "required_subjects"

    def evaluate(self, requirement: Any, candidate: AttributeSnapshot | dict[str, Any]) -> dict[str, Any]:
        snapshot = AttributeSnapshot.model_validate(candidate)
        required = string_tuple(requirement)
        recorded = {name.casefold(): name for name in snapshot.subjects}

        matched: dict[str, str] = {}
        missing: list[str] = []
        for subject in required:
            hit = recorded.get(subject.casefold())
            if hit is None:
                missing.append(subject)
            else:
                matched[subject] = hit

        met = not missing
        detail = (
            "Meets all subject requirements"
            if met
            else f"Missing required subjects: {', '.join(missing)}"
        )
        return {
            "method": self.method,
            "field": self.field,
            "met": met,
            "detail": detail,
            "metadata": {"required": list(required), "matched": matched, "missing": missing},
        }


class SkillCoverageEvaluator:
    """Every required skill must be matched by some candidate skill.

    Two strings match when either contains the other after case folding, so
    ``React`` is covered by ``react developer`` and ``Python 3`` by ``python``.
    """

    method = "skills"
    field = "required_skills"
    attribute = "skills"
    singular = "skill"
    plural = "skills"

    def __init__(self, *, config: CoverageConfig | None = None) -> None:
        self._config = config or CoverageConfig()

    def evaluate(self, requirement: Any, candidate: AttributeSnapshot | dict[str, Any]) -> dict[str, Any]:
        snapshot = AttributeSnapshot.model_validate(candidate)
        required = string_tuple(requirement)
        available = getattr(snapshot, self.attribute)

        matched: dict[str, str] = {}
        missing: list[str] = []
        for item in required:
            hit = self._find_match(item, available)
            if hit is None:
                missing.append(item)
            else:
                matched[item] = hit

        met = not missing
        detail = (
            f"Meets all {self.singular} requirements"
            if met
            else f"Missing required {self.plural}: {', '.join(missing)}"
        )
        return {
            "method": self.method,
            "field": self.field,
            "met": met,
            "detail": detail,
            "metadata": {
                "required": list(required),
                "matched": matched,
                "missing": missing,
                "min_similarity": self._config.min_similarity,
            },
        }

    def _find_match(self, required: str, available: Sequence[str]) -> str | None:
        needle = required.casefold()
        for item in available:
            candidate = item.casefold()
            if needle in candidate or candidate in needle:
                return item

        threshold = self._config.min_similarity
        if threshold is None:
            return None
        for item in available:
            if fuzz.token_set_ratio(needle, item.casefold()) >= threshold:
                return item
        return None


class QualificationCoverageEvaluator(SkillCoverageEvaluator):
    """Certifications and qualifications, matched like skills."""

    method = "qualifications"
    field = "required_qualifications"
    attribute = "qualifications"
    singular = "qualification"
    plural = "qualifications"
