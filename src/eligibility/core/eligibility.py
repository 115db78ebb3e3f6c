"""Eligibility aggregation over requirement evaluators."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schemas import (
    DEFAULT_SUGGESTIONS,
    NO_REQUIREMENTS,
    REQUIREMENT_FIELDS,
    AttributeSnapshot,
    EligibilityVerdict,
    RequirementCheck,
    RequirementSet,
)
from .evaluators import (
    EducationFloorEvaluator,
    ExperienceFloorEvaluator,
    GpaFloorEvaluator,
    GradeFloorEvaluator,
    PointsFloorEvaluator,
    QualificationCoverageEvaluator,
    SkillCoverageEvaluator,
    SubjectCoverageEvaluator,
)

_FIELD_ORDER = {name: index for index, name in enumerate(REQUIREMENT_FIELDS)}


def default_evaluators() -> list[Any]:
    return [
        GradeFloorEvaluator(),
        PointsFloorEvaluator(),
        GpaFloorEvaluator(),
        SubjectCoverageEvaluator(),
        EducationFloorEvaluator(),
        ExperienceFloorEvaluator(),
        SkillCoverageEvaluator(),
        QualificationCoverageEvaluator(),
    ]


class EligibilityEngine:
    """Combine per-requirement evaluator results into one verdict.

    Evaluators run in the fixed requirement field order regardless of the order
    they are supplied in, and only for fields the requirement set populates.
    Every populated field is evaluated, so the verdict lists all failures.
    """

    def __init__(
        self,
        evaluators: Iterable[Any] | None = None,
        *,
        suggestions: Iterable[str] | None = None,
    ) -> None:
        self._suggestions = tuple(DEFAULT_SUGGESTIONS if suggestions is None else suggestions)
        resolved = list(evaluators) if evaluators is not None else default_evaluators()
        by_field: dict[str, Any] = {}
        for evaluator in resolved:
            field = getattr(evaluator, "field", None)
            if field not in _FIELD_ORDER:
                raise ValueError(f"Evaluator {evaluator!r} targets unknown field {field!r}.")
            if field in by_field:
                raise ValueError(f"Multiple evaluators registered for {field!r}.")
            by_field[field] = evaluator
        self._evaluators = [by_field[name] for name in REQUIREMENT_FIELDS if name in by_field]

    @property
    def evaluators(self) -> list[Any]:
        return list(self._evaluators)

    def evaluate(
        self,
        requirements: RequirementSet | Mapping[str, Any] | None,
        candidate: AttributeSnapshot | Mapping[str, Any],
    ) -> EligibilityVerdict:
        requirement_set = self._coerce_requirements(requirements)
        if requirement_set is None or requirement_set.is_empty():
            return EligibilityVerdict(qualified=True, satisfied=(NO_REQUIREMENTS,))

        snapshot = (
            candidate
            if isinstance(candidate, AttributeSnapshot)
            else AttributeSnapshot.model_validate(dict(candidate))
        )
        populated = set(requirement_set.populated_fields())

        checks: list[RequirementCheck] = []
        for evaluator in self._evaluators:
            if evaluator.field not in populated:
                continue
            raw_result = evaluator.evaluate(getattr(requirement_set, evaluator.field), snapshot)
            checks.append(self._normalize_check(raw_result, evaluator.field))

        qualified = all(check.met for check in checks)
        return EligibilityVerdict(
            qualified=qualified,
            satisfied=tuple(check.detail for check in checks if check.met),
            missing=tuple(check.detail for check in checks if not check.met),
            checks=tuple(checks),
            suggestions=() if qualified else self._suggestions,
        )

    @staticmethod
    def _coerce_requirements(
        requirements: RequirementSet | Mapping[str, Any] | None,
    ) -> RequirementSet | None:
        if requirements is None or isinstance(requirements, RequirementSet):
            return requirements
        if isinstance(requirements, Mapping):
            return RequirementSet.model_validate(dict(requirements))
        return None

    @staticmethod
    def _normalize_check(payload: dict[str, Any], field: str) -> RequirementCheck:
        method = payload.get("method")
        detail = payload.get("detail")
        if method is None or detail is None:
            raise ValueError("Evaluator result must include 'method' and 'detail'.")
        return RequirementCheck(
            method=str(method),
            field=str(payload.get("field") or field),
            met=bool(payload.get("met")),
            detail=str(detail),
            metadata=dict(payload.get("metadata") or {}),
        )


_DEFAULT_ENGINE = EligibilityEngine()


def evaluate(
    requirements: RequirementSet | Mapping[str, Any] | None,
    candidate: AttributeSnapshot | Mapping[str, Any],
) -> EligibilityVerdict:
    """Evaluate with the default evaluator set."""
    return _DEFAULT_ENGINE.evaluate(requirements, candidate)


__all__ = ["EligibilityEngine", "default_evaluators", "evaluate"]
