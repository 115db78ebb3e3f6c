"""Dependency injection container for the eligibility engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import CourseAdapter, JobAdapter
from .core import (
    EDUCATION_SCALE,
    EXPERIENCE_SCALE,
    GRADE_SCALE,
    CoverageConfig,
    EducationFloorEvaluator,
    EligibilityEngine,
    ExperienceFloorEvaluator,
    GpaFloorEvaluator,
    GradeFloorEvaluator,
    OfferingPipeline,
    PointsFloorEvaluator,
    QualificationCoverageEvaluator,
    SkillCoverageEvaluator,
    SubjectCoverageEvaluator,
)
from .pipeline import AdapterRegistry, EligibilityPipeline
from .schemas.config import CoverageSettings


class EligibilityContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    grade_scale = providers.Object(GRADE_SCALE)
    education_scale = providers.Object(EDUCATION_SCALE)
    experience_scale = providers.Object(EXPERIENCE_SCALE)

    course_adapter = providers.Singleton(CourseAdapter)
    job_adapter = providers.Singleton(JobAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(course_adapter, job_adapter),
    )

    grade_evaluator = providers.Singleton(GradeFloorEvaluator, scale=grade_scale)
    points_evaluator = providers.Singleton(PointsFloorEvaluator)
    gpa_evaluator = providers.Singleton(GpaFloorEvaluator)
    subject_evaluator = providers.Singleton(SubjectCoverageEvaluator)
    education_evaluator = providers.Singleton(EducationFloorEvaluator, scale=education_scale)
    experience_evaluator = providers.Singleton(ExperienceFloorEvaluator, scale=experience_scale)
    skill_evaluator = providers.Singleton(SkillCoverageEvaluator)
    qualification_evaluator = providers.Singleton(QualificationCoverageEvaluator)

    evaluators = providers.List(
        grade_evaluator,
        points_evaluator,
        gpa_evaluator,
        subject_evaluator,
        education_evaluator,
        experience_evaluator,
        skill_evaluator,
        qualification_evaluator,
    )

    engine = providers.Singleton(EligibilityEngine, evaluators=evaluators)

    offering_pipeline = providers.Factory(OfferingPipeline, engine=engine)

    pipeline = providers.Factory(
        EligibilityPipeline,
        engine=engine,
        registry=adapter_registry,
    )


def create_container(*, settings: dict | None = None) -> EligibilityContainer:
    """Instantiate container with optional overrides."""

    container = EligibilityContainer()

    if not settings:
        return container

    scale_settings = settings.get("scales", {}) if isinstance(settings, dict) else {}
    scale_providers = {
        "grade": (container.grade_scale, GRADE_SCALE),
        "education": (container.education_scale, EDUCATION_SCALE),
        "experience": (container.experience_scale, EXPERIENCE_SCALE),
    }
    for name, overrides in scale_settings.items():
        provider, base = scale_providers[name]
        provider.override(
            providers.Object(
                base.with_overrides(
                    ranks=overrides.get("ranks"),
                    aliases=overrides.get("aliases"),
                )
            )
        )

    evaluator_settings = settings.get("evaluators", {}) if isinstance(settings, dict) else {}

    if "skills" in evaluator_settings:
        skills_config = _coverage_config(evaluator_settings["skills"])
        container.skill_evaluator.override(
            providers.Singleton(SkillCoverageEvaluator, config=skills_config)
        )

    if "qualifications" in evaluator_settings:
        qualifications_config = _coverage_config(evaluator_settings["qualifications"])
        container.qualification_evaluator.override(
            providers.Singleton(QualificationCoverageEvaluator, config=qualifications_config)
        )

    return container


def _coverage_config(raw: dict | None) -> CoverageConfig:
    settings = CoverageSettings.model_validate(raw or {})
    return CoverageConfig(min_similarity=settings.min_similarity)
