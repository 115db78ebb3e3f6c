from __future__ import annotations

import pytest
from pydantic import ValidationError

from eligibility.container import create_container
from eligibility.core import EligibilityEngine
from eligibility.schemas.config import AppConfig, load_config


def test_create_container_defaults():
    container = create_container()

    engine = container.engine()

    assert isinstance(engine, EligibilityEngine)
    assert [evaluator.method for evaluator in engine.evaluators] == [
        "grade",
        "points",
        "gpa",
        "subjects",
        "education",
        "experience",
        "skills",
        "qualifications",
    ]
    assert container.education_evaluator().scale.rank("diploma") == 2
    assert container.adapter_registry().kinds() == ["course", "job"]


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "scales": {
                "education": {"ranks": {"diploma": 3}, "aliases": {"hnd": "diploma"}},
                "experience": {"aliases": {"lead": "senior"}},
            },
            "evaluators": {
                "skills": {"min_similarity": 85},
                "qualifications": {"min_similarity": 90},
            },
        }
    )

    education = container.education_evaluator()
    experience = container.experience_evaluator()
    skills = container.skill_evaluator()
    qualifications = container.qualification_evaluator()

    assert education.scale.rank("hnd") == 3
    assert experience.scale.rank("Lead") == 3
    assert skills._config.min_similarity == 85
    assert qualifications._config.min_similarity == 90

    verdict = container.engine().evaluate(
        {"minEducation": "bachelor"}, {"educationLevel": "HND"}
    )
    assert verdict.qualified is True


def test_load_config_validation():
    data = {
        "scales": {"grade": {"aliases": {"distinction": "A"}}},
        "evaluators": {"skills": {"min_similarity": 80}},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["scales"]["grade"]["aliases"] == {"distinction": "A"}
    assert settings["evaluators"]["skills"]["min_similarity"] == 80
    assert "education" not in settings["scales"]


def test_load_config_empty_and_invalid():
    assert load_config(None).to_settings() == {}

    with pytest.raises(ValueError):
        load_config(["not", "a", "mapping"])

    with pytest.raises(ValidationError):
        load_config({"scales": {"salary": {}}})


@pytest.mark.parametrize(
    "coverage",
    [{"min_similarty": 80}, {"min_similarity": 150}, {"min_similarity": -1}],
)
def test_coverage_settings_reject_typos_and_out_of_range(coverage):
    with pytest.raises(ValidationError):
        load_config({"evaluators": {"skills": coverage}})

    with pytest.raises(ValidationError):
        create_container(settings={"evaluators": {"qualifications": coverage}})
