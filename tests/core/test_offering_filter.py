from __future__ import annotations

from typing import Any

import pendulum
import pytest

from eligibility.core import (
    OfferingPipeline,
    OfferingQuery,
    application_gate,
    apply_query,
    filter_offerings,
    is_accepting_applications,
)
from eligibility.schemas import AttributeSnapshot, Offering

AS_OF = pendulum.datetime(2025, 6, 1)


def build_offering(offering_id: str, **kwargs: Any) -> Offering:
    defaults: dict[str, Any] = {"offering_id": offering_id, "title": f"Offering {offering_id}"}
    defaults.update(kwargs)
    return Offering(**defaults)


def build_catalog() -> list[Offering]:
    return [
        build_offering(
            "CS-101",
            title="Computer Science",
            organization_id="INST-1",
            organization_name="Maseru Polytechnic",
            created_at="2025-03-01",
            deadline="2025-07-01",
            requirements={"minPoints": 30, "subjects": ["Mathematics"]},
        ),
        build_offering(
            "ART-200",
            title="Fine Art",
            organization_id="INST-2",
            organization_name="Arts Academy",
            created_at="2025-05-01",
            deadline="2025-05-15",
        ),
        build_offering(
            "ENG-300",
            title="Civil Engineering",
            organization_id="INST-1",
            organization_name="Maseru Polytechnic",
            created_at="2025-01-10",
            requirements={"minGrade": "A"},
        ),
    ]


def build_student() -> AttributeSnapshot:
    return AttributeSnapshot(points=35, overall_grade="B", subjects={"Mathematics": "A"})


def test_no_candidate_is_pass_through():
    catalog = build_catalog()

    result = filter_offerings(catalog, None, eligible_only=True)

    assert result == catalog
    assert all(item.verdict is None for item in result)


def test_candidate_annotates_every_offering_in_input_order():
    catalog = build_catalog()

    result = filter_offerings(catalog, build_student())

    assert [item.offering_id for item in result] == ["CS-101", "ART-200", "ENG-300"]
    assert [item.verdict.qualified for item in result] == [True, True, False]
    assert all(item.verdict is None for item in catalog)


def test_eligible_only_output_is_qualified_subset():
    catalog = build_catalog()

    result = filter_offerings(catalog, build_student(), eligible_only=True)

    assert {item.offering_id for item in result} <= {item.offering_id for item in catalog}
    assert result
    assert all(item.verdict.qualified for item in result)
    assert "ENG-300" not in {item.offering_id for item in result}


def test_filter_accepts_raw_mappings():
    result = filter_offerings(
        [{"id": "JOB-1", "kind": "job", "title": "Dev", "requirements": {"requiredSkills": ["React"]}}],
        {"skills": ["React Native"]},
    )

    assert result[0].offering_id == "JOB-1"
    assert result[0].verdict.qualified is True


def test_apply_query_search_matches_title_organization_and_requirements():
    catalog = build_catalog()

    assert [item.offering_id for item in apply_query(catalog, OfferingQuery(search="ENGINEERING"), as_of=AS_OF)] == [
        "ENG-300"
    ]
    assert [item.offering_id for item in apply_query(catalog, OfferingQuery(search="polytechnic"), as_of=AS_OF)] == [
        "CS-101",
        "ENG-300",
    ]
    assert [item.offering_id for item in apply_query(catalog, OfferingQuery(search="mathematics"), as_of=AS_OF)] == [
        "CS-101"
    ]


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        ("newest", ["ART-200", "CS-101", "ENG-300"]),
        ("oldest", ["ENG-300", "CS-101", "ART-200"]),
        ("title", ["ENG-300", "CS-101", "ART-200"]),
        ("deadline", ["ART-200", "CS-101", "ENG-300"]),
        ("organization", ["ART-200", "CS-101", "ENG-300"]),
    ],
)
def test_apply_query_sorting(sort_by, expected):
    result = apply_query(build_catalog(), OfferingQuery(sort_by=sort_by), as_of=AS_OF)

    assert [item.offering_id for item in result] == expected


def test_apply_query_filters_and_limit():
    catalog = build_catalog()

    by_org = apply_query(catalog, OfferingQuery(organization_id="INST-1", limit=1), as_of=AS_OF)
    open_only = apply_query(catalog, OfferingQuery(open_only=True), as_of=AS_OF)
    jobs = apply_query(catalog, OfferingQuery(kind="job"), as_of=AS_OF)

    assert [item.offering_id for item in by_org] == ["CS-101"]
    assert [item.offering_id for item in open_only] == ["CS-101", "ENG-300"]
    assert jobs == []


def test_apply_query_eligible_only_keeps_unknown_verdicts():
    catalog = build_catalog()
    annotated = filter_offerings(catalog[:2], build_student()) + [catalog[2]]

    result = apply_query(annotated, OfferingQuery(eligible_only=True), as_of=AS_OF)

    assert [item.offering_id for item in result] == ["CS-101", "ART-200", "ENG-300"]


def test_offering_pipeline_is_a_pure_function_of_its_inputs():
    pipeline = OfferingPipeline()
    query = OfferingQuery(eligible_only=True, sort_by="title")

    first = pipeline.run(build_catalog(), build_student(), query, as_of=AS_OF)
    second = pipeline.run(build_catalog(), build_student(), query, as_of=AS_OF)

    assert [item.offering_id for item in first] == ["CS-101", "ART-200"]
    assert first == second


def test_is_accepting_applications_checks_status_and_deadline():
    assert is_accepting_applications(build_offering("A", deadline="2025-06-01"), as_of=AS_OF) is True
    assert is_accepting_applications(build_offering("B", deadline="2025-05-31"), as_of=AS_OF) is False
    assert is_accepting_applications(build_offering("C"), as_of=AS_OF) is True
    assert is_accepting_applications(build_offering("D", status="Closed"), as_of=AS_OF) is False
    assert is_accepting_applications(build_offering("E", deadline="someday"), as_of="2025-06-01") is True


def test_application_gate_reasons():
    student = build_student()
    qualified, _, failed = filter_offerings(build_catalog(), student)

    assert application_gate(qualified, as_of=AS_OF).reason == "eligible"
    assert application_gate(failed, as_of=AS_OF).allowed is False
    assert application_gate(failed, as_of=AS_OF).reason == "not_qualified"
    assert application_gate(build_catalog()[0], as_of=AS_OF).reason == "qualification_unknown"
    assert application_gate(build_catalog()[0], as_of=AS_OF).allowed is True
    assert application_gate(build_catalog()[1], as_of=AS_OF).reason == "closed"


def test_filter_tolerates_malformed_offering_documents():
    result = filter_offerings(
        [
            {"title": "Untitled course", "requirements": {"minPoints": 10}},
            {"id": "O-1", "kind": "internship"},
            {"id": "O-2", "verdict": "stale", "createdAt": {"seconds": 1e20}},
        ],
        {"points": 20},
    )

    assert [item.offering_id for item in result] == ["", "O-1", "O-2"]
    assert result[1].kind == "course"
    assert result[2].created_at is None
    assert all(item.verdict.qualified for item in result)
