from __future__ import annotations

import json
from pathlib import Path

import pytest

from eligibility.adapters import CourseAdapter, JobAdapter
from eligibility.pipeline import (
    AdapterRegistry,
    CandidateLoader,
    CandidateNotFoundError,
    OfferingLoadError,
    OfferingLoader,
)


def build_registry() -> AdapterRegistry:
    return AdapterRegistry([CourseAdapter(), JobAdapter()])


def write_jsonl(path: Path, records: list[object]) -> None:
    path.write_text(
        "\n".join(json.dumps(item, ensure_ascii=False) for item in records),
        encoding="utf-8",
    )


def test_candidate_loader_reads_single_object(tmp_path: Path):
    path = tmp_path / "student.json"
    path.write_text(json.dumps({"uid": "S-1", "grades": {"points": 30}}), encoding="utf-8")

    document = CandidateLoader().load(path)

    assert document["uid"] == "S-1"


def test_candidate_loader_picks_by_id_from_jsonl(tmp_path: Path):
    path = tmp_path / "students.jsonl"
    write_jsonl(path, [{"id": "S-1"}, {"studentId": "S-2", "skills": ["Go"]}])

    document = CandidateLoader().load(path, "S-2")

    assert document["skills"] == ["Go"]


def test_candidate_loader_raises_when_profile_missing(tmp_path: Path):
    path = tmp_path / "students.json"
    path.write_text(json.dumps([{"id": "S-1"}]), encoding="utf-8")

    with pytest.raises(CandidateNotFoundError) as exc:
        CandidateLoader().load(path, "S-9")
    assert "Candidate profile not found" in str(exc.value)
    assert exc.value.candidate_id == "S-9"


def test_candidate_loader_invalid_jsonl_line(tmp_path: Path):
    path = tmp_path / "students.jsonl"
    path.write_text('{"id": "S-1"}\n{invalid', encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        CandidateLoader().load(path)
    assert "line 2" in str(exc.value)


def test_offering_loader_projects_each_kind(tmp_path: Path):
    path = tmp_path / "offerings.jsonl"
    write_jsonl(
        path,
        [
            {"kind": "course", "id": "C-1", "name": "Nursing", "requirements": {"minPoints": 28}},
            {"kind": "job", "payload": {"id": "J-1", "title": "Analyst", "requirements": {"skills": ["SQL"]}}},
        ],
    )

    offerings = OfferingLoader(build_registry()).load(path)

    assert [item.offering_id for item in offerings] == ["C-1", "J-1"]
    assert [item.kind for item in offerings] == ["course", "job"]
    assert offerings[0].requirements.min_points == 28
    assert offerings[1].requirements.required_skills == ("SQL",)


def test_offering_loader_collects_errors_with_partial_results(tmp_path: Path):
    path = tmp_path / "offerings.jsonl"
    path.write_text(
        "\n".join(
            [
                json.dumps({"kind": "course", "id": "C-1", "name": "Law"}),
                json.dumps({"kind": "internship", "id": "I-1"}),
                json.dumps({"id": "X-1"}),
                "{invalid",
            ]
        ),
        encoding="utf-8",
    )

    with pytest.raises(OfferingLoadError) as exc:
        OfferingLoader(build_registry()).load(path)
    error = exc.value
    assert len(error.partial) == 1
    assert "unsupported kind" in error.errors[0]
    assert "missing kind" in error.errors[1]
    assert "invalid JSON" in error.errors[2]


def test_registry_rejects_unknown_kind():
    with pytest.raises(KeyError):
        build_registry().get("scholarship")
