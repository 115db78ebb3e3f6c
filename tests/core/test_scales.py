from __future__ import annotations

import pytest

from eligibility.core.scales import (
    EDUCATION_SCALE,
    EXPERIENCE_SCALE,
    GRADE_SCALE,
    UNKNOWN_RANK,
    OrdinalScale,
)


@pytest.mark.parametrize(
    ("label", "expected"),
    [("F", 0), ("E", 1), ("D", 2), ("C", 3), ("B", 4), ("A", 5), ("a", 5), (" b ", 4)],
)
def test_grade_scale_ranks(label, expected):
    assert GRADE_SCALE.rank(label) == expected


def test_grade_modifiers_are_ignored():
    assert GRADE_SCALE.rank("B+") == GRADE_SCALE.rank("B")
    assert GRADE_SCALE.rank("A-") == GRADE_SCALE.rank("A")


def test_unknown_and_absent_labels_rank_lowest():
    assert GRADE_SCALE.rank("Z") == UNKNOWN_RANK
    assert GRADE_SCALE.rank(None) == UNKNOWN_RANK
    assert EDUCATION_SCALE.rank("kindergarten") == UNKNOWN_RANK
    assert EXPERIENCE_SCALE.rank(42) == UNKNOWN_RANK
    assert EDUCATION_SCALE.rank("kindergarten") < EDUCATION_SCALE.rank("high-school")


def test_education_scale_folds_separators_and_aliases():
    assert EDUCATION_SCALE.normalize("High School") == "high-school"
    assert EDUCATION_SCALE.normalize("high_school") == "high-school"
    assert EDUCATION_SCALE.normalize("Bachelor's") == "bachelor"
    assert EDUCATION_SCALE.normalize("Masters") == "master"
    assert EDUCATION_SCALE.normalize("Doctorate") == "phd"
    assert EDUCATION_SCALE.rank("PhD") == 5


def test_diploma_shares_associate_tier():
    assert EDUCATION_SCALE.rank("diploma") == EDUCATION_SCALE.rank("associate") == 2
    assert EDUCATION_SCALE.rank("diploma") < EDUCATION_SCALE.rank("bachelor")


def test_experience_scale_order_and_aliases():
    ranks = [EXPERIENCE_SCALE.rank(label) for label in ("entry", "mid", "senior", "executive")]
    assert ranks == [1, 2, 3, 4]
    assert EXPERIENCE_SCALE.normalize("Entry Level") == "entry"
    assert EXPERIENCE_SCALE.normalize("senior_level") == "senior"
    assert EXPERIENCE_SCALE.normalize("Junior") == "entry"


def test_lowest_and_labels():
    assert EDUCATION_SCALE.lowest == "high-school"
    assert EXPERIENCE_SCALE.lowest == "entry"
    assert GRADE_SCALE.labels() == ["f", "e", "d", "c", "b", "a"]


def test_with_overrides_returns_new_scale():
    custom = EDUCATION_SCALE.with_overrides(ranks={"diploma": 3}, aliases={"HND": "diploma"})

    assert custom.rank("diploma") == 3
    assert custom.rank("hnd") == 3
    assert EDUCATION_SCALE.rank("diploma") == 2
    assert EDUCATION_SCALE.rank("hnd") == UNKNOWN_RANK


def test_scale_tables_are_read_only():
    scale = OrdinalScale(name="tiers", ranks={"Low": 1, "High": 2})

    with pytest.raises(TypeError):
        scale.ranks["low"] = 5  # type: ignore[index]
    assert scale.rank("LOW") == 1
