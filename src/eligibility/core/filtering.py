"""Offering list filtering, search and sorting around eligibility verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping

import pendulum
import structlog
from pendulum.parsing.exceptions import ParserError

from ..schemas import AttributeSnapshot, Offering, OfferingKind
from .eligibility import EligibilityEngine

SortKey = Literal["newest", "oldest", "title", "deadline", "organization"]
GateReason = Literal["eligible", "qualification_unknown", "not_qualified", "closed"]

_logger = structlog.get_logger(__name__)
_DEFAULT_ENGINE = EligibilityEngine()


@dataclass(frozen=True, slots=True)
class OfferingQuery:
    """Caller display policy applied after eligibility annotation."""

    search: str | None = None
    sort_by: SortKey | None = None
    eligible_only: bool = False
    open_only: bool = False
    kind: OfferingKind | None = None
    organization_id: str | None = None
    limit: int | None = None


@dataclass(frozen=True, slots=True)
class ApplicationGate:
    allowed: bool
    reason: GateReason


def filter_offerings(
    offerings: Iterable[Offering | Mapping[str, Any]],
    candidate: AttributeSnapshot | Mapping[str, Any] | None = None,
    *,
    eligible_only: bool = False,
    engine: EligibilityEngine | None = None,
) -> list[Offering]:
    """Attach a verdict to each offering for ``candidate``.

    Without a candidate the offerings pass through untouched and carry no
    verdict ("qualification unknown"). Non-qualifying offerings are dropped only
    when ``eligible_only`` is set; otherwise they stay, annotated, for badge
    display.
    """
    items = [_as_offering(item) for item in offerings]
    if candidate is None:
        return items

    engine = engine or _DEFAULT_ENGINE
    snapshot = (
        candidate
        if isinstance(candidate, AttributeSnapshot)
        else AttributeSnapshot.model_validate(dict(candidate))
    )

    annotated: list[Offering] = []
    for offering in items:
        verdict = engine.evaluate(offering.requirements, snapshot)
        if eligible_only and not verdict.qualified:
            continue
        annotated.append(offering.with_verdict(verdict))

    _logger.debug(
        "offerings.filtered",
        total=len(items),
        kept=len(annotated),
        eligible_only=eligible_only,
    )
    return annotated


def apply_query(
    offerings: Iterable[Offering],
    query: OfferingQuery,
    *,
    as_of: pendulum.DateTime | str | None = None,
) -> list[Offering]:
    """Apply kind, organization, open, search, sort and limit in that order."""
    reference = _resolve_as_of(as_of)
    results = list(offerings)

    if query.eligible_only:
        results = [item for item in results if item.verdict is None or item.verdict.qualified]
    if query.kind:
        results = [item for item in results if item.kind == query.kind]
    if query.organization_id:
        results = [item for item in results if item.organization_id == query.organization_id]
    if query.open_only:
        results = [item for item in results if is_accepting_applications(item, as_of=reference)]
    if query.search:
        results = search_offerings(results, query.search)
    if query.sort_by:
        results = sort_offerings(results, query.sort_by)
    if query.limit is not None:
        results = results[: max(query.limit, 0)]
    return results


def search_offerings(offerings: Iterable[Offering], term: str) -> list[Offering]:
    needle = term.strip().casefold()
    if not needle:
        return list(offerings)
    return [item for item in offerings if needle in _search_text(item)]


def sort_offerings(offerings: Iterable[Offering], sort_by: SortKey) -> list[Offering]:
    items = list(offerings)
    if sort_by == "title":
        return sorted(items, key=lambda item: item.title.casefold())
    if sort_by == "organization":
        return sorted(
            items,
            key=lambda item: (item.organization_name is None, (item.organization_name or "").casefold()),
        )
    if sort_by == "deadline":
        return _sort_by_timestamp(items, "deadline", newest_first=False)
    if sort_by == "newest":
        return _sort_by_timestamp(items, "created_at", newest_first=True)
    if sort_by == "oldest":
        return _sort_by_timestamp(items, "created_at", newest_first=False)
    raise ValueError(f"Unsupported sort key: {sort_by!r}")


def is_accepting_applications(
    offering: Offering,
    *,
    as_of: pendulum.DateTime | str | None = None,
) -> bool:
    if offering.status != "active":
        return False
    deadline = _parse_timestamp(offering.deadline)
    if deadline is None:
        return True
    return deadline >= _resolve_as_of(as_of)


def application_gate(
    offering: Offering,
    *,
    as_of: pendulum.DateTime | str | None = None,
) -> ApplicationGate:
    """Decide whether the apply action is available for an annotated offering."""
    if not is_accepting_applications(offering, as_of=as_of):
        return ApplicationGate(allowed=False, reason="closed")
    if offering.verdict is None:
        return ApplicationGate(allowed=True, reason="qualification_unknown")
    if not offering.verdict.qualified:
        return ApplicationGate(allowed=False, reason="not_qualified")
    return ApplicationGate(allowed=True, reason="eligible")


class OfferingPipeline:
    """Pure (offerings, candidate, query) -> display list pipeline."""

    def __init__(self, engine: EligibilityEngine | None = None) -> None:
        self._engine = engine or _DEFAULT_ENGINE

    def run(
        self,
        offerings: Iterable[Offering | Mapping[str, Any]],
        candidate: AttributeSnapshot | Mapping[str, Any] | None = None,
        query: OfferingQuery | None = None,
        *,
        as_of: pendulum.DateTime | str | None = None,
    ) -> list[Offering]:
        query = query or OfferingQuery()
        annotated = filter_offerings(
            offerings,
            candidate,
            eligible_only=query.eligible_only,
            engine=self._engine,
        )
        return apply_query(annotated, query, as_of=as_of)


def _as_offering(item: Offering | Mapping[str, Any]) -> Offering:
    if isinstance(item, Offering):
        return item
    return Offering.model_validate(dict(item))


def _search_text(offering: Offering) -> str:
    parts = [offering.title, offering.description, offering.organization_name or ""]
    requirements = offering.requirements
    if requirements is not None:
        parts.extend(requirements.required_subjects)
        parts.extend(requirements.required_skills)
        parts.extend(requirements.required_qualifications)
    return " ".join(parts).casefold()


def _sort_by_timestamp(items: list[Offering], attribute: str, *, newest_first: bool) -> list[Offering]:
    dated: list[tuple[pendulum.DateTime, Offering]] = []
    undated: list[Offering] = []
    for item in items:
        parsed = _parse_timestamp(getattr(item, attribute))
        if parsed is None:
            undated.append(item)
        else:
            dated.append((parsed, item))
    dated.sort(key=lambda pair: pair[0], reverse=newest_first)
    return [item for _, item in dated] + undated


def _parse_timestamp(value: str | None) -> pendulum.DateTime | None:
    if not value:
        return None
    try:
        parsed = pendulum.parse(value)
    except (ValueError, ParserError):
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return None


def _resolve_as_of(as_of: pendulum.DateTime | str | None) -> pendulum.DateTime:
    if isinstance(as_of, pendulum.DateTime):
        return as_of
    if isinstance(as_of, str):
        parsed = _parse_timestamp(as_of)
        if parsed is not None:
            return parsed
    return pendulum.now()


__all__ = [
    "ApplicationGate",
    "OfferingPipeline",
    "OfferingQuery",
    "apply_query",
    "application_gate",
    "filter_offerings",
    "is_accepting_applications",
    "search_offerings",
    "sort_offerings",
]
