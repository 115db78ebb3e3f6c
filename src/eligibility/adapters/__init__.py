"""Adapters projecting stored portal documents into canonical shapes."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import AttributeSnapshot, Offering
from .portal import CourseAdapter, JobAdapter


@runtime_checkable
class PortalAdapter(Protocol):
    """Role-specific projection contract.

    Course and job eligibility read candidate data from different profile
    locations; each adapter resolves its own location so the engine only ever
    sees one canonical snapshot.
    """

    kind: str

    def project_offering(self, document: dict[str, Any]) -> Offering:
        """Return the offering with its structured requirement set."""

    def project_candidate(self, document: dict[str, Any]) -> AttributeSnapshot | None:
        """Return the candidate snapshot, or ``None`` when no data is recorded."""


__all__ = ["PortalAdapter", "CourseAdapter", "JobAdapter"]
