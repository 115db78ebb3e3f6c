"""Provider-neutral offering document (course or job posting)."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from .fields import optional_label, timestamp_text
from .requirements import RequirementSet
from .verdict import EligibilityVerdict

OfferingKind = Literal["course", "job"]


def _text(value: Any) -> str:
    return optional_label(value) or ""


def _status(value: Any) -> str:
    return (optional_label(value) or "active").lower()


def _kind(value: Any) -> str:
    # Unrecognised kinds are read as courses, the portal's default listing.
    kind = (optional_label(value) or "").lower()
    return kind if kind in ("course", "job") else "course"


def _verdict(value: Any) -> Any:
    return value if isinstance(value, EligibilityVerdict) else None


def _requirements(value: Any) -> Any:
    # Free-text requirement lists carry no structured constraint.
    if value is None or isinstance(value, (RequirementSet, dict)):
        return value
    return None


class Offering(BaseModel):
    """Course or job posting carrying an optional requirement set."""

    offering_id: Annotated[str, BeforeValidator(_text)] = Field(
        default="", validation_alias=AliasChoices("offering_id", "id", "offeringId")
    )
    kind: Annotated[OfferingKind, BeforeValidator(_kind)] = "course"
    title: Annotated[str, BeforeValidator(_text)] = Field(
        default="", validation_alias=AliasChoices("title", "name")
    )
    description: Annotated[str, BeforeValidator(_text)] = ""
    organization_id: Annotated[str | None, BeforeValidator(optional_label)] = None
    organization_name: Annotated[str | None, BeforeValidator(optional_label)] = None
    status: Annotated[str, BeforeValidator(_status)] = "active"
    deadline: Annotated[str | None, BeforeValidator(timestamp_text)] = None
    created_at: Annotated[str | None, BeforeValidator(timestamp_text)] = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    requirements: Annotated[RequirementSet | None, BeforeValidator(_requirements)] = None
    verdict: Annotated[EligibilityVerdict | None, BeforeValidator(_verdict)] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    def with_verdict(self, verdict: EligibilityVerdict) -> "Offering":
        return self.model_copy(update={"verdict": verdict})


__all__ = ["Offering", "OfferingKind"]
