"""Pydantic schema definitions for offerings, requirements and candidates."""

from __future__ import annotations

from .offering import Offering, OfferingKind
from .requirements import REQUIREMENT_FIELDS, RequirementSet
from .snapshot import AttributeSnapshot
from .verdict import DEFAULT_SUGGESTIONS, NO_REQUIREMENTS, EligibilityVerdict, RequirementCheck

__all__ = [
    "AttributeSnapshot",
    "DEFAULT_SUGGESTIONS",
    "EligibilityVerdict",
    "NO_REQUIREMENTS",
    "Offering",
    "OfferingKind",
    "REQUIREMENT_FIELDS",
    "RequirementCheck",
    "RequirementSet",
]
