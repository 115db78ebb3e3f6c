"""Eligibility matching engine for course and job offerings."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import EligibilityEngine, OfferingPipeline, OfferingQuery, evaluate, filter_offerings
from .schemas import AttributeSnapshot, EligibilityVerdict, Offering, RequirementSet

__all__ = [
    "AttributeSnapshot",
    "EligibilityEngine",
    "EligibilityVerdict",
    "Offering",
    "OfferingPipeline",
    "OfferingQuery",
    "RequirementSet",
    "__version__",
    "evaluate",
    "filter_offerings",
]
