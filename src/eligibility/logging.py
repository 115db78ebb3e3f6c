"""Logging utilities for the eligibility engine."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


@contextmanager
def candidate_context(candidate_id: str | None, **extra: object) -> Iterator[None]:
    """Tag every event logged inside the block with the candidate being checked."""
    with structlog.contextvars.bound_contextvars(candidate_id=candidate_id, **extra):
        yield
