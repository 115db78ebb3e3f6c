"""Batch eligibility pipeline assembly and execution."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, List, Mapping

import pendulum
import structlog

from . import __version__
from .adapters import PortalAdapter
from .core import EligibilityEngine, OfferingQuery, application_gate, apply_query, filter_offerings
from .logging import candidate_context
from .schemas import AttributeSnapshot, Offering

_CANDIDATE_ID_KEYS = ("id", "uid", "candidate_id", "studentId")


class AdapterRegistry:
    """Registry mapping offering kinds to portal adapters."""

    def __init__(self, adapters: Iterable[PortalAdapter]):
        self._adapters = {adapter.kind: adapter for adapter in adapters}

    def get(self, kind: str) -> PortalAdapter:
        try:
            return self._adapters[kind]
        except KeyError as exc:
            raise KeyError(f"Unsupported offering kind: {kind!r}") from exc

    def kinds(self) -> List[str]:
        return list(self._adapters.keys())


class OfferingLoadError(ValueError):
    """Raised when offering loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Offering]):
        super().__init__("Offering loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Offering loading failed: {self.errors}"


class CandidateNotFoundError(LookupError):
    """Raised when the requested candidate profile is not present."""

    def __init__(self, candidate_id: str | None):
        self.candidate_id = candidate_id
        label = repr(candidate_id) if candidate_id else "any"
        super().__init__(f"Candidate profile not found: {label}")


class CandidateLoader:
    """Load one raw candidate profile document from JSON or JSONL."""

    def load(self, path: Path, candidate_id: str | None = None) -> dict[str, Any]:
        documents = self._read_documents(path)
        if candidate_id is None:
            if not documents:
                raise CandidateNotFoundError(None)
            return documents[0]
        for document in documents:
            if any(str(document.get(key)) == candidate_id for key in _CANDIDATE_ID_KEYS if key in document):
                return document
        raise CandidateNotFoundError(candidate_id)

    @staticmethod
    def _read_documents(path: Path) -> list[dict[str, Any]]:
        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            documents = []
            for idx, line in enumerate(text.splitlines(), start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    documents.append(json.loads(raw))
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Invalid candidate JSON on line {idx}: {exc}") from exc
        else:
            documents = data if isinstance(data, list) else [data]
        return [document for document in documents if isinstance(document, dict)]


class OfferingLoader:
    """Load offering documents (JSONL) through the adapter for their kind."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path) -> list[Offering]:
        offerings: list[Offering] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: record must be a JSON object")
                    continue
                kind = record.get("kind")
                if not kind:
                    errors.append(f"line {idx}: missing kind field")
                    continue
                try:
                    adapter = self._registry.get(kind)
                except KeyError:
                    errors.append(f"line {idx}: unsupported kind '{kind}'")
                    continue
                payload = record.get("payload", record)
                try:
                    offering = adapter.project_offering(payload)
                except Exception as exc:  # noqa: BLE001
                    errors.append(f"line {idx}: {exc}")
                    continue
                offerings.append(offering)
        if errors:
            raise OfferingLoadError(errors, offerings)
        return offerings


class OutputWriter:
    """Persist eligibility results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class EligibilityPipeline:
    """End-to-end eligibility orchestrator for one candidate."""

    def __init__(
        self,
        *,
        engine: EligibilityEngine,
        registry: AdapterRegistry,
        candidate_loader: CandidateLoader | None = None,
        offering_loader: OfferingLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._registry = registry
        self._candidates = candidate_loader or CandidateLoader()
        self._offerings = offering_loader or OfferingLoader(registry)
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def project_snapshots(self, candidate_document: Mapping[str, Any]) -> dict[str, AttributeSnapshot | None]:
        """Project the raw profile once per offering kind."""
        return {
            kind: self._registry.get(kind).project_candidate(candidate_document)
            for kind in self._registry.kinds()
        }

    def annotate(
        self,
        candidate_document: Mapping[str, Any],
        offerings: Iterable[Offering],
        query: OfferingQuery | None = None,
        *,
        as_of: pendulum.DateTime | str | None = None,
    ) -> list[Offering]:
        query = query or OfferingQuery()
        snapshots = self.project_snapshots(candidate_document)
        annotated: list[Offering] = []
        for offering in offerings:
            annotated.extend(
                filter_offerings(
                    [offering],
                    snapshots.get(offering.kind),
                    eligible_only=query.eligible_only,
                    engine=self._engine,
                )
            )
        return apply_query(annotated, query, as_of=as_of)

    def run(
        self,
        *,
        candidate_path: Path,
        offerings_path: Path,
        output_path: Path,
        candidate_id: str | None = None,
        query: OfferingQuery | None = None,
        as_of: str | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict]:
        query = query or OfferingQuery()
        candidate_document = self._candidates.load(candidate_path, candidate_id)
        resolved_id = candidate_id or _candidate_identifier(candidate_document)

        load_errors: list[str] = []
        try:
            offerings = self._offerings.load(offerings_path)
        except OfferingLoadError as exc:
            offerings = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("offerings.partial_load", errors=exc.errors)

        serialized_results: list[dict] = []
        with candidate_context(resolved_id, offering_count=len(offerings)):
            results = self.annotate(candidate_document, offerings, query, as_of=as_of)
            for offering in results:
                entry = serialize_result(offering, as_of=as_of)
                serialized_results.append(entry)

                if audit_logger:
                    audit_logger.append(
                        {
                            "candidate_id": resolved_id,
                            "offering_id": offering.offering_id,
                            "kind": offering.kind,
                            "eligibility_status": entry["eligibility_status"],
                            "missing": entry["verdict"]["missing"] if entry["verdict"] else [],
                            "application": entry["application"],
                        }
                    )

                self._logger.info(
                    "eligibility.result",
                    offering_id=offering.offering_id,
                    kind=offering.kind,
                    eligibility_status=entry["eligibility_status"],
                    missing_count=len(offering.verdict.missing) if offering.verdict else 0,
                )

        metadata = {
            "candidate_id": resolved_id,
            "offering_count": len(offerings),
            "result_count": len(serialized_results),
            "query": asdict(query),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "results": serialized_results})
        return serialized_results


def serialize_result(offering: Offering, *, as_of: pendulum.DateTime | str | None = None) -> dict[str, Any]:
    verdict = offering.verdict
    if verdict is None:
        status = "unknown"
    else:
        status = "qualified" if verdict.qualified else "not_qualified"
    gate = application_gate(offering, as_of=as_of)
    return {
        "offering": offering.model_dump(mode="json", exclude={"verdict"}),
        "eligibility_status": status,
        "verdict": verdict.to_dict() if verdict else None,
        "application": {"allowed": gate.allowed, "reason": gate.reason},
    }


def _candidate_identifier(document: Mapping[str, Any]) -> str | None:
    for key in _CANDIDATE_ID_KEYS:
        value = document.get(key)
        if value:
            return str(value)
    return None
