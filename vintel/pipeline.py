"""Vehicle identifier enrichment pipeline.

Runs a fixed sequence of stages over one identifier:
  1. normalize   - classify the input as VIN, plate or unknown
  2. vin_info    - decode the VIN (skipped for other input)
  3. web_search  - search the web for the VIN, plate or raw text
  4. risks       - keyword heuristics over facts and hits
  5. markers     - operator-facing OK/WARN checklist
  6. report      - free-text summary from the LLM

Every stage reads the current :class:`Aggregate` and returns a
:class:`StageResult` carrying either a patch or a typed error. The executor
merges patches in order and stops at the first error, which is raised with
its ``stage`` attribute set. Nothing is retried and no partial report is
produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Protocol

from pydantic import ValidationError as PydanticValidationError

from vintel.exceptions import (
    ExternalServiceError,
    UsageError,
    ValidationError,
    VintelError,
)
from vintel.markers import compute_markers
from vintel.models import (
    Aggregate,
    DecodeResponse,
    InputKind,
    NormalizedInput,
    VehicleFacts,
    WebHit,
)
from vintel.normalize import normalize
from vintel.report import build_report_messages, build_report_payload
from vintel.risks import evaluate_risks
from vintel.vin import is_valid_checksum

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------

class VinDecoder(Protocol):
    def decode_vin(self, vin: str) -> DecodeResponse: ...


class WebSearcher(Protocol):
    def search(self, query: str) -> list[WebHit]: ...


class Summarizer(Protocol):
    def complete(self, messages: list[dict]) -> str: ...


# ---------------------------------------------------------------------------
# Stage results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StageResult:
    """Outcome of one stage: a patch on success, a typed error on failure."""

    stage: str
    patch: dict[str, Any] = field(default_factory=dict)
    error: VintelError | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


StageFn = Callable[[str, Aggregate], StageResult]


class EnrichmentPipeline:
    """Fixed-order enrichment of a single VIN or plate.

    Collaborators are injected so tests can substitute doubles. Each must
    enforce its own bounded timeout; the pipeline places none of its own.
    """

    def __init__(
        self,
        decoder: VinDecoder,
        searcher: WebSearcher,
        summarizer: Summarizer,
        *,
        strict_checksum: bool = False,
    ) -> None:
        self.decoder = decoder
        self.searcher = searcher
        self.summarizer = summarizer
        self.strict_checksum = strict_checksum
        self._stages: tuple[tuple[str, StageFn], ...] = (
            ("normalize", self._normalize),
            ("vin_info", self._vin_info),
            ("web_search", self._web_search),
            ("risks", self._risks),
            ("markers", self._markers),
            ("report", self._report),
        )

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._stages)

    # -- execution ----------------------------------------------------------

    def run(self, query: str) -> Aggregate:
        """Enrich *query* and return the final aggregate."""
        aggregate = Aggregate()
        for _, aggregate in self.iter_stages(query):
            pass
        return aggregate

    def iter_stages(self, query: str) -> Iterator[tuple[StageResult, Aggregate]]:
        """Run the stages one by one, yielding each result and the merged aggregate.

        Invalid input is rejected at the call. A failing stage's error is
        raised as soon as iteration reaches it.
        """
        if query is None:
            raise UsageError("No identifier supplied")
        if not isinstance(query, str):
            raise ValidationError(
                f"Identifier must be a string, got {type(query).__name__}"
            )
        return self._iter_stages(query)

    def _iter_stages(self, query: str) -> Iterator[tuple[StageResult, Aggregate]]:
        aggregate = Aggregate()
        for name, fn in self._stages:
            result = self._execute(name, fn, query, aggregate)
            if not result.ok:
                logger.error("Stage %s failed, aborting run: %s", name, result.error)
                raise result.error
            aggregate = aggregate.apply(result.patch)
            logger.info(
                "Stage %s %s (%s)",
                name,
                "skipped" if result.skipped else "done",
                ", ".join(sorted(result.patch)) or "no fields",
            )
            yield result, aggregate

    def _execute(
        self, name: str, fn: StageFn, query: str, aggregate: Aggregate,
    ) -> StageResult:
        logger.debug("Stage %s starting", name)
        try:
            return fn(query, aggregate)
        except VintelError as exc:
            exc.stage = name
            return StageResult(stage=name, error=exc)

    @staticmethod
    def _call(service: str, fn: Callable[..., Any], *args: Any) -> Any:
        """Invoke a collaborator, translating foreign failures to ExternalServiceError."""
        try:
            return fn(*args)
        except VintelError:
            raise
        except Exception as exc:
            raise ExternalServiceError(
                f"{service} call failed: {exc}", service=service,
            ) from exc

    # -- stages -------------------------------------------------------------

    def _normalize(self, query: str, aggregate: Aggregate) -> StageResult:
        normalized = normalize(query, strict_checksum=self.strict_checksum)
        patch: dict[str, Any] = {"query": query, "normalized": normalized}
        if normalized.kind is InputKind.vin:
            patch["vin"] = normalized.value
            patch["vin_valid"] = is_valid_checksum(normalized.value)
        elif normalized.kind is InputKind.plate:
            patch["plate"] = normalized.value
        return StageResult(stage="normalize", patch=patch)

    def _vin_info(self, query: str, aggregate: Aggregate) -> StageResult:
        if aggregate.kind is not InputKind.vin or not aggregate.vin:
            return StageResult(stage="vin_info", patch={"facts": VehicleFacts()}, skipped=True)

        response = self._call("decode", self.decoder.decode_vin, aggregate.vin)
        if response is None:
            facts = VehicleFacts()
        elif isinstance(response, DecodeResponse):
            facts = response.first_facts()
        elif isinstance(response, Mapping):
            try:
                facts = DecodeResponse.model_validate(response).first_facts()
            except PydanticValidationError as exc:
                raise ExternalServiceError(
                    "decode returned a malformed payload", service="decode",
                ) from exc
        else:
            raise ExternalServiceError(
                f"decode returned {type(response).__name__}", service="decode",
            )

        if facts.is_empty:
            logger.info("VIN %s did not decode", aggregate.vin)
        return StageResult(stage="vin_info", patch={"facts": facts})

    def _web_search(self, query: str, aggregate: Aggregate) -> StageResult:
        if aggregate.kind is InputKind.vin:
            term = aggregate.vin or ""
        else:
            term = aggregate.plate or query.strip()
        if not term:
            return StageResult(stage="web_search", patch={"web_hits": []}, skipped=True)

        raw_hits = self._call("search", self.searcher.search, term)
        return StageResult(stage="web_search", patch={"web_hits": _coerce_hits(raw_hits)})

    def _risks(self, query: str, aggregate: Aggregate) -> StageResult:
        risks = evaluate_risks(aggregate.facts, aggregate.web_hits)
        return StageResult(stage="risks", patch={"risks": risks})

    def _markers(self, query: str, aggregate: Aggregate) -> StageResult:
        normalized = aggregate.normalized or NormalizedInput()
        markers = compute_markers(normalized, aggregate)
        return StageResult(stage="markers", patch={"markers": markers})

    def _report(self, query: str, aggregate: Aggregate) -> StageResult:
        messages = build_report_messages(build_report_payload(aggregate))
        text = self._call("summarize", self.summarizer.complete, messages)
        if not isinstance(text, str):
            raise ExternalServiceError(
                f"summarize returned {type(text).__name__}", service="summarize",
            )
        return StageResult(stage="report", patch={"report": text})


def _coerce_hits(raw_hits: Any) -> list[WebHit]:
    """Accept WebHit objects or plain mappings; anything else is malformed."""
    hits: list[WebHit] = []
    for item in raw_hits or []:
        if isinstance(item, WebHit):
            hits.append(item)
        elif isinstance(item, Mapping):
            try:
                hits.append(WebHit.model_validate(item))
            except PydanticValidationError as exc:
                raise ExternalServiceError(
                    "search returned a malformed hit", service="search",
                ) from exc
        else:
            raise ExternalServiceError(
                f"search returned {type(item).__name__} instead of a hit",
                service="search",
            )
    return hits


def build_pipeline(settings=None) -> EnrichmentPipeline:
    """Wire the default NHTSA, Tavily and LLM collaborators from settings."""
    from vintel.clients.api_clients import NHTSAClient, TavilyClient
    from vintel.llm.adapter import LLMAdapter
    from vintel.settings import get_settings

    settings = settings or get_settings()
    return EnrichmentPipeline(
        decoder=NHTSAClient(
            base_url=settings.nhtsa_base_url,
            timeout=settings.nhtsa_timeout,
        ),
        searcher=TavilyClient(
            api_key=settings.search_api_key,
            base_url=settings.search_base_url,
            timeout=settings.search_timeout,
            max_results=settings.search_max_results,
            search_depth=settings.search_depth,
        ),
        summarizer=LLMAdapter(settings),
        strict_checksum=settings.strict_vin_checksum,
    )
