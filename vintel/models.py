"""Pydantic v2 models for the enrichment pipeline and its collaborators."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InputKind(str, Enum):
    """Classification of a raw identifier."""
    vin = "vin"
    plate = "plate"
    unknown = "unknown"


class NormalizedInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: InputKind = InputKind.unknown
    value: str = ""


# ---------------------------------------------------------------------------
# Collaborator DTOs
# ---------------------------------------------------------------------------

class VehicleFacts(BaseModel):
    """Decoded vehicle attributes, keyed by their NHTSA vPIC names.

    Every field is optional; an attribute that did not decode is ``None``.
    vPIC reports unknown attributes as empty strings, which are treated the
    same way.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", protected_namespaces=()
    )

    make: str | None = Field(default=None, alias="Make")
    model: str | None = Field(default=None, alias="Model")
    model_year: str | None = Field(default=None, alias="ModelYear")
    body_class: str | None = Field(default=None, alias="BodyClass")
    vehicle_type: str | None = Field(default=None, alias="VehicleType")
    plant_country: str | None = Field(default=None, alias="PlantCountry")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def to_record(self) -> dict[str, str]:
        """Return the decoded attributes by vPIC name, omitting absent ones."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.to_record()


class DecodeResponse(BaseModel):
    """Response of the vPIC ``DecodeVinValues`` endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    count: int | None = Field(default=None, alias="Count")
    message: str | None = Field(default=None, alias="Message")
    results: list[VehicleFacts] = Field(default_factory=list, alias="Results")

    def first_facts(self) -> VehicleFacts:
        """Facts from the first result entry, or empty facts if there is none."""
        return self.results[0] if self.results else VehicleFacts()


class WebHit(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    link: str = ""
    snippet: str = ""

    @field_validator("title", "link", "snippet", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v):
        return v if v is not None else ""


class SearchResult(BaseModel):
    """One entry of a Tavily ``/search`` response."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    url: str | None = None
    content: str | None = None
    score: float | None = None

    def to_hit(self) -> WebHit:
        return WebHit(title=self.title, link=self.url, snippet=self.content)


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    query: str | None = None
    results: list[SearchResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Pipeline state
# ---------------------------------------------------------------------------

class MarkerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    note: str = ""


class Aggregate(BaseModel):
    """Accumulated state of one pipeline run.

    Instances are frozen. Stages read an aggregate and return a patch; the
    executor calls :meth:`apply` to obtain the next aggregate. A field, once
    set, is only ever overwritten with a new value and never cleared.
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    normalized: NormalizedInput | None = None
    vin: str | None = None
    plate: str | None = None
    vin_valid: bool | None = None
    facts: VehicleFacts | None = None
    web_hits: list[WebHit] | None = None
    risks: frozenset[str] | None = None
    markers: dict[str, MarkerEntry] | None = None
    report: str | None = None

    def apply(self, patch: Mapping[str, Any]) -> Aggregate:
        """Return a copy with *patch* shallow-merged in.

        Unknown field names raise ``ValueError``. ``None`` values are
        ignored so a patch can never erase an earlier stage's output.
        """
        unknown = set(patch) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown aggregate field(s): {sorted(unknown)}")
        update = {k: v for k, v in patch.items() if v is not None}
        if not update:
            return self
        return self.model_copy(update=update)

    @property
    def kind(self) -> InputKind:
        return self.normalized.kind if self.normalized else InputKind.unknown
