"""Operator-facing OK/WARN markers derived from earlier stage outputs."""

from __future__ import annotations

from vintel.models import Aggregate, InputKind, MarkerEntry, NormalizedInput


def compute_markers(
    normalized: NormalizedInput,
    aggregate: Aggregate,
) -> dict[str, MarkerEntry]:
    """Build the marker checklist for one run.

    Each rule is independent. ``vin_checksum`` and ``vin_decoded`` only
    appear for VIN input.
    """
    markers: dict[str, MarkerEntry] = {}

    markers["input_type"] = MarkerEntry(
        ok=normalized.kind is not InputKind.unknown,
        note=normalized.kind.value,
    )

    if normalized.kind is InputKind.vin:
        markers["vin_checksum"] = MarkerEntry(
            ok=bool(aggregate.vin_valid),
            note=aggregate.vin or normalized.value,
        )
        decoded = bool(aggregate.facts and aggregate.facts.model)
        markers["vin_decoded"] = MarkerEntry(
            ok=decoded,
            note="decoded" if decoded else "no decode",
        )

    hits = aggregate.web_hits or []
    markers["web_presence"] = MarkerEntry(
        ok=bool(hits),
        note=f"{len(hits)} hits" if hits else "no hits",
    )

    risks = sorted(aggregate.risks or ())
    markers["risk_flags"] = MarkerEntry(
        ok=not risks,
        note=", ".join(risks) if risks else "none",
    )

    return markers
