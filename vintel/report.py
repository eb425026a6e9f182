"""Report payload construction for the summarisation collaborator."""

from __future__ import annotations

import json
from typing import Any

from vintel.llm.prompts import REPORT_SYSTEM_PROMPT, REPORT_USER_PROMPT
from vintel.models import Aggregate

MAX_REPORT_HITS = 8


def build_report_payload(aggregate: Aggregate) -> dict[str, Any]:
    """Collect identifiers, facts, markers and the top hits for the report."""
    facts = aggregate.facts.to_record() if aggregate.facts else {}
    markers = {
        name: entry.model_dump() for name, entry in (aggregate.markers or {}).items()
    }
    hits = [hit.model_dump() for hit in (aggregate.web_hits or [])[:MAX_REPORT_HITS]]
    return {
        "vin": aggregate.vin,
        "plate": aggregate.plate,
        "facts": facts,
        "markers": markers,
        "hits": hits,
    }


def build_report_messages(payload: dict[str, Any]) -> list[dict[str, str]]:
    """Wrap *payload* in the system instruction and a single user message."""
    user = REPORT_USER_PROMPT.format(
        payload=json.dumps(payload, ensure_ascii=False, default=str),
    )
    return [
        {"role": "system", "content": REPORT_SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]
