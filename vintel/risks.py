"""Rule-based risk detection over decoded facts and web-search hits.

Matching is plain substring search on lower-cased text, not word-boundary
matching: a snippet mentioning "fire-rated brakes" is flagged ``fire``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterable

from vintel.models import VehicleFacts, WebHit
from vintel.utils import link_domain

logger = logging.getLogger(__name__)

RISK_KEYWORDS: tuple[str, ...] = (
    "salvage",
    "totaled",
    "accident",
    "crash",
    "flood",
    "hail",
    "fire",
    "theft",
    "stolen",
    "copart",
    "iaai",
    "auction",
    "odometer rollback",
    "mileage rollback",
    "write-off",
    "damaged",
    "repairable",
)

MULTIPLE_AUCTIONS = "multiple_auctions"
MIN_AUCTION_HITS = 2

_AUCTION_HOST_RE = re.compile(r"copart|iaai|auction|salvage", re.IGNORECASE)


def _serialize(facts: VehicleFacts | None, web_hits: Iterable[WebHit]) -> str:
    hits = json.dumps([hit.model_dump() for hit in web_hits], ensure_ascii=False)
    record = json.dumps(facts.to_record() if facts else {}, ensure_ascii=False)
    return f"{hits} {record}".lower()


def count_auction_hits(web_hits: Iterable[WebHit]) -> int:
    """Count hits whose link host looks like a vehicle auction site."""
    return sum(1 for hit in web_hits if _AUCTION_HOST_RE.search(link_domain(hit.link)))


def evaluate_risks(
    facts: VehicleFacts | None,
    web_hits: Iterable[WebHit] | None,
) -> frozenset[str]:
    """Return the risk labels found in *facts* and *web_hits*."""
    hits = list(web_hits or [])
    text = _serialize(facts, hits)

    risks = {kw for kw in RISK_KEYWORDS if kw in text}
    auction_hits = count_auction_hits(hits)
    if auction_hits >= MIN_AUCTION_HITS:
        risks.add(MULTIPLE_AUCTIONS)

    logger.debug("Risk scan: %d hits, %d auction hits, labels=%s",
                 len(hits), auction_hits, sorted(risks))
    return frozenset(risks)
