"""Classify a raw identifier as a VIN, a licence plate, or unknown."""

from __future__ import annotations

import re

from vintel.models import InputKind, NormalizedInput
from vintel.vin import check_digit_mandatory, is_valid_checksum, is_well_formed

# Latin letters, digits, and the Cyrillic letters used on Ukrainian and
# Russian plates. Everything else (spaces, hyphens, dots) is dropped.
_NOT_IDENTIFIER_CHAR = re.compile(r"[^A-Z0-9А-ЯЁІЇЄҐ]")
_PLATE_RE = re.compile(r"^[A-Z0-9А-ЯЁІЇЄҐ]{5,10}$")


def clean(raw: str | None) -> str:
    """Trim, upper-case and strip every non-identifier character."""
    return _NOT_IDENTIFIER_CHAR.sub("", (raw or "").strip().upper())


def is_vin(value: str, *, strict_checksum: bool = False) -> bool:
    """Return True if *value* should be treated as a VIN.

    The check digit is enforced where it is mandatory, or everywhere when
    *strict_checksum* is set.

    Outside North America (first character other than ``1``-``5``) the check
    digit is optional, so by default a well-formed VIN is accepted even when
    its checksum fails: ``WVWZZZ1JZXW000001`` is a VIN with
    ``vin_valid=False``, not unknown input. This intentionally relaxes the
    rule that a VIN classification implies a passing checksum.
    """
    if not is_well_formed(value):
        return False
    if strict_checksum or check_digit_mandatory(value):
        return is_valid_checksum(value)
    return True


def normalize(raw: str | None, *, strict_checksum: bool = False) -> NormalizedInput:
    """Normalize *raw* and classify it. Never raises."""
    value = clean(raw)
    if is_vin(value, strict_checksum=strict_checksum):
        return NormalizedInput(kind=InputKind.vin, value=value)
    if _PLATE_RE.match(value):
        return NormalizedInput(kind=InputKind.plate, value=value)
    return NormalizedInput(kind=InputKind.unknown, value=value)
