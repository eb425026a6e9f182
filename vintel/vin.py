"""VIN check digit validation (ISO 3779 / 49 CFR 565).

The ninth character of a VIN is a check digit: each character is
transliterated to a number, multiplied by a positional weight, and the sum
taken modulo 11. A remainder of 10 is written as ``X``.
"""

from __future__ import annotations

import re

VIN_LENGTH = 17
CHECK_DIGIT_INDEX = 8

VIN_RE = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")

# I, O and Q never appear in a VIN.
TRANSLITERATION: dict[str, int] = {
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8,
    "J": 1, "K": 2, "L": 3, "M": 4, "N": 5, "P": 7, "R": 9,
    "S": 2, "T": 3, "U": 4, "V": 5, "W": 6, "X": 7, "Y": 8, "Z": 9,
    **{str(d): d for d in range(10)},
}

WEIGHTS: tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2)

# World manufacturer identifiers starting 1-5 are North American, where the
# check digit is mandatory.
_CHECK_DIGIT_MANDATORY_REGIONS = frozenset("12345")


def is_well_formed(vin: str) -> bool:
    """Return True if *vin* is 17 characters of the VIN alphabet."""
    return isinstance(vin, str) and bool(VIN_RE.match(vin))


def expected_check_digit(vin: str) -> str | None:
    """Compute the check character for *vin*, or ``None`` if it is malformed."""
    if not is_well_formed(vin):
        return None
    total = sum(TRANSLITERATION[ch] * weight for ch, weight in zip(vin, WEIGHTS))
    remainder = total % 11
    return "X" if remainder == 10 else str(remainder)


def is_valid_checksum(vin: str) -> bool:
    """Return True if the ninth character of *vin* matches its check digit."""
    expected = expected_check_digit(vin)
    if expected is None:
        return False
    return vin[CHECK_DIGIT_INDEX] == expected


def check_digit_mandatory(vin: str) -> bool:
    """Return True if the manufacturer region of *vin* requires a valid check digit."""
    return bool(vin) and vin[0] in _CHECK_DIGIT_MANDATORY_REGIONS
