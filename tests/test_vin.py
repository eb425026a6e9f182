"""Tests for VIN check digit validation (vintel/vin.py)."""

from __future__ import annotations

import pytest

from vintel.vin import (
    TRANSLITERATION,
    WEIGHTS,
    check_digit_mandatory,
    expected_check_digit,
    is_valid_checksum,
    is_well_formed,
)

HONDA_VIN = "1HGCM82633A004352"


class TestReferenceVins:
    @pytest.mark.parametrize("vin", [
        HONDA_VIN,
        "1M8GDM9AXKP042788",   # remainder 10 -> X
        "11111111111111111",
    ])
    def test_known_valid(self, vin):
        assert is_valid_checksum(vin) is True

    @pytest.mark.parametrize("wrong", [c for c in "0123456789X" if c != "3"])
    def test_flipped_check_digit_is_invalid(self, wrong):
        vin = HONDA_VIN[:8] + wrong + HONDA_VIN[9:]
        assert is_valid_checksum(vin) is False

    def test_expected_digit_for_reference_vin(self):
        assert expected_check_digit(HONDA_VIN) == "3"

    def test_remainder_ten_maps_to_x(self):
        assert expected_check_digit("1M8GDM9AXKP042788") == "X"

    def test_european_vin_without_check_digit(self):
        # Weighted sum is 352, 352 % 11 == 0, but position 9 holds "Z".
        assert expected_check_digit("WVWZZZ1JZXW000001") == "0"
        assert is_valid_checksum("WVWZZZ1JZXW000001") is False


class TestMalformedInput:
    @pytest.mark.parametrize("vin", [
        HONDA_VIN[:16],             # 16 chars
        HONDA_VIN + "1",            # 18 chars
        "",
        "1HGCM82633A00435I",        # I
        "1HGCM82633A00435O",        # O
        "1HGCM82633A00435Q",        # Q
        HONDA_VIN.lower(),
        "1HGCM826-3A004352",
    ])
    def test_returns_false(self, vin):
        assert is_valid_checksum(vin) is False
        assert expected_check_digit(vin) is None

    def test_non_string_is_not_well_formed(self):
        assert is_well_formed(None) is False
        assert is_well_formed(12345678901234567) is False


class TestTables:
    def test_weight_vector_shape(self):
        assert len(WEIGHTS) == 17
        assert WEIGHTS[8] == 0
        assert WEIGHTS[7] == 10

    def test_transliteration_excludes_i_o_q(self):
        assert not {"I", "O", "Q"} & set(TRANSLITERATION)
        assert len(TRANSLITERATION) == 33

    @pytest.mark.parametrize("letter,value", [
        ("A", 1), ("H", 8), ("J", 1), ("N", 5), ("P", 7), ("R", 9),
        ("S", 2), ("Z", 9), ("0", 0), ("9", 9),
    ])
    def test_transliteration_values(self, letter, value):
        assert TRANSLITERATION[letter] == value


class TestCheckDigitRegions:
    @pytest.mark.parametrize("vin", [HONDA_VIN, "2T1BURHE0JC000001", "5YJSA1E14HF000001"])
    def test_north_america_is_mandatory(self, vin):
        assert check_digit_mandatory(vin) is True

    @pytest.mark.parametrize("vin", ["WVWZZZ1JZXW000001", "JHMCM56557C404453", "VF1AAAAA555555555"])
    def test_other_regions_are_not(self, vin):
        assert check_digit_mandatory(vin) is False

    def test_empty(self):
        assert check_digit_mandatory("") is False
