"""Shared test fixtures for VINTEL test suite."""

import os

import pytest
from unittest.mock import MagicMock


# Ensure test environment variables are set before any settings import
os.environ.setdefault("VINTEL_SEARCH_API_KEY", "test-search-key")
os.environ.setdefault("VINTEL_LLM_API_KEY", "test-llm-key")

from vintel.models import DecodeResponse, VehicleFacts, WebHit  # noqa: E402
from vintel.pipeline import EnrichmentPipeline  # noqa: E402

HONDA_VIN = "1HGCM82633A004352"
VW_VIN = "WVWZZZ1JZXW000001"


@pytest.fixture
def honda_decode():
    """A vPIC DecodeVinValues response for a 2003 Honda Accord."""
    return DecodeResponse.model_validate({
        "Count": 1,
        "Message": "Results returned successfully",
        "Results": [
            {
                "Make": "HONDA",
                "Model": "Accord",
                "ModelYear": "2003",
                "BodyClass": "Coupe",
                "VehicleType": "PASSENGER CAR",
                "PlantCountry": "UNITED STATES (USA)",
                "ErrorCode": "0",
                "Trim": "",
            }
        ],
    })


@pytest.fixture
def empty_decode():
    """A vPIC response for a VIN it could not decode."""
    return DecodeResponse.model_validate({
        "Count": 1,
        "Message": "Results returned successfully",
        "Results": [{"Make": "", "Model": "", "ModelYear": "", "ErrorCode": "8"}],
    })


@pytest.fixture
def clean_hits():
    """Search hits with no risk vocabulary."""
    return [
        WebHit(
            title="2003 Honda Accord EX Coupe specs",
            link="https://www.cars.com/research/honda-accord-2003/",
            snippet="Specifications, features and owner reviews.",
        ),
        WebHit(
            title="Honda Accord 2003 VIN lookup",
            link="https://vpic.nhtsa.dot.gov/decoder/",
            snippet="Decoded vehicle information.",
        ),
    ]


@pytest.fixture
def auction_hits():
    """Search hits pointing at two salvage auction sites."""
    return [
        WebHit(
            title="Lot 4411 - 2003 Honda Accord",
            link="https://www.copart.com/lot/4411",
            snippet="Salvage title, front end damage.",
        ),
        WebHit(
            title="Stock 90210",
            link="https://www.iaai.com/vehicle/90210",
            snippet="Run and drive verified.",
        ),
    ]


@pytest.fixture
def decoder(honda_decode):
    mock = MagicMock()
    mock.decode_vin.return_value = honda_decode
    return mock


@pytest.fixture
def searcher(clean_hits):
    mock = MagicMock()
    mock.search.return_value = clean_hits
    return mock


@pytest.fixture
def summarizer():
    mock = MagicMock()
    mock.complete.return_value = "REPORT TEXT"
    return mock


@pytest.fixture
def pipeline(decoder, searcher, summarizer):
    """Pipeline wired to mocked collaborators."""
    return EnrichmentPipeline(decoder=decoder, searcher=searcher, summarizer=summarizer)


@pytest.fixture
def honda_facts(honda_decode):
    return honda_decode.first_facts()


@pytest.fixture
def no_facts():
    return VehicleFacts()
