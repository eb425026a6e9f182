"""
VINTEL - Vehicle identifier intelligence

Enriches a VIN or licence plate into decoded facts, web evidence, risk flags
and operator markers, summarised by an LLM.
"""

__version__ = "0.1.0"

from vintel.exceptions import (
    ConfigError,
    ExternalServiceError,
    UsageError,
    ValidationError,
    VintelError,
)
from vintel.markers import compute_markers
from vintel.models import (
    Aggregate,
    InputKind,
    MarkerEntry,
    NormalizedInput,
    VehicleFacts,
    WebHit,
)
from vintel.normalize import normalize
from vintel.pipeline import EnrichmentPipeline, StageResult, build_pipeline
from vintel.risks import evaluate_risks
from vintel.vin import expected_check_digit, is_valid_checksum

__all__ = [
    "Aggregate",
    "ConfigError",
    "EnrichmentPipeline",
    "ExternalServiceError",
    "InputKind",
    "MarkerEntry",
    "NormalizedInput",
    "StageResult",
    "UsageError",
    "ValidationError",
    "VehicleFacts",
    "VintelError",
    "WebHit",
    "build_pipeline",
    "compute_markers",
    "evaluate_risks",
    "expected_check_digit",
    "is_valid_checksum",
    "normalize",
]
