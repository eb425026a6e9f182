"""Error taxonomy for the enrichment pipeline.

Data outcomes (a VIN that does not decode, zero search hits, detected risks)
are never errors. Only the conditions below abort a run.
"""

from __future__ import annotations


class VintelError(Exception):
    """Base exception for VINTEL.

    ``stage`` is filled in by the pipeline executor with the name of the stage
    that was running when the error surfaced.
    """

    def __init__(self, message: str = "", *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"[{self.stage}] {message}"
        return message


class UsageError(VintelError):
    """No identifier was supplied"""


class ValidationError(VintelError):
    """The supplied identifier is not text"""


class ConfigError(VintelError):
    """A collaborator is missing a required credential or setting"""


class ExternalServiceError(VintelError):
    """An external collaborator call failed.

    Covers timeouts, transport errors, non-2xx responses and payloads that
    cannot be parsed. The underlying exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "",
        *,
        service: str = "",
        stage: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.service = service
        self.status_code = status_code
