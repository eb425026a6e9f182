"""Thin wrappers for the external vehicle-decode and web-search APIs.

Each client is fully mockable and enforces a bounded timeout on every call.
There is no retry: any transport failure, non-2xx status or unparsable body
is raised as :class:`ExternalServiceError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from vintel.exceptions import ConfigError, ExternalServiceError
from vintel.models import DecodeResponse, SearchResponse, WebHit

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0


class _BaseClient:
    """Shared HTTP plumbing for external API clients."""

    service = "http"

    def __init__(self, base_url: str, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        url = self._url(path)
        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
        except httpx.RequestError as exc:
            raise self._transport_error(url, exc) from exc
        return self._decode(url, resp)

    def _post(
        self,
        path: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue a POST request with a JSON body and return the decoded JSON body."""
        url = self._url(path)
        try:
            resp = httpx.post(url, json=payload, headers=headers, timeout=self.timeout)
        except httpx.RequestError as exc:
            raise self._transport_error(url, exc) from exc
        return self._decode(url, resp)

    def _transport_error(self, url: str, exc: Exception) -> ExternalServiceError:
        logger.warning("Request to %s failed: %s", url, exc)
        kind = "timed out" if isinstance(exc, httpx.TimeoutException) else "failed"
        return ExternalServiceError(
            f"{self.service} request {kind}: {exc}", service=self.service,
        )

    def _decode(self, url: str, resp: httpx.Response) -> Any:
        if not 200 <= resp.status_code < 300:
            logger.warning("Request to %s returned HTTP %d", url, resp.status_code)
            raise ExternalServiceError(
                f"{self.service} returned HTTP {resp.status_code}",
                service=self.service,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.warning(
                "Non-JSON response from %s (status %d)", url, resp.status_code,
            )
            raise ExternalServiceError(
                f"{self.service} returned a non-JSON body", service=self.service,
            ) from exc

    def _malformed(self, exc: PydanticValidationError) -> ExternalServiceError:
        logger.warning("Malformed %s payload: %s", self.service, exc)
        return ExternalServiceError(
            f"{self.service} returned a malformed payload", service=self.service,
        )


class NHTSAClient(_BaseClient):
    """Client for the NHTSA vPIC VIN decoder.

    Docs: https://vpic.nhtsa.dot.gov/api/
    The API is free and needs no credentials.
    """

    service = "nhtsa"

    def __init__(
        self,
        base_url: str = "https://vpic.nhtsa.dot.gov/api/vehicles",
        timeout: float = 20.0,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout)

    def decode_vin(self, vin: str) -> DecodeResponse:
        """Decode *vin* into a flat attribute record.

        A VIN that vPIC cannot decode still yields a response; its fields are
        simply empty.
        """
        data = self._get(f"DecodeVinValues/{vin}", params={"format": "json"})
        try:
            response = DecodeResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise self._malformed(exc) from exc
        logger.info("NHTSA decode for %s: %d result(s)", vin, len(response.results))
        return response


class TavilyClient(_BaseClient):
    """Client for the Tavily web search API.

    Docs: https://docs.tavily.com/
    """

    service = "tavily"

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.tavily.com",
        timeout: float = 30.0,
        max_results: int = 10,
        search_depth: str = "basic",
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout)
        self.api_key = api_key
        self.max_results = max_results
        self.search_depth = search_depth

    def search(self, query: str) -> list[WebHit]:
        """Search the web for *query* and return hits in relevance order."""
        if not self.api_key:
            raise ConfigError(
                "A Tavily API key is required for web search. "
                "Set VINTEL_SEARCH_API_KEY or TAVILY_API_KEY in .env or the environment."
            )
        data = self._post(
            "search",
            {
                "query": query,
                "max_results": self.max_results,
                "search_depth": self.search_depth,
            },
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        try:
            response = SearchResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise self._malformed(exc) from exc
        hits = [result.to_hit() for result in response.results]
        logger.info("Tavily search for %r: %d hit(s)", query, len(hits))
        return hits
