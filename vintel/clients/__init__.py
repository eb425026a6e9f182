"""External API clients for vehicle decode and web search."""

from vintel.clients.api_clients import NHTSAClient, TavilyClient

__all__ = ["NHTSAClient", "TavilyClient"]
