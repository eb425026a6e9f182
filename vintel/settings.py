"""VINTEL Configuration Settings using Pydantic.

Values come from ``VINTEL_*`` environment variables or a ``.env`` file.
Collaborator credentials also fall back to the vendors' conventional
variable names (``TAVILY_API_KEY``, ``OPENAI_API_KEY``).
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VintelSettings(BaseSettings):
    """Central configuration for VINTEL."""

    model_config = SettingsConfigDict(
        env_prefix="VINTEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # --- Vehicle decode (NHTSA vPIC) ---
    nhtsa_base_url: str = Field(default="https://vpic.nhtsa.dot.gov/api/vehicles")
    nhtsa_timeout: float = 20.0

    # --- Web search (Tavily) ---
    search_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("VINTEL_SEARCH_API_KEY", "TAVILY_API_KEY"),
    )
    search_base_url: str = Field(default="https://api.tavily.com")
    search_timeout: float = 30.0
    search_max_results: int = Field(default=10, ge=1, le=20)
    search_depth: Literal["basic", "advanced"] = "basic"

    # --- LLM Configuration ---
    llm_provider: Literal["openai", "deepseek", "ollama"] = "openai"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("VINTEL_LLM_API_KEY", "OPENAI_API_KEY"),
    )
    llm_base_url: str = Field(default="")
    llm_model: str = Field(default="")
    llm_timeout: float = 60.0
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.1

    # --- Classification ---
    strict_vin_checksum: bool = False

    # --- Logging ---
    log_level: str = "INFO"
    log_file: Optional[str] = None


# Global settings instance
_settings: Optional[VintelSettings] = None


def get_settings() -> VintelSettings:
    """Get or create the global settings instance"""
    global _settings
    if _settings is None:
        _settings = VintelSettings()
    return _settings


def reload_settings() -> VintelSettings:
    """Re-read settings from the environment"""
    global _settings
    _settings = None
    return get_settings()
