"""
Centralized Configuration System
Environment-aware settings for the routing, scoring and outreach engines.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )
    """
    Production-grade configuration management.
    Loads from environment variables with sensible defaults.
    """

    # ============================================
    # BUSINESS RULES
    # ============================================
    min_route_confidence: int = 30  # Routes below this are never surfaced

    # ============================================
    # OUTREACH COPY
    # ============================================
    product_name: str = "Witar"
    # {product} is replaced with product_name
    product_pitch: str = (
        "{product} ayuda a empresas pequeñas a gestionar control horario, "
        "vacaciones y documentos laborales sin complicarse."
    )

    # ============================================
    # API
    # ============================================
    api_title: str = "IntroEngine API"
    api_version: str = "1.0.0"

    # ============================================
    # OBSERVABILITY
    # ============================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enable_structured_logging: bool = False  # Set to True for production JSON logs

    # ============================================
    # ENVIRONMENT
    # ============================================
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def resolved_pitch(self) -> str:
        """product_pitch with the {product} placeholder filled in."""
        return self.product_pitch.replace("{product}", self.product_name)


@lru_cache()
def get_settings() -> Settings:
    """
    Singleton pattern for settings.
    Uses LRU cache to ensure only one Settings instance exists.
    """
    return Settings()


# Convenience accessor for common use
settings = get_settings()
