"""
Tests for centralized configuration system.
Verifies environment variable loading and default values.
"""
from introengine.config import Settings, get_settings


class TestConfigurationSystem:
    """Test suite for configuration management."""

    def test_default_values(self):
        """Every setting has a default: the engines run without configuration."""
        get_settings.cache_clear()

        settings = Settings()

        # Business rules
        assert settings.min_route_confidence == 30

        # Outreach copy
        assert settings.product_name == "Witar"
        assert settings.resolved_pitch.startswith("Witar ayuda")

        # Observability
        assert settings.log_level == "INFO"
        assert settings.enable_structured_logging is False

        assert settings.environment in ["development", "staging", "production"]

    def test_environment_variable_override(self, monkeypatch):
        """Verify environment variables override defaults."""
        get_settings.cache_clear()

        monkeypatch.setenv("MIN_ROUTE_CONFIDENCE", "50")
        monkeypatch.setenv("PRODUCT_NAME", "Acme HR")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = get_settings()

        assert settings.min_route_confidence == 50
        assert settings.product_name == "Acme HR"
        assert settings.log_level == "DEBUG"
        assert settings.environment == "production"

        get_settings.cache_clear()

    def test_pitch_follows_product_name(self):
        """Renaming the product renames it inside the default pitch too."""
        settings = Settings(product_name="Acme HR")

        assert settings.resolved_pitch.startswith("Acme HR ayuda")
        assert "Witar" not in settings.resolved_pitch

    def test_custom_pitch_without_placeholder_is_kept(self):
        settings = Settings(product_pitch="Fichajes sin papeles.")

        assert settings.resolved_pitch == "Fichajes sin papeles."

    def test_settings_singleton(self):
        """get_settings returns the cached instance."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()
