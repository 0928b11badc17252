"""
Tests for settings loading.
"""
import pytest
from pydantic import ValidationError

from stripworks.config import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, settings_env):
        for name in ("STRIPWORKS_DEFAULT_FPS", "STRIPWORKS_PALETTE_LIMIT", "STRIPWORKS_LOG_LEVEL"):
            settings_env.delenv(name, raising=False)
        settings = get_settings()
        assert settings.default_fps == 8
        assert settings.palette_limit == 20
        assert (settings.runtime_width, settings.runtime_height) == (800, 450)
        assert settings.log_level == "INFO"

    def test_environment_override(self, settings_env):
        settings_env.setenv("STRIPWORKS_DEFAULT_FPS", "12")
        settings_env.setenv("STRIPWORKS_LOG_LEVEL", "DEBUG")
        settings = get_settings()
        assert settings.default_fps == 12
        assert settings.log_level == "DEBUG"

    def test_cached(self, settings_env):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("fps", [0, 61])
    def test_fps_bounds(self, fps):
        with pytest.raises(ValidationError):
            Settings(default_fps=fps)
