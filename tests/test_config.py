"""Tests for configuration loading and validation."""

import pytest

from src.config import AppConfig


class TestAppConfig:
    """Test AppConfig defaults and environment overrides."""

    def test_defaults(self):
        """Test default surface geometry and chat reply."""
        config = AppConfig()
        assert config.notation.surface_id == "notation-container"
        assert (config.notation.surface_width, config.notation.surface_height) == (500, 200)
        assert config.notation.stave_width == 480
        assert config.notation.format_width == 450
        assert config.chat.reply_text == "This is a placeholder response."

    def test_environment_overrides(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("TUTOR_BPM", "90")
        monkeypatch.setenv("TUTOR_MIDI_CHANNEL", "9")
        monkeypatch.setenv("TUTOR_AUDIO_PORT", "Virtual Synth")
        monkeypatch.setenv("TUTOR_CHAT_DELAY", "0.25")
        monkeypatch.setenv("AUDIO_LOG_LEVEL", "debug")

        config = AppConfig()
        assert config.audio.bpm == 90.0
        assert config.audio.channel == 9
        assert config.audio.output_port == "Virtual Synth"
        assert config.chat.reply_delay == 0.25
        assert config.logging.audio_log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name, value, message",
        [
            ("TUTOR_BPM", "500", "Invalid BPM"),
            ("TUTOR_MIDI_CHANNEL", "16", "Invalid MIDI channel"),
            ("TUTOR_VELOCITY", "128", "Invalid MIDI velocity"),
            ("TUTOR_CHAT_DELAY", "-1", "Invalid chat reply delay"),
            ("TUTOR_SURFACE_WIDTH", "0", "Invalid notation surface_width"),
            ("LOG_LEVEL", "LOUD", "Invalid LOG_LEVEL"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value, message):
        """Test invalid environment values raise ValueError."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=message):
            AppConfig()


if __name__ == "__main__":
    pytest.main([__file__])
