"""Centralized configuration for Music Tutor.

This module provides a single source of truth for all configuration values
and environment variables used throughout the application.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


@dataclass
class AudioConfig:
    """Audio backend configuration."""

    output_port: Optional[str] = None  # None selects the default MIDI output
    channel: int = 0
    velocity: int = 100
    bpm: float = 120.0


@dataclass
class NotationConfig:
    """Notation surface and stave geometry, in pixels."""

    surface_id: str = "notation-container"
    surface_width: int = 500
    surface_height: int = 200
    stave_x: int = 10
    stave_y: int = 40
    stave_width: int = 480
    format_width: int = 450


@dataclass
class ChatConfig:
    """Chat stub configuration."""

    reply_delay: float = 1.0  # Seconds before the scripted reply
    reply_text: str = "This is a placeholder response."


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: str = "music_tutor.log"

    # Module-specific log levels
    audio_log_level: str = "INFO"
    notation_log_level: str = "INFO"
    lesson_log_level: str = "INFO"
    chat_log_level: str = "INFO"


@dataclass
class AppConfig:
    """Main application configuration."""

    # Component configurations
    audio: AudioConfig = field(default_factory=AudioConfig)
    notation: NotationConfig = field(default_factory=NotationConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application metadata
    app_name: str = "Music Tutor"

    def __post_init__(self):
        """Load environment variables and validate configuration."""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        # Load .env file if it exists
        load_dotenv()

        # Audio configuration
        self.audio.output_port = os.getenv("TUTOR_AUDIO_PORT", self.audio.output_port)
        self.audio.channel = int(
            os.getenv("TUTOR_MIDI_CHANNEL", str(self.audio.channel))
        )
        self.audio.velocity = int(os.getenv("TUTOR_VELOCITY", str(self.audio.velocity)))
        self.audio.bpm = float(os.getenv("TUTOR_BPM", str(self.audio.bpm)))

        # Notation configuration
        self.notation.surface_width = int(
            os.getenv("TUTOR_SURFACE_WIDTH", str(self.notation.surface_width))
        )
        self.notation.surface_height = int(
            os.getenv("TUTOR_SURFACE_HEIGHT", str(self.notation.surface_height))
        )

        # Chat configuration
        self.chat.reply_delay = float(
            os.getenv("TUTOR_CHAT_DELAY", str(self.chat.reply_delay))
        )

        # Logging configuration
        self.logging.level = os.getenv("LOG_LEVEL", self.logging.level).upper()
        self.logging.log_file = os.getenv("LOG_FILE", self.logging.log_file)
        self.logging.audio_log_level = os.getenv(
            "AUDIO_LOG_LEVEL", self.logging.audio_log_level
        ).upper()
        self.logging.notation_log_level = os.getenv(
            "NOTATION_LOG_LEVEL", self.logging.notation_log_level
        ).upper()
        self.logging.lesson_log_level = os.getenv(
            "LESSON_LOG_LEVEL", self.logging.lesson_log_level
        ).upper()
        self.logging.chat_log_level = os.getenv(
            "CHAT_LOG_LEVEL", self.logging.chat_log_level
        ).upper()

    def _validate_config(self):
        """Validate configuration values."""
        # Validate audio settings
        if not (20.0 <= self.audio.bpm <= 300.0):
            raise ValueError(
                f"Invalid BPM: {self.audio.bpm}. Must be between 20-300."
            )

        if not (0 <= self.audio.velocity <= 127):
            raise ValueError(
                f"Invalid MIDI velocity: {self.audio.velocity}. Must be between 0-127."
            )

        if not (0 <= self.audio.channel <= 15):
            raise ValueError(
                f"Invalid MIDI channel: {self.audio.channel}. Must be between 0-15."
            )

        # Validate notation geometry
        for name in (
            "surface_width",
            "surface_height",
            "stave_width",
            "format_width",
        ):
            value = getattr(self.notation, name)
            if value <= 0:
                raise ValueError(f"Invalid notation {name}: {value}. Must be positive.")

        # Validate chat settings
        if self.chat.reply_delay < 0:
            raise ValueError(
                f"Invalid chat reply delay: {self.chat.reply_delay}. Must be >= 0."
            )

        # Validate logging levels
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        for level_name, level_value in [
            ("LOG_LEVEL", self.logging.level),
            ("AUDIO_LOG_LEVEL", self.logging.audio_log_level),
            ("NOTATION_LOG_LEVEL", self.logging.notation_log_level),
            ("LESSON_LOG_LEVEL", self.logging.lesson_log_level),
            ("CHAT_LOG_LEVEL", self.logging.chat_log_level),
        ]:
            if level_value not in valid_log_levels:
                raise ValueError(
                    f"Invalid {level_name}: {level_value}. Must be one of {valid_log_levels}."
                )


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


def reload_config():
    """Reload configuration from environment variables."""
    global config
    config = AppConfig()
    return config
