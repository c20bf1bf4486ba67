"""Music Tutor - An interactive music-theory lesson shell."""

__version__ = "0.1.0"

from .config import get_config, reload_config

__all__ = ["get_config", "reload_config"]
