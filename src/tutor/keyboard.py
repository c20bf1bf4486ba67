"""On-screen piano keyboard wired to the audio engine."""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..logging_config import get_logger
from .audio import AudioEngineAdapter
from .structures import KEY_PRESS_DURATION, KEYBOARD_KEYS, KeyDescriptor

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyStyle:
    """Box geometry for one kind of key, in pixels."""

    width: int
    height: int
    margin: int  # Applied on both sides
    z_index: int = 0


NATURAL_KEY_STYLE = KeyStyle(width=40, height=150, margin=1)
# Negative margins pull accidentals over the neighbouring natural keys
ACCIDENTAL_KEY_STYLE = KeyStyle(width=30, height=100, margin=-15, z_index=1)


@dataclass(frozen=True)
class KeyWidget:
    """A key placed on the keyboard."""

    key: KeyDescriptor
    x: int
    width: int
    height: int
    z_index: int

    @property
    def label(self) -> str:
        return self.key.pitch_name


@dataclass(frozen=True)
class StartControl:
    """State of the button that starts the audio engine."""

    label: str
    enabled: bool


class InstrumentKeyboard:
    """Renders key widgets and forwards presses to an audio engine."""

    def __init__(
        self,
        audio: AudioEngineAdapter,
        keys: Sequence[KeyDescriptor] = KEYBOARD_KEYS,
    ):
        """Initialize the keyboard.

        Args:
            audio: Engine that receives key triggers
            keys: Keys from left to right
        """
        self.audio = audio
        self.keys = tuple(keys)
        self._by_name: Dict[str, KeyDescriptor] = {k.pitch_name: k for k in self.keys}

    @property
    def start_control(self) -> StartControl:
        """Get the start button label and enabled state."""
        if self.audio.is_ready:
            return StartControl(label="Audio Started", enabled=False)
        return StartControl(label="Start Audio", enabled=True)

    def layout(self) -> List[KeyWidget]:
        """Place the keys in a row, accidentals overlapping their neighbours.

        Returns:
            One widget per key, in key order
        """
        widgets = []
        cursor = 0
        for key in self.keys:
            style = ACCIDENTAL_KEY_STYLE if key.is_accidental else NATURAL_KEY_STYLE
            x = cursor + style.margin
            widgets.append(
                KeyWidget(
                    key=key,
                    x=x,
                    width=style.width,
                    height=style.height,
                    z_index=style.z_index,
                )
            )
            cursor = x + style.width + style.margin
        return widgets

    def get_key(self, pitch_name: str) -> KeyDescriptor:
        """Look up a key by pitch name.

        Raises:
            ValueError: If the keyboard has no such key
        """
        try:
            return self._by_name[pitch_name]
        except KeyError:
            raise ValueError(f"No key named {pitch_name!r} on this keyboard") from None

    async def press_start(self) -> bool:
        """Handle a click on the start button."""
        return await self.audio.start()

    def press_key(self, pitch_name: str) -> None:
        """Handle a click on a key.

        Args:
            pitch_name: Label of the clicked key, e.g. "C4"

        Raises:
            ValueError: If the keyboard has no such key
        """
        key = self.get_key(pitch_name)
        logger.debug(f"Key pressed: {key.pitch_name}")
        self.audio.trigger(key.pitch_name, KEY_PRESS_DURATION)
