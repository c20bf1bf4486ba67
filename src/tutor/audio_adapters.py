"""MIDI output backend for the audio engine, built on mido."""

import asyncio
import threading
from typing import List, Optional, Set

import mido
from music21 import pitch

from ..logging_config import get_logger
from .structures import audio_quarter_length

logger = get_logger(__name__)


def pitch_to_midi(pitch_name: str) -> int:
    """Convert scientific pitch notation to a MIDI note number.

    Args:
        pitch_name: Pitch such as "C4" or "F#4"

    Returns:
        MIDI note number (0-127)

    Raises:
        ValueError: If the pitch is outside the MIDI range
    """
    midi_number = pitch.Pitch(pitch_name).midi
    if not (0 <= midi_number <= 127):
        raise ValueError(f"Pitch {pitch_name} is outside the MIDI range")
    return midi_number


def list_output_ports() -> List[str]:
    """List the names of all available MIDI output ports."""
    return mido.get_output_names()


class MidoSynthHandle:
    """Plays single notes on one MIDI channel of an open output port.

    Note-off messages are scheduled on timers so a press returns at once and
    overlapping notes each end on their own schedule.
    """

    def __init__(self, port, channel: int = 0, velocity: int = 100, bpm: float = 120.0):
        """Initialize the handle.

        Args:
            port: Open mido output port
            channel: MIDI channel (0-15)
            velocity: Note-on velocity (0-127)
            bpm: Tempo used to convert duration tokens to seconds
        """
        self.port = port
        self.channel = channel
        self.velocity = velocity
        self.bpm = bpm
        self._pending: Set[threading.Timer] = set()
        self._lock = threading.Lock()

    def duration_seconds(self, duration_token: str) -> float:
        """Convert a duration token to seconds at the handle's tempo."""
        return audio_quarter_length(duration_token) * 60.0 / self.bpm

    def trigger_attack_release(self, pitch_name: str, duration_token: str) -> None:
        """Send note-on now and note-off after the token's duration."""
        note = pitch_to_midi(pitch_name)
        seconds = self.duration_seconds(duration_token)

        self.port.send(
            mido.Message(
                "note_on", note=note, velocity=self.velocity, channel=self.channel
            )
        )
        logger.debug(f"Note on {pitch_name} ({note}) for {seconds:.3f}s")

        timer = threading.Timer(seconds, self._release, args=(note,))
        timer.daemon = True
        with self._lock:
            self._pending.add(timer)
        timer.start()

    def _release(self, note: int) -> None:
        with self._lock:
            self._pending.discard(threading.current_thread())
        if getattr(self.port, "closed", False):
            return
        self.port.send(
            mido.Message("note_off", note=note, velocity=0, channel=self.channel)
        )

    def cancel_pending(self) -> int:
        """Cancel note-off timers that have not fired yet.

        Returns:
            Number of timers cancelled
        """
        with self._lock:
            pending = list(self._pending)
            self._pending.clear()
        for timer in pending:
            timer.cancel()
        return len(pending)


def _close_late_port(opening: asyncio.Future) -> None:
    if opening.cancelled() or opening.exception() is not None:
        return
    opening.result().close()


class MidoAudioBackend:
    """Audio backend that opens a MIDI output port on initialize."""

    def __init__(
        self,
        port_name: Optional[str] = None,
        channel: int = 0,
        velocity: int = 100,
        bpm: float = 120.0,
    ):
        """Initialize the backend without opening any port.

        Args:
            port_name: Output port name, or None for the system default
            channel: MIDI channel for created instruments
            velocity: Note velocity for created instruments
            bpm: Tempo for created instruments
        """
        self.port_name = port_name
        self.channel = channel
        self.velocity = velocity
        self.bpm = bpm
        self.port = None
        self._opening: Optional[asyncio.Future] = None
        self._instruments: List[MidoSynthHandle] = []

    async def initialize(self) -> None:
        """Open the output port without blocking the event loop.

        Concurrent calls share one open, so at most one port is ever opened.
        """
        if self.port is not None:
            return
        if self._opening is None:
            logger.info(f"Opening MIDI output: {self.port_name or 'default'}")
            self._opening = asyncio.ensure_future(
                asyncio.to_thread(mido.open_output, self.port_name)
            )

        opening = self._opening
        try:
            port = await asyncio.shield(opening)
        finally:
            if opening.done() and self._opening is opening:
                self._opening = None

        if self.port is None:
            self.port = port
            logger.info(f"Connected to: {port.name}")

    def create_instrument(self) -> MidoSynthHandle:
        """Create a synth handle on the open port.

        Raises:
            RuntimeError: If called before initialize()
        """
        if self.port is None:
            raise RuntimeError("MIDI output is not open")
        handle = MidoSynthHandle(
            self.port, channel=self.channel, velocity=self.velocity, bpm=self.bpm
        )
        self._instruments.append(handle)
        return handle

    def close(self) -> None:
        """Cancel pending note-offs, silence the channel and close the output port."""
        for handle in self._instruments:
            handle.cancel_pending()
        self._instruments.clear()
        if self._opening is not None and not self._opening.done():
            self._opening.add_done_callback(_close_late_port)
            self._opening = None
        if self.port is None:
            return
        self.port.send(
            mido.Message("control_change", control=123, value=0, channel=self.channel)
        )
        self.port.close()
        self.port = None
