"""Audio engine lifecycle and note dispatch for the piano lesson."""

from typing import Optional, Protocol

from ..logging_config import get_logger
from .structures import AudioEngineState

logger = get_logger(__name__)


class InstrumentHandleProtocol(Protocol):
    """Protocol for a playable instrument produced by an audio backend."""

    def trigger_attack_release(self, pitch_name: str, duration_token: str) -> None:
        """Sound a pitch for the given duration.

        Args:
            pitch_name: Scientific pitch notation, e.g. "C#4"
            duration_token: Duration token, e.g. "eighth-note"
        """
        ...


class AudioBackendProtocol(Protocol):
    """Protocol for a sound-producing backend that starts asynchronously."""

    async def initialize(self) -> None:
        """Prepare the backend for output. Resolves once output is ready."""
        ...

    def create_instrument(self) -> InstrumentHandleProtocol:
        """Create a playable instrument.

        Returns:
            Instrument handle bound to the backend output
        """
        ...


class AudioEngineAdapter:
    """Lazily starts an audio backend and forwards note triggers to it.

    The state only moves forward: UNINITIALIZED -> STARTING -> READY. Calls
    to :meth:`start` while STARTING or READY do nothing, which is what keeps
    a second start from running while the first one is suspended. This relies
    on a single event loop; a multi-threaded host would need a lock around the
    UNINITIALIZED -> STARTING transition.
    """

    def __init__(self, backend: AudioBackendProtocol):
        """Initialize the adapter.

        Args:
            backend: Audio backend used once the engine is started
        """
        self._backend = backend
        self._state = AudioEngineState.UNINITIALIZED
        self._handle: Optional[InstrumentHandleProtocol] = None

    @property
    def state(self) -> AudioEngineState:
        """Get the current engine state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        """Check whether triggers will reach the backend."""
        return self._state is AudioEngineState.READY

    async def start(self) -> bool:
        """Start the backend and create the instrument handle.

        Returns:
            True if this call brought the engine to READY, False if the engine
            was already starting or started, or if the backend failed
        """
        if self._state is not AudioEngineState.UNINITIALIZED:
            logger.debug(f"Ignoring start while engine is {self._state.value}")
            return False

        self._state = AudioEngineState.STARTING
        logger.info("Starting audio engine")

        try:
            await self._backend.initialize()
            handle = self._backend.create_instrument()
        except Exception as e:
            # No retry path: the engine stays STARTING
            logger.error(f"Audio backend failed to start: {e}")
            return False

        self._handle = handle
        self._state = AudioEngineState.READY
        logger.info("Audio engine ready")
        return True

    def trigger(self, pitch_name: str, duration_token: str) -> None:
        """Sound a pitch if the engine is ready, otherwise do nothing.

        Args:
            pitch_name: Scientific pitch notation, e.g. "C4"
            duration_token: Duration token, e.g. "eighth-note"
        """
        if self._handle is None or not self.is_ready:
            logger.debug(f"Dropping trigger for {pitch_name}: engine not ready")
            return

        try:
            self._handle.trigger_attack_release(pitch_name, duration_token)
        except Exception as e:
            logger.error(f"Failed to trigger {pitch_name}: {e}")
