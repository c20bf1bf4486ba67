"""Composition root for the lesson shell."""

from typing import Optional

from ..chat import ChatStub
from ..config import AppConfig, get_config
from ..logging_config import get_logger
from .audio import AudioBackendProtocol
from .audio_adapters import MidoAudioBackend
from .lessons import ChordsLesson, PianoLesson, ScalesLesson
from .navigator import LessonNavigator
from .notation import NotationBackendProtocol, NotationRenderer, VisualTree
from .notation_adapters import Music21NotationBackend
from .structures import LessonId

logger = get_logger(__name__)


class LessonSession:
    """Wires the navigator, lesson panels and chat stub to injected backends."""

    def __init__(
        self,
        audio_backend: AudioBackendProtocol,
        notation_backend: NotationBackendProtocol,
        config: Optional[AppConfig] = None,
        initial: LessonId = LessonId.PIANO,
    ):
        """Initialize the session and mount the initial lesson.

        Args:
            audio_backend: Backend for the piano lesson's audio engine
            notation_backend: Backend for the notation example
            config: Application configuration, defaults to the global one
            initial: Lesson selected at start
        """
        self.config = config or get_config()
        self.audio_backend = audio_backend
        self.visual_tree = VisualTree()
        self.renderer = NotationRenderer(notation_backend, self.config.notation)
        self.chat = ChatStub(
            reply_delay=self.config.chat.reply_delay,
            reply_text=self.config.chat.reply_text,
        )
        self.navigator = LessonNavigator(
            {
                LessonId.PIANO: self._create_piano_lesson,
                LessonId.SCALES: ScalesLesson,
                LessonId.CHORDS: ChordsLesson,
            },
            initial=initial,
        )
        logger.info(f"Lesson session started on {self.navigator.selected.value}")

    def _create_piano_lesson(self) -> PianoLesson:
        return PianoLesson(
            self.audio_backend,
            self.renderer,
            self.visual_tree,
            self.config.notation,
        )

    def close(self) -> None:
        """Unmount the active lesson."""
        self.navigator.close()


def create_default_session(
    config: Optional[AppConfig] = None, port_name: Optional[str] = None
) -> LessonSession:
    """Build a session on the MIDI output and music21 backends.

    Args:
        config: Application configuration, defaults to the global one
        port_name: MIDI output port, overrides the configured one
    """
    config = config or get_config()
    audio_backend = MidoAudioBackend(
        port_name=port_name or config.audio.output_port,
        channel=config.audio.channel,
        velocity=config.audio.velocity,
        bpm=config.audio.bpm,
    )
    return LessonSession(audio_backend, Music21NotationBackend(), config)
