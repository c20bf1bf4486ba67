"""Lesson panels mounted by the navigator."""

import itertools
from typing import Optional

from ..config import NotationConfig
from ..logging_config import get_logger
from .audio import AudioBackendProtocol, AudioEngineAdapter
from .keyboard import InstrumentKeyboard
from .notation import NotationRenderer, RenderTarget, VisualTree
from .structures import PHRASE, LessonId, PhraseSpec

logger = get_logger(__name__)


class LessonPanel:
    """Base class for a panel with an explicit mount/unmount lifecycle."""

    lesson_id: LessonId
    title: str = ""
    description: str = ""

    def __init__(self):
        self._mounted = False

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Begin the panel's visible lifetime. Mounting twice does nothing."""
        if self._mounted:
            return
        self._mounted = True
        self.on_mount()
        logger.debug(f"Mounted {self.lesson_id.value} panel")

    def unmount(self) -> None:
        """End the panel's visible lifetime and drop its transient state."""
        if not self._mounted:
            return
        self.on_unmount()
        self._mounted = False
        logger.debug(f"Unmounted {self.lesson_id.value} panel")

    def on_mount(self) -> None:
        """Hook run when the panel mounts."""

    def on_unmount(self) -> None:
        """Hook run when the panel unmounts."""


class PianoLesson(LessonPanel):
    """Interactive keyboard plus a notation example."""

    lesson_id = LessonId.PIANO
    title = "Piano Basics"
    notation_heading = "Notation Example"

    # Shared by all instances so every mount gets a distinct render key
    _mount_ids = itertools.count(1)

    def __init__(
        self,
        audio_backend: AudioBackendProtocol,
        renderer: NotationRenderer,
        visual_tree: VisualTree,
        notation_config: NotationConfig,
        phrase: PhraseSpec = PHRASE,
    ):
        """Initialize the panel.

        Args:
            audio_backend: Backend handed to each mount's audio engine
            renderer: Renderer that draws the phrase on mount
            visual_tree: Tree the notation surface is attached to
            notation_config: Surface id and size
            phrase: Phrase drawn in the notation example
        """
        super().__init__()
        self._audio_backend = audio_backend
        self._renderer = renderer
        self._visual_tree = visual_tree
        self._notation_config = notation_config
        self.phrase = phrase
        self.keyboard: Optional[InstrumentKeyboard] = None
        self.notation_target: Optional[RenderTarget] = None

    @property
    def audio(self) -> Optional[AudioEngineAdapter]:
        """Get the audio engine of the current mount."""
        return self.keyboard.audio if self.keyboard else None

    def on_mount(self) -> None:
        # The surface must be attached before anything is drawn into it
        self.notation_target = self._visual_tree.attach(
            self._notation_config.surface_id,
            self._notation_config.surface_width,
            self._notation_config.surface_height,
        )
        self.keyboard = InstrumentKeyboard(AudioEngineAdapter(self._audio_backend))
        self._renderer.ensure_rendered(
            self.notation_target, self.phrase, next(self._mount_ids)
        )

    def on_unmount(self) -> None:
        self.keyboard = None
        self._visual_tree.detach(self._notation_config.surface_id)
        self.notation_target = None


class ScalesLesson(LessonPanel):
    """Placeholder lesson about scales."""

    lesson_id = LessonId.SCALES
    title = "Scales"
    description = (
        "This lesson will cover major and minor scales, modes, and other "
        "scale types. Interactive exercises will be added here in the future."
    )


class ChordsLesson(LessonPanel):
    """Placeholder lesson about chords."""

    lesson_id = LessonId.CHORDS
    title = "Chords"
    description = (
        "This lesson will explore triads, seventh chords, and extended "
        "harmonies. Interactive chord builders will be added here in the future."
    )
