"""Render surfaces and the one-shot phrase renderer."""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Protocol, Sequence, Tuple, Union

from ..config import NotationConfig
from ..logging_config import get_logger
from .structures import PhraseSpec

logger = get_logger(__name__)


class RenderTargetError(RuntimeError):
    """Raised when drawing into a surface that is not attached."""


@dataclass
class StaveDrawing:
    """A stave drawn at a pixel position."""

    x: float
    y: float
    width: float
    clef: str


@dataclass
class NoteDrawing:
    """A note head drawn at a horizontal pixel position."""

    keys: Tuple[str, ...]
    duration: str
    x: float


@dataclass
class VoiceDrawing:
    """A formatted voice drawn onto a stave."""

    num_beats: int
    beat_value: int
    notes: List[NoteDrawing]


Drawing = Union[StaveDrawing, VoiceDrawing]


@dataclass
class RenderTarget:
    """A visual surface notation is drawn into."""

    surface_id: str
    width: int
    height: int
    attached: bool = False
    drawings: List[Drawing] = field(default_factory=list)

    def clear(self) -> None:
        """Remove everything drawn on the surface."""
        self.drawings.clear()

    def staves(self) -> List[StaveDrawing]:
        return [d for d in self.drawings if isinstance(d, StaveDrawing)]

    def voices(self) -> List[VoiceDrawing]:
        return [d for d in self.drawings if isinstance(d, VoiceDrawing)]


class VisualTree:
    """Registry of attached surfaces, keyed by their stable id."""

    def __init__(self):
        self._surfaces: Dict[str, RenderTarget] = {}

    def attach(self, surface_id: str, width: int, height: int) -> RenderTarget:
        """Attach a surface, reusing the one already attached under the id."""
        target = self._surfaces.get(surface_id)
        if target is None:
            target = RenderTarget(surface_id, width, height)
            self._surfaces[surface_id] = target
        target.attached = True
        return target

    def detach(self, surface_id: str) -> Optional[RenderTarget]:
        """Detach and forget a surface. Returns it, or None if unknown."""
        target = self._surfaces.pop(surface_id, None)
        if target is not None:
            target.attached = False
        return target

    def find(self, surface_id: str) -> Optional[RenderTarget]:
        return self._surfaces.get(surface_id)

    def __contains__(self, surface_id: str) -> bool:
        return surface_id in self._surfaces


class DrawingContext:
    """Drawing context bound to one render target."""

    def __init__(self, target: RenderTarget):
        self.target = target

    def draw(self, drawing: Drawing) -> None:
        self.target.drawings.append(drawing)


class NotationBackendProtocol(Protocol):
    """Protocol for a score layout and drawing backend."""

    def create_context(self, target: RenderTarget) -> DrawingContext:
        """Bind a drawing context to a surface of the target's pixel size."""
        ...

    def create_stave(self, x: float, y: float, width: float, clef: str) -> Any:
        """Create a stave at a position and width with a clef."""
        ...

    def create_note(self, keys: Sequence[str], duration: str) -> Any:
        """Create a note object from pitches and a duration code."""
        ...

    def create_voice(self, num_beats: int, beat_value: int, notes: Sequence[Any]) -> Any:
        """Group notes into a voice with a declared beat count and value."""
        ...

    def format(self, voices: Sequence[Any], width: float) -> None:
        """Justify one or more voices horizontally to a pixel width."""
        ...

    def draw_stave(self, context: DrawingContext, stave: Any) -> None:
        """Draw a stave into the context."""
        ...

    def draw_voice(self, context: DrawingContext, stave: Any, voice: Any) -> None:
        """Draw a formatted voice onto a stave in the context."""
        ...


class NotationRenderer:
    """Draws a phrase onto a single treble stave.

    :meth:`render` always clears the target first, so rendering twice leaves
    one stave and one voice. :meth:`ensure_rendered` runs it once per mount.
    """

    def __init__(self, backend: NotationBackendProtocol, config: NotationConfig):
        """Initialize the renderer.

        Args:
            backend: Layout and drawing backend
            config: Stave geometry
        """
        self._backend = backend
        self._config = config
        self._rendered_key: Optional[Hashable] = None

    def render(self, target: RenderTarget, phrase: PhraseSpec) -> None:
        """Clear the target and draw the phrase on it.

        Args:
            target: Attached surface to draw into
            phrase: Phrase to lay out

        Raises:
            RenderTargetError: If the target is not attached
        """
        if not target.attached:
            raise RenderTargetError(
                f"Surface {target.surface_id!r} is not attached"
            )

        target.clear()
        context = self._backend.create_context(target)

        stave = self._backend.create_stave(
            self._config.stave_x,
            self._config.stave_y,
            self._config.stave_width,
            phrase.clef,
        )
        self._backend.draw_stave(context, stave)

        notes = [
            self._backend.create_note([note.pitch], note.duration)
            for note in phrase.notes
        ]
        voice = self._backend.create_voice(phrase.num_beats, phrase.beat_value, notes)
        self._backend.format([voice], self._config.format_width)
        self._backend.draw_voice(context, stave, voice)

        logger.debug(
            f"Rendered {len(notes)} notes into {target.surface_id!r} "
            f"({target.width}x{target.height})"
        )

    def ensure_rendered(
        self, target: RenderTarget, phrase: PhraseSpec, mount_key: Hashable
    ) -> bool:
        """Render unless this mount has already been rendered.

        Args:
            target: Attached surface to draw into
            phrase: Phrase to lay out
            mount_key: Identity of the current mount

        Returns:
            True if a render happened
        """
        if mount_key == self._rendered_key:
            return False
        self.render(target, phrase)
        self._rendered_key = mount_key
        return True
