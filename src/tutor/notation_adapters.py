"""Notation backend built on music21 objects."""

from dataclasses import dataclass, field
from typing import List, Sequence, Union

from music21 import chord, clef, note, stream

from ..logging_config import get_logger
from .notation import (
    DrawingContext,
    NoteDrawing,
    RenderTarget,
    StaveDrawing,
    VoiceDrawing,
)
from .structures import notation_quarter_length

logger = get_logger(__name__)

CLEFS = {
    "treble": clef.TrebleClef,
    "bass": clef.BassClef,
    "alto": clef.AltoClef,
}

# music21 duration types back to notation duration codes
DURATION_CODES = {
    "whole": "w",
    "half": "h",
    "quarter": "q",
    "eighth": "8",
    "16th": "16",
}

# Horizontal space reserved for the clef before the first note
CLEF_PADDING = 30.0

NoteObject = Union[note.Note, chord.Chord]


@dataclass
class Music21Stave:
    """A stave position plus the music21 clef it carries."""

    x: float
    y: float
    width: float
    clef_name: str
    clef: clef.Clef

    @property
    def note_start_x(self) -> float:
        return self.x + CLEF_PADDING


@dataclass
class Music21Voice:
    """A music21 voice with its declared meter and formatted offsets."""

    num_beats: int
    beat_value: int
    stream: stream.Voice
    x_positions: List[float] = field(default_factory=list)

    @property
    def capacity(self) -> float:
        """Declared length in quarter notes."""
        return self.num_beats * 4.0 / self.beat_value

    @property
    def is_formatted(self) -> bool:
        return len(self.x_positions) == len(self.stream.notes)


def _keys_of(element: NoteObject) -> tuple:
    if isinstance(element, chord.Chord):
        return tuple(p.nameWithOctave for p in element.pitches)
    return (element.nameWithOctave,)


class Music21NotationBackend:
    """Lays out staves, notes and voices with music21 and draws them as shapes."""

    def create_context(self, target: RenderTarget) -> DrawingContext:
        logger.debug(
            f"Context for {target.surface_id!r} at {target.width}x{target.height}"
        )
        return DrawingContext(target)

    def create_stave(self, x: float, y: float, width: float, clef_name: str) -> Music21Stave:
        """Create a stave with the named clef.

        Raises:
            ValueError: If the clef is not supported
        """
        try:
            clef_class = CLEFS[clef_name]
        except KeyError:
            raise ValueError(f"Unsupported clef: {clef_name!r}") from None
        return Music21Stave(x=x, y=y, width=width, clef_name=clef_name, clef=clef_class())

    def create_note(self, keys: Sequence[str], duration: str) -> NoteObject:
        """Create a note, or a chord when more than one key is given."""
        if not keys:
            raise ValueError("A note needs at least one key")
        quarter_length = notation_quarter_length(duration)
        if len(keys) == 1:
            return note.Note(keys[0], quarterLength=quarter_length)
        return chord.Chord(list(keys), quarterLength=quarter_length)

    def create_voice(
        self, num_beats: int, beat_value: int, notes: Sequence[NoteObject]
    ) -> Music21Voice:
        """Group notes into a voice that must fill exactly the declared beats.

        Raises:
            ValueError: If the notes do not add up to the declared beats
        """
        voice = Music21Voice(num_beats=num_beats, beat_value=beat_value, stream=stream.Voice())
        for element in notes:
            voice.stream.append(element)

        ticks = voice.stream.highestTime
        if ticks > voice.capacity:
            raise ValueError(
                f"Too many ticks: voice holds {ticks} quarters, "
                f"declared {voice.capacity}"
            )
        if ticks < voice.capacity:
            raise ValueError(
                f"Not enough ticks: voice holds {ticks} quarters, "
                f"declared {voice.capacity}"
            )
        return voice

    def format(self, voices: Sequence[Music21Voice], width: float) -> None:
        """Spread each voice's notes across the width in proportion to their offsets.

        Raises:
            ValueError: If the voices have different lengths
        """
        if not voices:
            return
        capacities = {voice.capacity for voice in voices}
        if len(capacities) > 1:
            raise ValueError("Voices to be formatted together must have equal length")

        for voice in voices:
            voice.x_positions = [
                float(element.offset) / voice.capacity * width
                for element in voice.stream.notes
            ]

    def draw_stave(self, context: DrawingContext, stave: Music21Stave) -> None:
        context.draw(
            StaveDrawing(x=stave.x, y=stave.y, width=stave.width, clef=stave.clef_name)
        )

    def draw_voice(
        self, context: DrawingContext, stave: Music21Stave, voice: Music21Voice
    ) -> None:
        """Draw a formatted voice.

        Raises:
            RuntimeError: If the voice was not formatted first
        """
        if not voice.is_formatted:
            raise RuntimeError("Voice must be formatted before drawing")

        drawn = [
            NoteDrawing(
                keys=_keys_of(element),
                duration=DURATION_CODES.get(element.duration.type, element.duration.type),
                x=stave.note_start_x + x,
            )
            for element, x in zip(voice.stream.notes, voice.x_positions)
        ]
        context.draw(
            VoiceDrawing(num_beats=voice.num_beats, beat_value=voice.beat_value, notes=drawn)
        )
