"""Data structures shared by the lesson session components."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class LessonId(Enum):
    """Lessons selectable from the tab bar."""

    PIANO = "piano"
    SCALES = "scales"
    CHORDS = "chords"

    @property
    def label(self) -> str:
        """Get the tab label shown for this lesson."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Union["LessonId", str]) -> "LessonId":
        """Resolve a lesson from a member, value or tab label.

        Args:
            value: LessonId member, or a string such as "piano" or "Scales"

        Returns:
            The matching LessonId

        Raises:
            ValueError: If the value does not name one of the lessons
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for lesson in cls:
                if lesson.value == normalized:
                    return lesson
        valid = ", ".join(lesson.value for lesson in cls)
        raise ValueError(f"Unknown lesson: {value!r}. Must be one of: {valid}")


class AudioEngineState(Enum):
    """Lifecycle of the audio engine within one piano lesson mount."""

    UNINITIALIZED = "uninitialized"
    STARTING = "starting"
    READY = "ready"


@dataclass(frozen=True)
class KeyDescriptor:
    """A single piano key."""

    pitch_name: str  # Scientific pitch notation, e.g. "C#4"
    is_accidental: bool


# One chromatic octave, C4 to B4
KEYBOARD_KEYS: Tuple[KeyDescriptor, ...] = (
    KeyDescriptor("C4", False),
    KeyDescriptor("C#4", True),
    KeyDescriptor("D4", False),
    KeyDescriptor("D#4", True),
    KeyDescriptor("E4", False),
    KeyDescriptor("F4", False),
    KeyDescriptor("F#4", True),
    KeyDescriptor("G4", False),
    KeyDescriptor("G#4", True),
    KeyDescriptor("A4", False),
    KeyDescriptor("A#4", True),
    KeyDescriptor("B4", False),
)

# Notation duration codes, in quarter notes
NOTATION_DURATIONS: Dict[str, float] = {
    "w": 4.0,
    "h": 2.0,
    "q": 1.0,
    "8": 0.5,
    "16": 0.25,
}

# Audio duration tokens, in quarter notes
AUDIO_DURATIONS: Dict[str, float] = {
    "whole-note": 4.0,
    "half-note": 2.0,
    "quarter-note": 1.0,
    "eighth-note": 0.5,
    "sixteenth-note": 0.25,
}

KEY_PRESS_DURATION = "eighth-note"


def notation_quarter_length(duration: str) -> float:
    """Get the length of a notation duration code in quarter notes.

    Raises:
        ValueError: If the duration code is unknown
    """
    try:
        return NOTATION_DURATIONS[duration]
    except KeyError:
        raise ValueError(f"Unknown notation duration: {duration!r}") from None


def audio_quarter_length(token: str) -> float:
    """Get the length of an audio duration token in quarter notes.

    Raises:
        ValueError: If the duration token is unknown
    """
    try:
        return AUDIO_DURATIONS[token]
    except KeyError:
        raise ValueError(f"Unknown audio duration token: {token!r}") from None


@dataclass(frozen=True)
class PhraseNote:
    """One note of a notated phrase."""

    pitch: str  # Scientific pitch notation, e.g. "C4"
    duration: str  # Notation duration code, e.g. "q"

    @property
    def beats(self) -> float:
        """Length of this note in quarter-note beats."""
        return notation_quarter_length(self.duration)


@dataclass(frozen=True)
class PhraseSpec:
    """A fixed phrase drawn on a single stave."""

    notes: Tuple[PhraseNote, ...]
    num_beats: int
    beat_value: int
    clef: str = "treble"

    def __post_init__(self):
        """Validate phrase parameters."""
        if not self.notes:
            raise ValueError("Phrase must contain at least one note")
        if self.num_beats <= 0:
            raise ValueError(f"Beat count must be positive, got {self.num_beats}")
        if self.beat_value not in (1, 2, 4, 8, 16):
            raise ValueError(f"Invalid beat value: {self.beat_value}")

    def total_beats(self) -> float:
        """Sum of the note lengths in quarter-note beats."""
        return sum(note.beats for note in self.notes)


# Ascending C major scale, C4 to C5, in quarter notes
PHRASE = PhraseSpec(
    notes=tuple(
        PhraseNote(pitch, "q")
        for pitch in ("C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5")
    ),
    num_beats=8,
    beat_value=4,
)
