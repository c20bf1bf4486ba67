"""Interactive lesson session: navigation, piano keyboard and notation."""

from .audio import AudioBackendProtocol, AudioEngineAdapter, InstrumentHandleProtocol
from .keyboard import InstrumentKeyboard, KeyWidget, StartControl
from .lessons import ChordsLesson, LessonPanel, PianoLesson, ScalesLesson
from .navigator import LessonNavigator
from .notation import (
    NotationBackendProtocol,
    NotationRenderer,
    RenderTarget,
    RenderTargetError,
    VisualTree,
)
from .session import LessonSession, create_default_session
from .structures import (
    KEYBOARD_KEYS,
    PHRASE,
    AudioEngineState,
    KeyDescriptor,
    LessonId,
    PhraseNote,
    PhraseSpec,
)

__all__ = [
    # Data model
    "AudioEngineState",
    "KeyDescriptor",
    "KEYBOARD_KEYS",
    "LessonId",
    "PhraseNote",
    "PhraseSpec",
    "PHRASE",
    # Audio
    "AudioBackendProtocol",
    "AudioEngineAdapter",
    "InstrumentHandleProtocol",
    # Keyboard
    "InstrumentKeyboard",
    "KeyWidget",
    "StartControl",
    # Notation
    "NotationBackendProtocol",
    "NotationRenderer",
    "RenderTarget",
    "RenderTargetError",
    "VisualTree",
    # Lessons
    "LessonPanel",
    "PianoLesson",
    "ScalesLesson",
    "ChordsLesson",
    "LessonNavigator",
    "LessonSession",
    "create_default_session",
]
