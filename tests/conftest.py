"""Shared mock backends for the lesson session tests."""

import asyncio
from typing import List, Optional

import pytest

from src.config import AppConfig
from src.tutor.notation import (
    DrawingContext,
    NoteDrawing,
    RenderTarget,
    StaveDrawing,
    VoiceDrawing,
)


class MockInstrumentHandle:
    """Mock implementation of InstrumentHandleProtocol for testing."""

    def __init__(self):
        self.triggered = []

    def trigger_attack_release(self, pitch_name: str, duration_token: str) -> None:
        self.triggered.append((pitch_name, duration_token))


class MockAudioBackend:
    """Mock implementation of AudioBackendProtocol for testing.

    Set ``gate`` to an asyncio.Event to hold initialize() until it is set.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.gate: Optional[asyncio.Event] = None
        self.initialize_calls = 0
        self.instruments: List[MockInstrumentHandle] = []

    async def initialize(self) -> None:
        self.initialize_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("no audio device")

    def create_instrument(self) -> MockInstrumentHandle:
        handle = MockInstrumentHandle()
        self.instruments.append(handle)
        return handle

    @property
    def triggered(self) -> list:
        return [call for handle in self.instruments for call in handle.triggered]

    @property
    def call_count(self) -> int:
        return self.initialize_calls + len(self.instruments) + len(self.triggered)


class MockNotationBackend:
    """Mock implementation of NotationBackendProtocol that records calls."""

    def __init__(self):
        self.calls = []
        self.format_widths = []

    def create_context(self, target: RenderTarget) -> DrawingContext:
        self.calls.append("create_context")
        return DrawingContext(target)

    def create_stave(self, x, y, width, clef):
        self.calls.append("create_stave")
        return StaveDrawing(x=x, y=y, width=width, clef=clef)

    def create_note(self, keys, duration):
        self.calls.append("create_note")
        return NoteDrawing(keys=tuple(keys), duration=duration, x=0.0)

    def create_voice(self, num_beats, beat_value, notes):
        self.calls.append("create_voice")
        return VoiceDrawing(num_beats=num_beats, beat_value=beat_value, notes=list(notes))

    def format(self, voices, width):
        self.calls.append("format")
        self.format_widths.append(width)

    def draw_stave(self, context, stave):
        self.calls.append("draw_stave")
        context.draw(stave)

    def draw_voice(self, context, stave, voice):
        self.calls.append("draw_voice")
        context.draw(voice)


@pytest.fixture
def audio_backend():
    return MockAudioBackend()


@pytest.fixture
def notation_backend():
    return MockNotationBackend()


@pytest.fixture
def app_config():
    """Configuration with an instant chat reply."""
    config = AppConfig()
    config.chat.reply_delay = 0.0
    return config
