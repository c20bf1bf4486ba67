"""Tests for the terminal views."""

import asyncio

from rich.console import Console

from src.tutor import LessonId, LessonSession
from src.tutor.notation_adapters import Music21NotationBackend
from src.tutor.views import (
    BOTTOM_STEP,
    TOP_STEP,
    render_chat,
    render_keyboard,
    render_panel,
    render_tabs,
    staff_lines,
    staff_step,
)

from conftest import MockAudioBackend


def _render(renderable) -> str:
    console = Console(width=100, record=True)
    console.print(renderable)
    return console.export_text()


class TestViews:
    """Test rich renderables for the lesson shell."""

    def setup_method(self):
        """Set up test fixtures."""
        self.session = LessonSession(MockAudioBackend(), Music21NotationBackend())
        self.piano = self.session.navigator.active_panel

    def test_staff_step(self):
        """Test steps are counted from the bottom line."""
        assert staff_step("E4") == 0
        assert staff_step("C4") == -2
        assert staff_step("F5") == 8

    def test_staff_lines(self):
        """Test the phrase is drawn as eight note heads on a staff."""
        lines = staff_lines(self.piano.notation_target)

        assert len(lines) == TOP_STEP - BOTTOM_STEP + 1
        assert sum(line.count("●") for line in lines) == 8
        # C4 sits on a ledger line below the staff
        c4_row = lines[TOP_STEP - staff_step("C4")]
        assert "●" in c4_row
        assert "─●─" in c4_row

    def test_staff_lines_empty_target(self):
        """Test nothing is drawn for an empty surface."""
        self.piano.notation_target.clear()
        assert staff_lines(self.piano.notation_target) == []

    def test_render_keyboard(self):
        """Test key labels appear on the keyboard."""
        text = render_keyboard(self.piano.keyboard).plain
        accidentals, naturals = text.split("\n")
        assert "C#4" in accidentals and "A#4" in accidentals
        assert "C4" in naturals and "B4" in naturals

    def test_render_piano_panel(self):
        """Test the piano panel shows the button, keys and notation."""
        output = _render(render_panel(self.piano))
        assert "Piano Basics" in output
        assert "Start Audio" in output
        assert "Notation Example" in output

        asyncio.run(self.piano.keyboard.press_start())
        assert "Audio Started" in _render(render_panel(self.piano))

    def test_render_placeholder_panel(self):
        """Test placeholder lessons show their description."""
        panel = self.session.navigator.select(LessonId.CHORDS)
        output = _render(render_panel(panel))
        assert "Chords" in output
        assert "triads" in output

    def test_render_tabs(self):
        """Test all three tabs are shown."""
        output = render_tabs(self.session.navigator).plain
        assert "Piano" in output and "Scales" in output and "Chords" in output

    def test_render_chat(self):
        """Test the chat log is shown."""
        assert "(no messages)" in _render(render_chat(self.session.chat))
