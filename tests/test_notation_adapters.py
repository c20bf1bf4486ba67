"""Tests for the music21 notation backend."""

import pytest

from src.config import NotationConfig
from src.tutor import PHRASE, NotationRenderer, VisualTree
from src.tutor.notation import DrawingContext, RenderTarget
from src.tutor.notation_adapters import CLEF_PADDING, Music21NotationBackend


class TestMusic21NotationBackend:
    """Test Music21NotationBackend layout."""

    def setup_method(self):
        """Set up test fixtures."""
        self.backend = Music21NotationBackend()

    def _scale_notes(self, count=8):
        pitches = ["C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5", "D5"]
        return [self.backend.create_note([p], "q") for p in pitches[:count]]

    def test_create_note(self):
        """Test single keys become notes with the right length."""
        n = self.backend.create_note(["F#4"], "8")
        assert n.nameWithOctave == "F#4"
        assert n.quarterLength == 0.5

    def test_create_chord(self):
        """Test several keys become a chord."""
        c = self.backend.create_note(["C4", "E4", "G4"], "h")
        assert [p.nameWithOctave for p in c.pitches] == ["C4", "E4", "G4"]
        assert c.quarterLength == 2.0

    def test_unknown_duration(self):
        """Test unknown duration codes are rejected."""
        with pytest.raises(ValueError, match="Unknown notation duration"):
            self.backend.create_note(["C4"], "x")

    def test_unknown_clef(self):
        """Test unsupported clefs are rejected."""
        with pytest.raises(ValueError, match="Unsupported clef"):
            self.backend.create_stave(0, 0, 100, "tab")

    def test_voice_must_fill_declared_beats(self):
        """Test over-full and under-full voices are rejected."""
        with pytest.raises(ValueError, match="Too many ticks"):
            self.backend.create_voice(8, 4, self._scale_notes(9))
        with pytest.raises(ValueError, match="Not enough ticks"):
            self.backend.create_voice(8, 4, self._scale_notes(7))

    def test_format_justifies_notes(self):
        """Test note positions are proportional to their offsets."""
        voice = self.backend.create_voice(8, 4, self._scale_notes())
        self.backend.format([voice], 450)

        assert voice.x_positions == [i * 56.25 for i in range(8)]

    def test_format_rejects_unequal_voices(self):
        """Test voices of different lengths cannot be joined."""
        long_voice = self.backend.create_voice(8, 4, self._scale_notes())
        short_voice = self.backend.create_voice(4, 4, self._scale_notes(4))
        with pytest.raises(ValueError, match="equal length"):
            self.backend.format([long_voice, short_voice], 450)

    def test_draw_requires_format(self):
        """Test drawing an unformatted voice fails."""
        target = RenderTarget("t", 500, 200, attached=True)
        context = self.backend.create_context(target)
        stave = self.backend.create_stave(10, 40, 480, "treble")
        voice = self.backend.create_voice(8, 4, self._scale_notes())

        with pytest.raises(RuntimeError, match="formatted"):
            self.backend.draw_voice(context, stave, voice)

    def test_render_phrase(self):
        """Test the full render of the C major phrase."""
        config = NotationConfig()
        target = VisualTree().attach(config.surface_id, 500, 200)
        NotationRenderer(self.backend, config).render(target, PHRASE)

        assert len(target.staves()) == 1
        voice = target.voices()[0]
        assert [n.keys for n in voice.notes] == [
            ("C4",), ("D4",), ("E4",), ("F4",), ("G4",), ("A4",), ("B4",), ("C5",),
        ]
        assert all(n.duration == "q" for n in voice.notes)
        assert voice.notes[0].x == config.stave_x + CLEF_PADDING
        assert voice.notes[-1].x == config.stave_x + CLEF_PADDING + 7 * 56.25

    def test_context_is_bound_to_target(self):
        """Test drawings land on the target of the context."""
        target = RenderTarget("t", 500, 200, attached=True)
        context = self.backend.create_context(target)
        assert isinstance(context, DrawingContext)
        self.backend.draw_stave(context, self.backend.create_stave(10, 40, 480, "bass"))
        assert target.staves()[0].clef == "bass"


if __name__ == "__main__":
    pytest.main([__file__])
