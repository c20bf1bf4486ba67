"""Rich renderables for the lesson shell."""

from typing import List, Optional

from music21 import pitch
from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from ..chat import ChatStub
from .keyboard import InstrumentKeyboard
from .lessons import LessonPanel, PianoLesson
from .navigator import LessonNavigator
from .notation import RenderTarget

PX_PER_CHAR = 6

# Staff steps are diatonic steps above the bottom line (E4 in treble clef)
BOTTOM_LINE = pitch.Pitch("E4").diatonicNoteNum
TOP_STEP = 10
BOTTOM_STEP = -4
CLEF_STEP = 2  # G line


def render_tabs(navigator: LessonNavigator) -> Text:
    """Render the tab bar with the selected tab highlighted."""
    text = Text()
    for label, selected in navigator.tabs():
        style = "bold reverse cyan" if selected else "dim"
        text.append(f" {label} ", style=style)
        text.append(" ")
    return text


def _place(row: List[str], start: int, width: int, label: str) -> None:
    body = label.center(width)[:width]
    for offset, char in enumerate(body):
        if 0 <= start + offset < len(row):
            row[start + offset] = char


def render_keyboard(keyboard: InstrumentKeyboard) -> Text:
    """Render the keys, accidentals drawn as a row above the natural keys."""
    widgets = keyboard.layout()
    total = max(w.x + w.width for w in widgets)
    columns = total // PX_PER_CHAR + 1
    accidentals = [" "] * columns
    naturals = [" "] * columns

    for widget in widgets:
        start = widget.x // PX_PER_CHAR
        width = max(1, widget.width // PX_PER_CHAR)
        if widget.key.is_accidental:
            _place(accidentals, start, width, widget.label)
        else:
            _place(naturals, start, width - 1, widget.label)
            _place(naturals, start + width - 1, 1, "│")

    text = Text()
    text.append("".join(accidentals).rstrip(), style="bold white on grey23")
    text.append("\n")
    text.append("".join(naturals).rstrip(), style="black on white")
    return text


def staff_step(pitch_name: str) -> int:
    """Diatonic steps between a pitch and the bottom staff line."""
    return pitch.Pitch(pitch_name).diatonicNoteNum - BOTTOM_LINE


def staff_lines(target: RenderTarget, columns: int = 60) -> List[str]:
    """Draw the target's stave and notes as lines of text.

    Returns:
        One string per staff step from top to bottom, or an empty list if
        nothing has been drawn
    """
    staves = target.staves()
    if not staves:
        return []
    stave = staves[0]

    rows = {step: [" "] * columns for step in range(TOP_STEP, BOTTOM_STEP - 1, -1)}
    for step in range(0, 9, 2):
        rows[step] = ["─"] * columns
    rows[CLEF_STEP][1] = "G"

    def column(x: float) -> int:
        col = int((x - stave.x) / stave.width * (columns - 1))
        return max(0, min(columns - 1, col))

    for voice in target.voices():
        for drawn in voice.notes:
            col = column(drawn.x)
            for key in drawn.keys:
                step = staff_step(key)
                # Ledger lines between the note and the staff
                ledgers = list(range(-2, step - 1, -2)) + list(range(10, step + 1, 2))
                for ledger in ledgers:
                    if ledger in rows:
                        for c in range(col - 1, col + 2):
                            if 0 <= c < columns:
                                rows[ledger][c] = "─"
                if step in rows:
                    rows[step][col] = "●"

    return ["".join(rows[step]) for step in sorted(rows, reverse=True)]


def render_staff(target: Optional[RenderTarget], columns: int = 60) -> Text:
    """Render the notation surface, or a placeholder when it is empty."""
    if target is None:
        return Text("(no notation surface)", style="dim")
    lines = staff_lines(target, columns)
    if not lines:
        return Text("(nothing drawn)", style="dim")
    return Text("\n".join(lines))


def render_panel(panel: LessonPanel) -> Panel:
    """Render the mounted lesson panel."""
    parts = []
    if isinstance(panel, PianoLesson) and panel.keyboard is not None:
        control = panel.keyboard.start_control
        button_style = "bold green" if control.enabled else "dim"
        parts.append(Text(f"[ {control.label} ]", style=button_style))
        parts.append(Text(""))
        parts.append(render_keyboard(panel.keyboard))
        parts.append(Text(""))
        parts.append(Text(panel.notation_heading, style="bold"))
        parts.append(render_staff(panel.notation_target))
    else:
        parts.append(Text(panel.description))

    return Panel(
        Group(*parts),
        title=f"[bold blue]{panel.title}[/bold blue]",
        border_style="blue",
    )


def render_chat(chat: ChatStub, limit: int = 10) -> Panel:
    """Render the latest chat messages."""
    lines = chat.lines()[-limit:]
    body = Text("\n".join(lines)) if lines else Text("(no messages)", style="dim")
    return Panel(body, title="[bold magenta]Chat[/bold magenta]", border_style="magenta")
