#!/usr/bin/env python3

"""Interactive terminal shell for the Music Tutor lessons.

Slash commands drive the lesson tabs, the piano keyboard and the audio
engine; any other input is sent to the chat panel.
"""

import asyncio
import sys
from typing import Optional, Set

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from .config import get_config
from .logging_config import get_logger, setup_logging
from .tutor import LessonSession, PianoLesson, create_default_session
from .tutor.audio_adapters import list_output_ports
from .tutor.views import render_chat, render_panel, render_tabs

console = Console()
logger = get_logger(__name__)


def normalize_key_name(name: str) -> str:
    """Turn user input such as "c#4" into a key label such as "C#4"."""
    name = name.strip()
    return name[:1].upper() + name[1:]


class TutorCLISession:
    """Routes shell input to a lesson session."""

    def __init__(self, session: LessonSession):
        self.session = session
        self._tasks: Set[asyncio.Task] = set()

    @property
    def piano(self) -> Optional[PianoLesson]:
        panel = self.session.navigator.active_panel
        return panel if isinstance(panel, PianoLesson) else None

    def show(self):
        """Display the tab bar and the mounted lesson."""
        console.print(render_tabs(self.session.navigator))
        console.print(render_panel(self.session.navigator.active_panel))

    def show_help(self):
        """Display help information."""
        help_text = """
[bold cyan]Music Tutor[/bold cyan]

[bold]Lessons:[/bold]
  [cyan]/tab NAME[/cyan]   - Switch lesson (piano, scales, chords)
  [cyan]/show[/cyan]       - Show the current lesson

[bold]Piano:[/bold]
  [cyan]/start[/cyan]      - Start audio
  [cyan]/key NAME[/cyan]   - Press a key, e.g. /key C#4
  [cyan]/keys[/cyan]       - List the keys
  [cyan]/ports[/cyan]      - List MIDI output ports

[bold]Chat:[/bold]
  [cyan]/chat TEXT[/cyan]  - Send a message (plain text works too)
  [cyan]/log[/cyan]        - Show the chat log

  [cyan]/help[/cyan]       - Show this help
  [cyan]/quit[/cyan]       - Exit
        """
        console.print(Panel(help_text.strip(), title="Help", border_style="cyan"))

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def handle_tab(self, argument: str):
        try:
            self.session.navigator.select(argument)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return
        self.show()

    def handle_start(self):
        piano = self.piano
        if piano is None:
            console.print("[yellow]Audio is only available in the Piano lesson[/yellow]")
            return
        if not piano.keyboard.start_control.enabled:
            console.print("[yellow]Audio already started[/yellow]")
            return

        async def start():
            if await piano.keyboard.press_start():
                console.print("[green]✓ Audio Started[/green]")

        self._spawn(start())
        console.print("[blue]Starting audio...[/blue]")

    def handle_key(self, argument: str):
        piano = self.piano
        if piano is None:
            console.print("[yellow]Keys are only available in the Piano lesson[/yellow]")
            return
        try:
            piano.keyboard.press_key(normalize_key_name(argument))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return
        if not piano.keyboard.audio.is_ready:
            console.print("[dim]Audio not started, press /start first[/dim]")

    def show_keys(self):
        piano = self.piano
        if piano is None:
            console.print("[yellow]Keys are only available in the Piano lesson[/yellow]")
            return
        labels = [key.pitch_name for key in piano.keyboard.keys]
        console.print("Keys: " + " ".join(f"[cyan]{label}[/cyan]" for label in labels))

    def show_ports(self):
        try:
            ports = list_output_ports()
        except Exception as e:
            console.print(f"[red]Failed to list MIDI ports: {e}[/red]")
            logger.error(f"Listing MIDI ports failed: {e}")
            return
        if not ports:
            console.print("[red]No MIDI output ports available![/red]")
            return
        for i, port in enumerate(ports):
            console.print(f"[green]{i}[/green]: {port}")

    def handle_chat(self, text: str):
        chat = self.session.chat
        if not chat.post(text):
            return
        console.print(render_chat(chat))

        async def reply():
            await chat.reply()
            console.print(render_chat(chat))

        self._spawn(reply())

    def handle_input(self, user_input: str):
        """Handle one line of input.

        Returns:
            "exit" to leave the shell, otherwise None
        """
        if not user_input.startswith("/"):
            self.handle_chat(user_input)
            return None

        command, _, argument = user_input[1:].strip().partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in ("quit", "exit"):
            return "exit"

        simple_commands = {
            "help": self.show_help,
            "show": self.show,
            "start": self.handle_start,
            "keys": self.show_keys,
            "ports": self.show_ports,
            "log": lambda: console.print(render_chat(self.session.chat)),
        }
        argument_commands = {
            "tab": self.handle_tab,
            "key": self.handle_key,
            "chat": self.handle_chat,
        }

        if command in simple_commands:
            simple_commands[command]()
        elif command in argument_commands:
            if not argument:
                console.print(f"[red]/{command} needs an argument[/red]")
            else:
                argument_commands[command](argument)
        else:
            console.print(f"[red]Unknown command: /{command}[/red]")
            console.print("Type [cyan]/help[/cyan] for available commands")
        return None

    async def cleanup(self):
        """Cancel pending work and release the MIDI port."""
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self.session.close()
        try:
            self.session.audio_backend.close()
            logger.info("Session cleanup completed")
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")


async def _run_main_loop(cli: TutorCLISession) -> None:
    """Read input without blocking the event loop so pending work continues."""
    while True:
        try:
            user_input = await asyncio.to_thread(
                Prompt.ask, "\n[bold green]🎹>[/bold green]"
            )
        except (EOFError, KeyboardInterrupt):
            break

        user_input = user_input.strip()
        if not user_input:
            continue
        if cli.handle_input(user_input) == "exit":
            break


async def run_cli_session(port_name: Optional[str] = None) -> int:
    """Run the interactive shell."""
    cli = TutorCLISession(create_default_session(get_config(), port_name=port_name))
    console.print(f"[bold magenta]🎼 {get_config().app_name}[/bold magenta]")
    console.print("Type [cyan]/help[/cyan] for commands.")
    cli.show()

    try:
        await _run_main_loop(cli)
    finally:
        console.print("\n[blue]Cleaning up...[/blue]")
        await cli.cleanup()
        console.print("[blue]Goodbye![/blue]")

    return 0


@click.command()
@click.option("--port", "port_name", default=None, help="MIDI output port name.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override every configured log level.",
)
def main(port_name: Optional[str], log_level: Optional[str]):
    """Interactive music-theory lessons in the terminal."""
    setup_logging(level=log_level)

    return asyncio.run(run_cli_session(port_name))


if __name__ == "__main__":
    sys.exit(main())
