"""Interactive editing session - maps key presses onto a LineBuffer."""

import logging
from enum import Enum, auto
from typing import Callable

import click

from .core.buffer import LineBuffer
from .errors import AssistantError

logger = logging.getLogger(__name__)


class Command(Enum):
    """Decoded editing command."""

    INSERT = auto()
    NEWLINE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    ASSIST = auto()
    FINISH = auto()


# click.getchar() returns whole escape sequences on POSIX and
# two-character scan codes on Windows.
KEYS = {
    "\x1b": Command.FINISH,
    "\r": Command.NEWLINE,
    "\n": Command.NEWLINE,
    "\x7f": Command.BACKSPACE,
    "\x08": Command.BACKSPACE,
    "\x1b[A": Command.UP,
    "\x1b[B": Command.DOWN,
    "\x1b[C": Command.RIGHT,
    "\x1b[D": Command.LEFT,
    "\x1bOA": Command.UP,
    "\x1bOB": Command.DOWN,
    "\x1bOC": Command.RIGHT,
    "\x1bOD": Command.LEFT,
    "\x1b[3~": Command.DELETE,
    "\xe0H": Command.UP,
    "\xe0P": Command.DOWN,
    "\xe0M": Command.RIGHT,
    "\xe0K": Command.LEFT,
    "\xe0S": Command.DELETE,
    "*": Command.ASSIST,
}

SINGLE_LINE_IGNORED = {Command.NEWLINE, Command.UP, Command.DOWN}


def decode_key(key: str) -> tuple[Command, str] | None:
    """Translate one key press into a command and its character."""
    if key in KEYS:
        return KEYS[key], ""
    if len(key) == 1 and key.isprintable():
        return Command.INSERT, key
    return None


def apply_command(buffer: LineBuffer, command: Command, char: str = "") -> None:
    """Apply a buffer command. ASSIST and FINISH are handled by the session."""
    match command:
        case Command.INSERT:
            buffer.insert_char(char)
        case Command.NEWLINE:
            buffer.insert_newline()
        case Command.BACKSPACE:
            buffer.delete_before()
        case Command.DELETE:
            buffer.delete_at()
        case Command.LEFT:
            buffer.move_left()
        case Command.RIGHT:
            buffer.move_right()
        case Command.UP:
            buffer.move_up()
        case Command.DOWN:
            buffer.move_down()


def render_screen(title: str, buffer: LineBuffer, message: str = "") -> None:
    """Redraw the terminal with the buffer and a cursor marker."""
    click.clear()
    click.secho(title, fg="cyan", bold=True)
    click.echo()
    click.echo(buffer.text[: buffer.cursor] + "|" + buffer.text[buffer.cursor :])
    click.echo()
    if message:
        click.secho(message, fg="red")
    click.secho("Esc to finish, '*' for AI assistance", fg="yellow")


class EditSession:
    """
    One editing pass over a buffer.

    Reads keys until FINISH, applying each to the buffer and redrawing
    after every command. The assist callback inserts generated text; if
    it raises AssistantError the message is shown and editing continues.
    """

    def __init__(
        self,
        buffer: LineBuffer,
        title: str = "",
        read_key: Callable[[], str] = click.getchar,
        render: Callable[[str, LineBuffer, str], None] = render_screen,
        assist: Callable[[LineBuffer], object] | None = None,
        multiline: bool = True,
    ):
        self.buffer = buffer
        self.title = title
        self.read_key = read_key
        self.render = render
        self.assist = assist
        self.multiline = multiline
        self.message = ""

    def step(self, key: str) -> bool:
        """Handle one key. Returns False once editing is finished."""
        decoded = decode_key(key)
        if decoded is None:
            logger.debug(f"Ignoring unknown key {key!r}")
            return True

        command, char = decoded
        if command is Command.FINISH:
            return False
        if command is Command.ASSIST and self.assist is None:
            command = Command.INSERT
            char = key
        if not self.multiline and command in SINGLE_LINE_IGNORED:
            return True

        self.message = ""
        if command is Command.ASSIST:
            try:
                self.assist(self.buffer)
            except AssistantError as e:
                logger.error(f"Assistant failed: {e}")
                self.message = f"Assistant failed: {e}"
        else:
            apply_command(self.buffer, command, char)
        return True

    def run(self) -> str:
        """Edit until FINISH and return the buffer text."""
        self.render(self.title, self.buffer, self.message)
        while self.step(self.read_key()):
            self.render(self.title, self.buffer, self.message)
        return self.buffer.take()
