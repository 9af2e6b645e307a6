"""Terminal front end: key translation, event loop and entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

import blessed

from vix.buffer import Buffer, BufferError
from vix.editor import Editor, KeyCode, KeyEvent, KeyModifiers, Mode
from vix.logger import FileLogger

log = logging.getLogger(__name__)

_SEQUENCE_CODES = {
    "KEY_ESCAPE": KeyCode.ESC,
    "KEY_BACKSPACE": KeyCode.BACKSPACE,
    "KEY_ENTER": KeyCode.ENTER,
    "KEY_TAB": KeyCode.TAB,
}

_CONTROL_CODES = {
    "\x1b": KeyCode.ESC,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\t": KeyCode.TAB,
}


class TerminalSession:
    """Raw mode and the alternate screen for the lifetime of a ``with`` block."""

    def __init__(self, term=None) -> None:
        self.term = term if term is not None else blessed.Terminal()
        self._stack: ExitStack | None = None
        self._cleaned = False

    def __enter__(self) -> TerminalSession:
        log.debug("Initializing terminal in raw mode")
        stack = ExitStack()
        stack.enter_context(self.term.raw())
        stack.enter_context(self.term.fullscreen())
        self._stack = stack
        self._cleaned = False
        return self

    def cleanup(self) -> bool:
        """Restore the terminal once; later calls do nothing and return False."""
        if self._cleaned or self._stack is None:
            log.warning("Cleanup already performed, skipping")
            return False
        self._cleaned = True
        log.debug("Performing terminal cleanup")
        self._stack.close()
        log.info("Terminal cleanup completed")
        return True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            log.error("Panic occurred: %s", exc)
        try:
            self.cleanup()
        except OSError as err:
            log.error("Error during cleanup: %s", err)
        return False


def translate_key(keystroke) -> KeyEvent | None:
    """Turn a terminal keystroke into a key event, or None for no key."""
    if not keystroke:
        return None
    if getattr(keystroke, "is_sequence", False):
        code = _SEQUENCE_CODES.get(getattr(keystroke, "name", None), KeyCode.OTHER)
        return KeyEvent(code)
    text = str(keystroke)
    if len(text) != 1:
        return KeyEvent(KeyCode.OTHER)
    if text in _CONTROL_CODES:
        return KeyEvent(_CONTROL_CODES[text])
    value = ord(text)
    if 1 <= value <= 26:
        return KeyEvent(KeyCode.CHAR, chr(value + 96), KeyModifiers.CONTROL)
    if value < 32:
        return None
    return KeyEvent(KeyCode.CHAR, text)


def default_log_path() -> Path:
    """Return the log file location in the user's home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise RuntimeError("Could not find home directory") from exc
    return home / ".vix" / "vix.log"


def run(
    editor: Editor,
    events: Iterable[KeyEvent | None],
    out: TextIO,
    size: Callable[[], tuple[int, int]],
) -> None:
    """Render ``editor`` and apply ``events`` until ``q`` in normal mode."""
    editor.render(out, *size())
    for event in events:
        if event is None:
            log.debug("Non-key event received")
            continue
        log.debug("Key event received: %s", event)
        if (
            editor.mode is Mode.NORMAL
            and event.code is KeyCode.CHAR
            and event.char == "q"
        ):
            log.info("Quit command received, exiting editor")
            break
        action = editor.handle_event(event)
        if action is not None:
            log.debug("Applying editor action")
            editor.apply_action(action)
            editor.render(out, *size())


def _key_events(term) -> Iterator[KeyEvent | None]:
    while True:
        yield translate_key(term.inkey())


def main(argv=None) -> int:
    """Open the file named in ``argv`` and run the editor on the terminal."""
    args = sys.argv[1:] if argv is None else list(argv)
    file = args[0] if args else None
    try:
        FileLogger.init(default_log_path())
    except (RuntimeError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    log.info("Starting vix editor")
    log.debug("Opening file: %s", file)
    try:
        buffer = Buffer.from_file(file)
    except BufferError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    editor = Editor.with_buffer(buffer)
    term = blessed.Terminal()
    with TerminalSession(term):
        run(editor, _key_events(term), sys.stdout, lambda: (term.width, term.height))
    return 0