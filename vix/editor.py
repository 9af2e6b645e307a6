"""Editor state, key handling and screen rendering."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import TextIO

from vix.buffer import Buffer, BufferError

log = logging.getLogger(__name__)

SAVE_AS_DEFAULT_PATH = "new_file.txt"

_CLEAR = "\x1b[2J"
_RESET = "\x1b[0m"
_BAR_BACKGROUND = "\x1b[100m"


def _move(x: int, y: int) -> str:
    return f"\x1b[{y + 1};{x + 1}H"


class Mode(enum.Enum):
    """Editing mode."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"

    @property
    def color(self) -> str:
        """Foreground escape used for the mode in the status bar."""
        return "\x1b[35m" if self is Mode.NORMAL else "\x1b[36m"


class KeyCode(enum.Enum):
    """Kind of key pressed."""

    CHAR = "char"
    ESC = "esc"
    BACKSPACE = "backspace"
    ENTER = "enter"
    TAB = "tab"
    OTHER = "other"


class KeyModifiers(enum.Flag):
    """Modifier keys held during a key press."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A single key press."""

    code: KeyCode
    char: str | None = None
    modifiers: KeyModifiers = KeyModifiers.NONE


class ActionKind(enum.Enum):
    """What an action does to the editor."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ENTER_MODE = "enter_mode"
    PRINT_CHAR = "print_char"
    BACKSPACE = "backspace"
    NEW_LINE = "new_line"
    SAVE = "save"
    SAVE_AS = "save_as"
    DELETE_LINE = "delete_line"


@dataclass(frozen=True)
class Action:
    """An editing action with its argument, if any."""

    kind: ActionKind
    char: str | None = None
    path: str | None = None
    mode: Mode | None = None


_NORMAL_BINDINGS = {
    ("h", KeyModifiers.NONE): Action(ActionKind.MOVE_LEFT),
    ("j", KeyModifiers.NONE): Action(ActionKind.MOVE_DOWN),
    ("k", KeyModifiers.NONE): Action(ActionKind.MOVE_UP),
    ("l", KeyModifiers.NONE): Action(ActionKind.MOVE_RIGHT),
    ("i", KeyModifiers.NONE): Action(ActionKind.ENTER_MODE, mode=Mode.INSERT),
    ("s", KeyModifiers.CONTROL): Action(ActionKind.SAVE),
    ("S", KeyModifiers.CONTROL): Action(ActionKind.SAVE_AS, path=SAVE_AS_DEFAULT_PATH),
    ("d", KeyModifiers.CONTROL): Action(ActionKind.DELETE_LINE),
}


def handle_normal_event(ev: object) -> Action | None:
    """Map a key event in normal mode to an action."""
    if not isinstance(ev, KeyEvent) or ev.code is not KeyCode.CHAR:
        return None
    return _NORMAL_BINDINGS.get((ev.char, ev.modifiers))


def handle_insert_event(ev: object) -> Action | None:
    """Map a key event in insert mode to an action."""
    if not isinstance(ev, KeyEvent):
        return None
    if ev.code is KeyCode.ESC:
        return Action(ActionKind.ENTER_MODE, mode=Mode.NORMAL)
    if ev.code is KeyCode.CHAR and ev.char:
        return Action(ActionKind.PRINT_CHAR, char=ev.char)
    if ev.code is KeyCode.BACKSPACE:
        return Action(ActionKind.BACKSPACE)
    if ev.code is KeyCode.ENTER:
        return Action(ActionKind.NEW_LINE)
    return None


@dataclass
class Editor:
    """Cursor, scroll position and mode over a buffer."""

    buffer: Buffer = field(default_factory=Buffer)
    cx: int = 0
    cy: int = 0
    row_offset: int = 0
    mode: Mode = Mode.NORMAL
    status_message: str | None = None

    @classmethod
    def with_buffer(cls, buffer: Buffer) -> Editor:
        """Create an editor over ``buffer`` with the cursor at the start."""
        return cls(buffer=buffer)

    def handle_event(self, ev: object) -> Action | None:
        """Map an event to an action according to the current mode."""
        if self.mode is Mode.NORMAL:
            return handle_normal_event(ev)
        return handle_insert_event(ev)

    def _clamp_cx(self) -> None:
        try:
            length = self.buffer.line_length(self.cy)
        except BufferError:
            return
        self.cx = min(self.cx, length)

    def apply_action(self, action: Action) -> None:
        """Carry out ``action`` on the buffer and cursor."""
        log.debug("Applying action: %s", action)
        kind = action.kind
        if kind is ActionKind.MOVE_LEFT:
            if self.cx > 0:
                self.cx -= 1
                log.debug("Moved cursor left to column %d", self.cx)
        elif kind is ActionKind.MOVE_RIGHT:
            try:
                length = self.buffer.line_length(self.cy)
            except BufferError:
                return
            if self.cx < length:
                self.cx += 1
                log.debug("Moved cursor right to column %d", self.cx)
        elif kind is ActionKind.MOVE_UP:
            if self.cy > 0:
                self.cy -= 1
                self._clamp_cx()
        elif kind is ActionKind.MOVE_DOWN:
            if self.cy + 1 < len(self.buffer):
                self.cy += 1
                self._clamp_cx()
        elif kind is ActionKind.ENTER_MODE:
            log.info("Switching mode from %s to %s", self.mode.value, action.mode.value)
            self.mode = action.mode
        elif kind is ActionKind.PRINT_CHAR:
            try:
                self.buffer.insert_char(self.cy, self.cx, action.char)
            except BufferError:
                return
            self.cx += 1
        elif kind is ActionKind.BACKSPACE:
            self._backspace()
        elif kind is ActionKind.NEW_LINE:
            try:
                self.buffer.split_line(self.cy, self.cx)
            except BufferError:
                return
            self.cy += 1
            self.cx = 0
        elif kind is ActionKind.SAVE:
            log.info("Attempting to save file")
            self._report_save(self.buffer.save, "Saved.")
        elif kind is ActionKind.SAVE_AS:
            log.info("Attempting to save file as: %s", action.path)
            self._report_save(lambda: self.buffer.save_as(action.path), "Saved (as).")
        elif kind is ActionKind.DELETE_LINE:
            self._delete_line()

    def _backspace(self) -> None:
        if self.cx > 0:
            try:
                self.buffer.remove_char(self.cy, self.cx - 1)
            except BufferError:
                return
            self.cx -= 1
        elif self.cy > 0:
            try:
                previous_length = self.buffer.join_with_previous_line(self.cy)
            except BufferError:
                return
            self.cy -= 1
            self.cx = previous_length

    def _report_save(self, save, success: str) -> None:
        try:
            save()
        except BufferError as exc:
            log.warning("Error saving file: %s", exc)
            self.status_message = f"Error saving file: {exc}"
        else:
            log.info("File saved successfully")
            self.status_message = success

    def _delete_line(self) -> None:
        try:
            self.buffer.delete_line(self.cy)
        except BufferError as exc:
            self.status_message = f"Error deleting line: {exc}"
            return
        if self.cy >= len(self.buffer):
            self.cy = max(len(self.buffer) - 1, 0)
        self._clamp_cx()
        self.status_message = "Line deleted"

    def _percent(self) -> int:
        count = len(self.buffer)
        if count <= 1:
            return 100
        return math.floor(self.cy / (count - 1) * 100.0 + 0.5)

    def _status_parts(self) -> tuple[str, str]:
        marker = "*" if self.buffer.modified else ""
        left = f"{self.mode.value} > {self.buffer.display_name()}{marker} >"
        if self.status_message is not None:
            right = self.status_message
        else:
            right = f"Ln {self.cy + 1} Col {self.cx + 1}  {self._percent()}%"
        return left, right

    def status_line(self, width: int) -> str:
        """Compose the status bar text for a screen ``width`` columns wide."""
        left, right = self._status_parts()
        if len(left) + len(right) >= width:
            available = max(width - (len(left) + 1), 0)
            return left + right[:available]
        return left + " " * (width - len(left) - len(right)) + right

    def _scroll(self, visible_height: int) -> None:
        if self.cy < self.row_offset:
            self.row_offset = self.cy
        elif self.cy >= self.row_offset + visible_height:
            self.row_offset = max(self.cy - visible_height, 0) + 1

    def render(self, out: TextIO, width: int, height: int) -> None:
        """Draw the visible lines, the status bar and the cursor to ``out``."""
        visible_height = max(height - 1, 0)
        self._scroll(visible_height)
        parts = [_CLEAR]
        shown = self.buffer.lines[self.row_offset:self.row_offset + visible_height]
        for y, line in enumerate(shown):
            parts.append(_move(0, y))
            parts.append(line)
        status_y = max(height - 1, 0)
        parts.extend([
            _move(0, status_y),
            _BAR_BACKGROUND,
            self.mode.color,
            self.status_line(width).ljust(width),
            _RESET,
        ])
        cursor_x = min(self.cx, max(width - 1, 0))
        cursor_y = min(self.cy - self.row_offset, max(height - 1, 0))
        parts.append(_move(cursor_x, cursor_y))
        out.write("".join(parts))
        out.flush()