# vix

`vix` is a small modal text editor for the terminal. It opens one file (or
an empty, unnamed buffer), starts in **normal** mode and uses vi-like keys
to move around and edit.

## Installing

```
pip install .
```

## Running

```
vix path/to/file.txt
```

If no path is given, you start with an empty buffer named `[No Name]`. If
the path does not exist, `vix` prints `Error: File not found: <path>` to
standard error and exits with status 1.

## Keys

Normal mode:

| Key      | Action                                      |
|----------|---------------------------------------------|
| `h`      | move left                                   |
| `j`      | move down                                   |
| `k`      | move up                                     |
| `l`      | move right                                  |
| `i`      | enter insert mode                           |
| `Ctrl-s` | save to the current file                    |
| `Ctrl-d` | delete the current line                     |
| `q`      | quit                                        |

Insert mode:

| Key         | Action                                   |
|-------------|------------------------------------------|
| any char    | insert it at the cursor                  |
| `Backspace` | delete before the cursor, or join lines  |
| `Enter`     | split the line at the cursor             |
| `Esc`       | return to normal mode                    |

The status bar on the last row shows the mode, the file name (with `*` when
there are unsaved changes), and either the last status message or the
cursor's line, column and position in the file as a percentage.

Saving an unnamed buffer with `Ctrl-s` fails and shows the error in the
status bar. The editor also has a "save as" action, bound to a key event
for `S` with the Control modifier, which writes to `new_file.txt`; a
terminal sends the same byte for `Ctrl-S` as for `Ctrl-s`, so from the
keyboard this arrives as a plain save.

## Logging

Debug logs are appended to `~/.vix/vix.log`; the directory is created when
needed.

## Using it as a library

```python
from vix.buffer import Buffer
from vix.editor import Editor, KeyEvent, KeyCode

buffer = Buffer.from_file("notes.txt")
editor = Editor.with_buffer(buffer)
action = editor.handle_event(KeyEvent(KeyCode.CHAR, "i"))
editor.apply_action(action)
print(editor.status_line(80))
```

- `vix.buffer.Buffer` holds the lines, the file path and the modified flag,
  with `insert_char`, `remove_char`, `split_line`, `join_with_previous_line`,
  `delete_line`, `save`, `save_as` and `try_save_recovery` (which writes
  unsaved changes to `<file>.recovery` or `.unnamed.recovery`).
- `vix.editor.Editor` keeps the cursor, scroll offset and mode;
  `handle_event` maps a `KeyEvent` to an `Action`, `apply_action` carries
  it out, and `render(out, width, height)` draws the screen with ANSI escapes.
- `vix.cli.run(editor, events, out, size)` drives an editor from any iterable
  of key events; `translate_key` turns a terminal keystroke into a `KeyEvent`.
- `vix.logger.FileLogger.init(path)` installs a logging handler that appends
  timestamped lines to a file.

`Buffer` raises `FileNotFoundInBufferError`, `InvalidLineIndexError` or
`InvalidColumnIndexError` (all subclasses of `BufferError`) when an
operation cannot be carried out.

## What it does not do

There is no undo, no search, no command line (`:w`, `:q` and the like), no
prompt for a file name when saving as, and no horizontal scrolling: lines
wider than the screen are not scrolled into view. Quitting with `q` does not
ask about unsaved changes.

## Tests

```
pip install ".[test]"
pytest
```