import os

import pytest

from vix.buffer import (
    Buffer,
    BufferError,
    FileNotFoundInBufferError,
    InvalidColumnIndexError,
    InvalidLineIndexError,
)


def make(lines, file=None):
    return Buffer(file=file, lines=list(lines))


def test_new_buffer_has_single_empty_line():
    buf = Buffer.from_file(None)
    assert buf.lines == [""]
    assert len(buf) == 1
    assert buf.modified is False
    assert buf.display_name() == "[No Name]"


def test_from_missing_file_raises(tmp_path):
    missing = str(tmp_path / "nope.txt")
    with pytest.raises(FileNotFoundInBufferError) as info:
        Buffer.from_file(missing)
    assert missing in str(info.value)
    assert isinstance(info.value, BufferError)


def test_from_file_reads_lines(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"one\r\ntwo\nthree\n")
    buf = Buffer.from_file(str(path))
    assert buf.lines == ["one", "two", "three"]
    assert buf.file == str(path)
    assert buf.display_name() == str(path)
    assert buf.modified is False


def test_from_empty_file_has_no_lines(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert len(Buffer.from_file(str(path))) == 0


def test_get_line_out_of_range():
    buf = make(["a"])
    with pytest.raises(InvalidLineIndexError):
        buf.get_line(1)
    with pytest.raises(InvalidLineIndexError):
        buf.get_line(-1)


def test_insert_and_remove_round_trip():
    buf = make(["hello"])
    buf.insert_char(0, 2, "X")
    assert buf.get_line(0) == "heXllo"
    assert buf.modified is True
    assert buf.remove_char(0, 2) == "X"
    assert buf.get_line(0) == "hello"


def test_insert_at_end_allowed_past_end_rejected():
    buf = make(["ab"])
    buf.insert_char(0, 2, "c")
    assert buf.get_line(0) == "abc"
    with pytest.raises(InvalidColumnIndexError) as info:
        buf.insert_char(0, 5, "z")
    assert str(info.value) == "Invalid column index: 5 in line 0"


def test_remove_char_at_end_rejected():
    buf = make(["ab"])
    with pytest.raises(InvalidColumnIndexError):
        buf.remove_char(0, 2)
    assert buf.modified is False


def test_line_length_matches_text():
    buf = make(["abc", ""])
    assert buf.line_length(0) == len("abc")
    assert buf.line_length(1) == 0


def test_join_with_previous_line():
    buf = make(["foo", "bar", "baz"])
    prev_len = buf.join_with_previous_line(1)
    assert prev_len == len("foo")
    assert buf.lines == ["foobar", "baz"]
    assert buf.modified is True


def test_join_first_line_rejected():
    buf = make(["foo", "bar"])
    with pytest.raises(InvalidLineIndexError):
        buf.join_with_previous_line(0)
    assert buf.lines == ["foo", "bar"]


def test_split_then_join_restores_line():
    buf = make(["abcdef"])
    buf.split_line(0, 3)
    assert buf.lines == ["abc", "def"]
    buf.join_with_previous_line(1)
    assert buf.lines == ["abcdef"]


def test_split_line_bad_column():
    buf = make(["abc"])
    with pytest.raises(InvalidColumnIndexError):
        buf.split_line(0, 4)


def test_set_line():
    buf = make(["a", "b"])
    buf.set_line(1, "changed")
    assert buf.lines == ["a", "changed"]
    assert buf.modified is True
    with pytest.raises(InvalidLineIndexError):
        buf.set_line(2, "x")


def test_delete_line_removes_line():
    buf = make(["a", "b", "c"])
    buf.delete_line(1)
    assert buf.lines == ["a", "c"]
    with pytest.raises(InvalidLineIndexError):
        buf.delete_line(2)


def test_delete_only_line_clears_it():
    buf = make(["content"])
    buf.delete_line(0)
    assert buf.lines == [""]
    assert buf.modified is True


def test_delete_line_in_empty_buffer():
    buf = make([])
    with pytest.raises(InvalidLineIndexError):
        buf.delete_line(0)


def test_save_without_path():
    buf = make(["x"])
    with pytest.raises(FileNotFoundInBufferError) as info:
        buf.save()
    assert "No file path set" in str(info.value)


def test_save_round_trip(tmp_path):
    path = tmp_path / "f.txt"
    buf = make(["first", "second"], file=str(path))
    buf.save()
    assert path.read_text(encoding="utf-8") == "first\nsecond"
    assert Buffer.from_file(str(path)).lines == buf.lines


def test_save_as_creates_directories(tmp_path):
    target = tmp_path / "deep" / "dir" / "out.txt"
    buf = make(["line"])
    buf.modified = True
    buf.save_as(str(target))
    assert target.read_text(encoding="utf-8") == "line"
    assert buf.file == str(target)
    assert buf.modified is False


def test_save_as_overwrites_existing(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old", encoding="utf-8")
    buf = make(["new"])
    buf.save_as(str(target))
    assert target.read_text(encoding="utf-8") == "new"


def test_save_as_invalid_path():
    buf = make(["x"])
    with pytest.raises(FileNotFoundInBufferError):
        buf.save_as("")


def test_recovery_skipped_when_unmodified(tmp_path):
    buf = make(["x"], file=str(tmp_path / "f.txt"))
    assert buf.try_save_recovery() is None
    assert not os.path.exists(str(tmp_path / "f.txt.recovery"))


def test_recovery_written_when_modified(tmp_path):
    path = str(tmp_path / "f.txt")
    buf = make(["a", "b"], file=path)
    buf.insert_char(0, 0, "z")
    written = buf.try_save_recovery()
    assert written == path + ".recovery"
    with open(written, encoding="utf-8") as handle:
        assert handle.read() == "za\nb"


def test_recovery_for_unnamed_buffer(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    buf = make(["q"])
    buf.delete_line(0)
    assert buf.try_save_recovery() == ".unnamed.recovery"
    assert (tmp_path / ".unnamed.recovery").read_text(encoding="utf-8") == ""