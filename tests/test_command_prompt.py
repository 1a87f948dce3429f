"""Test the message-line prompt and the ':' command language."""

import os
import tempfile

from conftest import send_keys

from ded.constants import EditorConstants
from ded.prompt import execute_command


def test_prompt_returns_typed_text(editor):
    editor.terminal.feed(b"abc\x7fd\r")
    assert editor.prompt.ask(":%s") == "abd"
    assert editor.session.status_message == ""


def test_prompt_shows_input_on_message_line(editor):
    editor.terminal.feed(b"wq")
    editor.terminal.pause()
    editor.terminal.feed(b"\x1b")
    editor.terminal.pause()
    editor.prompt.ask(EditorConstants.SAVE_AS_PROMPT)
    assert any("Save as: wq [ESC to Cancel]" in frame for frame in editor.terminal.frames)


def test_prompt_ignores_enter_on_empty_input(editor):
    editor.terminal.feed(b"\r\rx\r")
    assert editor.prompt.ask(":%s") == "x"


def test_prompt_ignores_control_and_non_ascii_bytes(editor):
    editor.terminal.feed(b"a\x02\xc3\xa9b\r")
    assert editor.prompt.ask(":%s") == "ab"


def test_escape_aborts_command(editor):
    send_keys(editor, b":q", b"\x1b")
    assert editor.session.status_message == "Command Aborted"


def test_quit_when_unmodified(editor):
    editor.running = True
    send_keys(editor, b":q\r")
    assert editor.running == False


def test_quit_refused_with_unsaved_changes(editor):
    editor.running = True
    editor.session.load_lines([b"abc"])
    send_keys(editor, b"x:q\r")
    assert editor.running == True
    assert editor.session.status_message == "You have Unsaved Changes. Type :q! to exit without saving."


def test_force_quit(editor):
    editor.running = True
    editor.session.load_lines([b"abc"])
    send_keys(editor, b"x:q!\r")
    assert editor.running == False


def test_trailing_blanks_are_ignored(editor):
    editor.running = True
    execute_command(editor, "q \t ")
    assert editor.running == False


def test_write_quit_saves_then_quits(editor):
    editor.running = True
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "f.txt")
        editor.open_file(path)
        send_keys(editor, b"ihi", b"\x1b", b":wq\r")
        assert editor.running == False
        with open(path, 'rb') as f:
            assert f.read() == b"hi\n"


def test_write_quit_stays_open_when_save_fails(editor):
    editor.running = True
    editor.session.load_lines([b"data"])
    with tempfile.TemporaryDirectory() as tmp:
        editor.session.filename = os.path.join(tmp, "missing", "f.txt")
        send_keys(editor, b":wq\r")
        assert editor.running == True
        assert editor.session.status_message.startswith("Couldn't create temp file")


def test_invalid_commands(editor):
    for command in ("x", "wqq", "o", "open", "w!"):
        editor.session.set_status_message("")
        execute_command(editor, command)
        assert editor.session.status_message == "Invalid Command"


def test_open_into_empty_unnamed_buffer(editor):
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "f.txt")
        with open(path, 'wb') as f:
            f.write(b"one\ntwo\n")
        send_keys(editor, b":o " + path.encode() + b"\r")
        assert editor.filename == path
        assert editor.session.buffer.lines() == [b"one", b"two"]
        assert not editor.modified


def test_open_refused_when_file_already_open(editor):
    with tempfile.TemporaryDirectory() as tmp:
        first = os.path.join(tmp, "a.txt")
        editor.open_file(first)
        execute_command(editor, "o " + os.path.join(tmp, "b.txt"))
        assert editor.filename == first
        assert editor.session.status_message == "Already a file is open"


def test_open_refused_when_buffer_has_text(editor):
    send_keys(editor, b"ihello", b"\x1b")
    execute_command(editor, "o somefile.txt")
    assert editor.filename is None
    assert editor.session.status_message == "Unsaved Changes detected"
    assert editor.session.buffer.lines() == [b"hello"]
