"""Test the main loop and the fatal error path."""

import os
import sys
import tempfile

import pytest

from ded.__main__ import main
from ded.constants import EditorConstants
from ded.editor import Editor
from ded.terminal import TerminalError


def test_run_draws_a_frame_per_key_until_quit(editor, terminal):
    editor.session.load_lines([b"one", b"two", b"three"])
    terminal.feed(b"jj:q\r")
    editor.run()

    assert editor.running == False
    assert editor.session.cursor.cy == 2
    # Startup frame, one per motion key, then two from the ':' prompt
    assert len(terminal.frames) == 5
    assert EditorConstants.HELP_MESSAGE[:terminal.cols] in terminal.frames[0]
    assert ":q" in terminal.frames[-1]
    assert terminal.calls == ['setup', 'clear_screen', 'cleanup']


def test_run_scrolls_before_drawing(editor, terminal):
    editor.session.load_lines([f"line {i}".encode() for i in range(15)])
    terminal.feed(b"j" * 9 + b":q\r")
    editor.run()

    assert editor.session.viewport.screenrows == 8
    assert editor.session.viewport.rowoff == 2
    last_main_frame = terminal.frames[9]
    assert last_main_frame.startswith("line 2\r\n")
    assert "line 1\r\n" not in last_main_frame


def test_run_handles_resize(editor, terminal):
    terminal.feed(b"j")
    terminal.resize(20, 60)
    terminal.feed(b":q\r")
    editor.run()

    assert editor.session.viewport.screenrows == 18
    assert editor.session.viewport.screencols == 60
    # The resize itself causes a redraw
    assert len(terminal.frames) == 5
    assert terminal.frames[2].count("~") == 18


def test_run_cleans_up_when_screen_size_fails(editor, terminal):
    def no_size():
        raise TerminalError("cannot determine terminal size")

    terminal.screen_size = no_size
    with pytest.raises(TerminalError):
        editor.run()
    assert terminal.calls == ['setup', 'cleanup']


def test_run_cleans_up_when_open_fails(editor, terminal):
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "missing", "f.txt")
        terminal.feed(b":o " + path.encode() + b"\r")
        with pytest.raises(OSError):
            editor.run()
    assert terminal.calls == ['setup', 'cleanup']


def test_main_exits_when_file_cannot_be_opened(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        monkeypatch.setattr(sys, "argv", ["ded", os.path.join(tmp, "nodir", "f.txt")])
        with pytest.raises(SystemExit) as excinfo:
            main()
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("ded: ")


def test_main_exits_on_terminal_error(monkeypatch, capsys):
    def run(self):
        raise TerminalError("standard input is not a terminal")

    monkeypatch.setattr(Editor, "run", run)
    monkeypatch.setattr(sys, "argv", ["ded"])
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == "ded: standard input is not a terminal\n"


def test_main_prints_version(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["ded", "--version"])
    main()
    assert capsys.readouterr().out.startswith("ded ")
