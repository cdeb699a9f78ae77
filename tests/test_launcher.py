import pytest

import launcher
from desktop_entry import DesktopEntry, SemanticError
from launcher import build_argv, determine_launch, launch, terminal_command


def make_entry(exec_line, terminal="false", type_="Application"):
    return DesktopEntry.from_data(
        f"""
[Desktop Entry]
Encoding=UTF-8
Type={type_}
Name=Foo Viewer
Exec={exec_line}
Terminal={terminal}
""".strip()
    )


def test_terminal_command_default():
    assert terminal_command({}) == ["xterm", "-e"]
    assert terminal_command({"TERMINAL": ""}) == ["xterm", "-e"]


def test_terminal_command_from_environment():
    assert terminal_command({"TERMINAL": "gnome-terminal  --wait --"}) == [
        "gnome-terminal",
        "--wait",
        "--",
    ]


def test_build_argv_splits_quoted_arguments():
    entry = make_entry("fooview --title %c %F")
    argv = build_argv(entry, ["my notes.txt", "/tmp/b"], environ={})
    assert argv == ["fooview", "--title", "Foo", "Viewer", "my notes.txt", "/tmp/b"]


def test_build_argv_in_terminal():
    entry = make_entry("vim %f", terminal="true")
    argv = build_argv(entry, ["notes.txt"], environ={"TERMINAL": "kitty -e"})
    assert argv == ["kitty", "-e", "vim", "notes.txt"]


def test_build_argv_rejects_non_applications():
    entry = make_entry("fooview", type_="Link")
    with pytest.raises(SemanticError):
        build_argv(entry, [], environ={})


def test_determine_launch():
    entry = make_entry("fooview %f")
    assert determine_launch(entry, ["a"], environ={}) == ("run", ["fooview", "a"])
    assert determine_launch(entry, ["a"], replace=True, environ={}) == (
        "exec",
        ["fooview", "a"],
    )


def test_launch_runs_and_waits(monkeypatch):
    calls = []

    def fake_call(argv):
        calls.append(argv)
        return 3

    monkeypatch.setattr(launcher.subprocess, "call", fake_call)
    monkeypatch.delenv("TERMINAL", raising=False)
    entry = make_entry("fooview %f", terminal="true")
    assert launch(entry, ["a"]) == 3
    assert calls == [["xterm", "-e", "fooview", "a"]]


def test_launch_replaces_process(monkeypatch):
    calls = []

    def fake_execvp(file, argv):
        calls.append((file, argv))

    monkeypatch.setattr(launcher.os, "execvp", fake_execvp)
    entry = make_entry("fooview %U")
    launch(entry, ["http://example.com"], replace=True)
    assert calls == [("fooview", ["fooview", "http://example.com"])]


def test_build_argv_unbalanced_quote_in_name():
    entry = DesktopEntry.from_data(
        """
[Desktop Entry]
Encoding=UTF-8
Type=Application
Name=Don't Panic
Exec=fooview --title %c %f
""".strip()
    )
    with pytest.raises(SemanticError) as excinfo:
        build_argv(entry, ["a"], environ={})
    assert "fooview --title Don't Panic 'a'" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ValueError)
