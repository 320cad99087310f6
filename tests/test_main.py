import os

import pytest

from rawedit import __main__ as main_module
from rawedit.config import EditorConfig
from rawedit.ui.terminal import TerminalError

from conftest import FakeTerminal


class FakeRawTerminal(FakeTerminal):
    instances = []

    def __init__(self, read_timeout=1, data=b'\x11'):
        super().__init__(data, height=6, width=30)
        self.entered = False
        self.exited = False
        FakeRawTerminal.instances.append(self)

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.exited = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("RAWEDIT_TAB_STOP", "RAWEDIT_QUIT_TIMES", "RAWEDIT_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    FakeRawTerminal.instances = []


def test_parse_args():
    assert main_module.parse_args([]).file is None

    args = main_module.parse_args(["notes.txt", "--log-file", "debug.log"])
    assert args.file == "notes.txt"
    assert args.log_file == "debug.log"


def test_run_draws_and_quits():
    term = FakeTerminal(b'hi\x11\x11\x11\x11', height=6, width=60)
    main_module.run(term, EditorConfig())

    assert term.writes
    assert b'HELP: Ctrl-S = save | Ctrl-Q = quit' in term.writes[0]
    assert b'hi' in term.writes[-1]
    assert b'(modified)' in term.writes[-1]


def test_run_loads_file(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b'first\nsecond\n')
    term = FakeTerminal(b'\x11', height=6, width=30)
    main_module.run(term, EditorConfig(), str(path))

    assert b'first\x1b[K\r\nsecond\x1b[K\r\n' in term.writes[0]


def test_run_opens_file_with_undecodable_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with open(b"caf\xe9.txt", "wb") as f:
        f.write(b"text\n")
    term = FakeTerminal(b"\x11", height=6, width=30)
    main_module.run(term, EditorConfig(), os.fsdecode(b"caf\xe9.txt"))

    assert b"caf\xe9.txt - 1 lines" in term.writes[0]


def test_main_exits_zero_on_quit(monkeypatch):
    monkeypatch.setattr(main_module, "RawTerminal", FakeRawTerminal)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 0
    term = FakeRawTerminal.instances[0]
    assert term.entered and term.exited


def test_main_missing_file_is_fatal(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(main_module, "RawTerminal", FakeRawTerminal)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(tmp_path / "missing.txt")])

    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err
    assert FakeRawTerminal.instances[0].exited


def test_main_terminal_failure_is_fatal(monkeypatch, capsys):
    def broken_terminal(read_timeout=1):
        raise TerminalError("tcgetattr: not a tty")

    monkeypatch.setattr(main_module, "RawTerminal", broken_terminal)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 1
    assert "tcgetattr: not a tty" in capsys.readouterr().err
