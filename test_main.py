import types

import pytest

import main


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch):
    # keep tests away from ~/.config
    monkeypatch.setattr(main, "load_config", lambda: {
        "SAMPLE_LIMIT": 50, "FILTER_MODE": "query", "LOG_LEVEL": "WARNING",
    })
    monkeypatch.setattr(main, "ensure_config_dirs", lambda: None)
    monkeypatch.setattr(main, "setup_logger", lambda *a, **k: None)


@pytest.mark.parametrize(
    "argv, passthru, title, mode",
    [
        ([], False, None, None),
        (["data.csv", "-p"], True, None, None),
        (["-", "--title", "People", "--filter-mode", "regex"], False, "People", "regex"),
    ],
)
def test_parser(argv, passthru, title, mode):
    args = main.build_parser().parse_args(argv)
    assert args.passthru is passthru
    assert args.title == title
    assert args.filter_mode == mode


def test_unsupported_file_fails(capsys):
    assert main.main(["data.txt"]) == 1
    assert "Load failed" in capsys.readouterr().err


def test_passthru_prints_selected_rows(tmp_path, monkeypatch, capsys):
    path = tmp_path / "people.csv"
    path.write_text("Name,Age\nAlice,30\nBob,7\nCarol,41\n")

    calls = {}

    def fake_run_session(table, pass_through, title, config):
        calls.update(title=title, pass_through=pass_through, mode=config["FILTER_MODE"])
        return {2, 0}

    import orchestrator

    monkeypatch.setattr(orchestrator, "run_session", fake_run_session)
    monkeypatch.setattr(main, "_terminal_attached", _no_tty)

    assert main.main([str(path), "-p", "--filter-mode", "regex"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["Name,Age", "Alice,30", "Carol,41"]
    assert calls == {"title": "people.csv", "pass_through": True, "mode": "regex"}


def test_without_passthru_prints_nothing(tmp_path, monkeypatch, capsys):
    path = tmp_path / "people.csv"
    path.write_text("Name,Age\nAlice,30\n")

    import orchestrator

    monkeypatch.setattr(orchestrator, "run_session", lambda *a, **k: set())
    monkeypatch.setattr(main, "_terminal_attached", _no_tty)

    assert main.main([str(path), "-t", "x"]) == 0
    assert capsys.readouterr().out == ""


class _no_tty:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_version_flag_reports_installed_distribution(monkeypatch, capsys):
    monkeypatch.setattr(main, "__version__", "9.8.7")
    with pytest.raises(SystemExit) as excinfo:
        main.build_parser().parse_args(["-v"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "9.8.7"


def test_version_matches_package_metadata():
    from importlib.metadata import PackageNotFoundError, version

    try:
        expected = version("outgrid")
    except PackageNotFoundError:
        expected = "0.0.0"
    assert main.__version__ == expected


class _Stream:
    def __init__(self, tty):
        self.tty = tty
        self.flushed = 0

    def isatty(self):
        return self.tty

    def flush(self):
        self.flushed += 1


class _Os:
    O_RDWR = 2

    def __init__(self):
        self.calls = []

    def open(self, path, flags):
        self.calls.append(("open", path))
        return 42

    def dup(self, fd):
        self.calls.append(("dup", fd))
        return 100 + fd

    def dup2(self, src, dst):
        self.calls.append(("dup2", src, dst))

    def close(self, fd):
        self.calls.append(("close", fd))


def _fake_terminal(monkeypatch, tty):
    fake_os = _Os()
    fake_sys = types.SimpleNamespace(stdin=_Stream(tty), stdout=_Stream(tty))
    monkeypatch.setattr(main, "os", fake_os)
    monkeypatch.setattr(main, "sys", fake_sys)
    return fake_os, fake_sys


def test_terminal_attached_redirects_piped_fds_and_restores(monkeypatch):
    fake_os, fake_sys = _fake_terminal(monkeypatch, tty=False)

    with main._terminal_attached():
        assert fake_os.calls == [
            ("open", "/dev/tty"),
            ("dup", 0),
            ("dup2", 42, 0),
            ("dup", 1),
            ("dup2", 42, 1),
        ]
        del fake_os.calls[:]

    assert fake_os.calls == [
        ("dup2", 100, 0),
        ("close", 100),
        ("dup2", 101, 1),
        ("close", 101),
        ("close", 42),
    ]
    # once before stdout is moved, once before it is restored
    assert fake_sys.stdout.flushed == 2


def test_terminal_attached_leaves_real_terminals_alone(monkeypatch):
    fake_os, _ = _fake_terminal(monkeypatch, tty=True)
    with main._terminal_attached():
        pass
    assert fake_os.calls == []
