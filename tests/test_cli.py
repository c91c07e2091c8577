import io

import pytest
import structlog

from quotealign.cli import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def rich_file(tmp_path):
    path = tmp_path / "post.txt"
    path.write_text("before [b]hello world[/b] after\n", encoding="utf-8")
    return path


def test_align_from_argument(rich_file, capsys):
    assert main([str(rich_file), "hello world"]) == 0
    assert capsys.readouterr().out == "[b]hello world[/b]\n"


def test_align_from_stdin(rich_file, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("hello world\n"))
    assert main([str(rich_file)]) == 0
    assert capsys.readouterr().out == "[b]hello world[/b]\n"


def test_verbose_reports_abstention(rich_file, capsys):
    assert main([str(rich_file), "nowhere to be found", "--verbose"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "nowhere to be found\n"
    assert "abstained (NO_MATCH)" in captured.err


def test_partial_mode(tmp_path, capsys):
    path = tmp_path / "quote.txt"
    path.write_text("[quote=a]alpha [i]beta[/i] gamma[/quote]", encoding="utf-8")

    assert main([str(path), "beta", "--partial"]) == 0
    assert capsys.readouterr().out == "[quote=a]\n[i]beta[/i]\n[/quote]\n"


def test_multi_line_flag(tmp_path, capsys):
    path = tmp_path / "quote.txt"
    path.write_text("[quote=a]alpha beta[/quote]", encoding="utf-8")

    assert main([str(path), "[quote=a]alpha beta[/quote]", "--multi-line"]) == 0
    assert capsys.readouterr().out == "[quote=a]\nalpha beta\n[/quote]\n"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "x"]) == 1
    assert "not found" in capsys.readouterr().err
