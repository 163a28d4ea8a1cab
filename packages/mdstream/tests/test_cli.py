"""Tests for mdstream.cli"""
import os
import subprocess
import sys

import pytest
from typer.testing import CliRunner

from mdstream.cli import app

runner = CliRunner()

SRC_DIR = os.path.join(os.path.dirname(__file__), "..", "src")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("MDSTREAM_STYLE", raising=False)
    monkeypatch.delenv("MDSTREAM_WIDTH", raising=False)
    monkeypatch.delenv("MDSTREAM_WRITE_LOG", raising=False)
    monkeypatch.setenv("MDSTREAM_DIR", str(tmp_path))


class TestDocumentMode:
    def test_renders_stdin(self):
        result = runner.invoke(app, ["--style", "notty", "--width", "80"], input="# Hi\n\nsome text\n")
        assert result.exit_code == 0
        assert "Hi" in result.output
        assert "some text" in result.output

    def test_renders_file(self, tmp_path):
        path = tmp_path / "doc.md"
        path.write_text("- one\n- two\n")
        result = runner.invoke(app, [str(path), "--style", "notty"])
        assert result.exit_code == 0
        assert "one" in result.output
        assert "two" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "absent.md")])
        assert result.exit_code == 2

    def test_unknown_style(self):
        result = runner.invoke(app, ["--style", "no-such-style"], input="x\n")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_env_width(self, monkeypatch):
        monkeypatch.setenv("MDSTREAM_WIDTH", "wide")
        result = runner.invoke(app, [], input="x\n")
        assert result.exit_code == 2

    def test_write_failure_reported(self, monkeypatch):
        def broken_pipe(self, data):
            raise OSError("broken pipe")

        monkeypatch.setattr("mdstream.cli.ProcessTerminal.write", broken_pipe)
        result = runner.invoke(app, ["--style", "notty"], input="x\n")
        assert result.exit_code == 1
        assert "Error (write)" in result.output
        assert "broken pipe" in result.output

    def test_debug_creates_log_dir(self, monkeypatch, tmp_path):
        log_dir = tmp_path / "cfg"
        monkeypatch.setenv("MDSTREAM_DIR", str(log_dir))
        result = runner.invoke(app, ["--debug", "--style", "notty"], input="x\n")
        assert result.exit_code == 0
        assert log_dir.is_dir()


class TestStreamMode:
    def test_stream_stdin(self):
        result = runner.invoke(app, ["--stream", "--style", "notty", "--width", "80"], input="hello\nworld\n")
        assert result.exit_code == 0
        assert result.output == "hello\nworld\n\n"

    def test_stream_empty_input(self):
        result = runner.invoke(app, ["-s", "--style", "notty"], input="")
        assert result.exit_code == 0
        assert result.output == ""

    def test_stream_preserve_new_lines_flag(self):
        result = runner.invoke(app, ["-s", "-n", "--style", "notty"], input="a\nb\n")
        assert result.exit_code == 0
        assert result.output == "a\nb\n\n"


@pytest.mark.integration
def test_stream_subprocess():
    env = dict(os.environ, PYTHONPATH=os.path.abspath(SRC_DIR), MDSTREAM_STYLE="notty")
    proc = subprocess.run(
        [sys.executable, "-m", "mdstream", "--stream"],
        input=b"intro\n\nsentinel line\n\n| a | b |\n|---|---|\n| 1 | 2 |\n",
        capture_output=True,
        env=env,
        timeout=30,
    )
    assert proc.returncode == 0
    out = proc.stdout.decode("utf-8")
    assert out.count("sentinel line") == 1
    assert "| 1          | 2          |" in out
