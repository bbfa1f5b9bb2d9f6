import json

import pytest
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("OSH_PROMPT", "OSH_MAX_TOKENS", "OSH_LOG_LEVEL", "OSH_SHOW_BANNER"):
        monkeypatch.delenv(name, raising=False)


def test_plan_as_json():
    result = runner.invoke(app, ["plan", "ls -a | wc -l > out.txt &", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {
        "background": True,
        "exec_args": ["ls", "-a"],
        "pipe_args": ["-l"],
        "pipe_target": "wc",
        "piped": True,
        "redirect": {"direction": "out", "path": "out.txt"},
    }


def test_plan_table():
    result = runner.invoke(app, ["plan", "sort < in.txt"])

    assert result.exit_code == 0, result.output
    assert "Execution Plan" in result.output
    assert "< in.txt" in result.output


def test_plan_structural_error():
    result = runner.invoke(app, ["plan", "a < f1 < f2"])

    assert result.exit_code == 1
    assert "Multiple redirects" in result.output


def test_shell_command_status():
    assert runner.invoke(app, ["shell", "-c", "true"]).exit_code == 0
    assert runner.invoke(app, ["shell", "-c", "false"]).exit_code == 1


def test_shell_command_unknown_program():
    result = runner.invoke(app, ["shell", "-c", "definitely-not-a-program-osh"])

    assert result.exit_code == 1
    assert "Could not find a program named definitely-not-a-program-osh" in result.output


def test_repl_exits_on_exit():
    result = runner.invoke(app, [], input="exit\n")

    assert result.exit_code == 0
    assert "osh>" in result.output


def test_repl_reports_and_continues():
    result = runner.invoke(app, [], input="!!\n\nexit()\n")

    assert result.exit_code == 0
    assert "No commands in history" in result.output
    assert "Please enter a command!" in result.output


def test_repl_ends_on_eof():
    result = runner.invoke(app, ["shell", "--no-banner"], input="")
    assert result.exit_code == 0


def test_doctor_run():
    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "osh Doctor" in result.output


def test_doctor_config():
    result = runner.invoke(app, ["doctor", "config"])

    assert result.exit_code == 0, result.output
    assert "max_tokens" in result.output
    assert "0o600" in result.output
