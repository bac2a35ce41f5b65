"""Tests for the command-line adapter."""

import pytest

from assistantkit.api import cli
from assistantkit.core.client import OpenAIClient
from assistantkit.core.errors import APIStatusError
from assistantkit.networking import config


@pytest.fixture
def wired(monkeypatch, fake_networking, tmp_path):
    """Route the CLI's client through the scripted transport."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(config.API_KEY_ENV, "sk-cli")
    monkeypatch.setattr(
        cli, "OpenAIClient", lambda settings: OpenAIClient(settings, networking=fake_networking)
    )
    return fake_networking


class TestCommands:
    def test_models(self, wired, capsys):
        wired.queue({
            "object": "list",
            "data": [
                {"id": "gpt-4", "object": "model", "created": 1, "owned_by": "openai"},
                {"id": "gpt-3.5-turbo", "object": "model", "created": 1, "owned_by": "openai"},
            ],
        })
        assert cli.main(["models"]) == 0
        assert capsys.readouterr().out.splitlines() == ["gpt-4", "gpt-3.5-turbo"]

    def test_run_prints_answer(self, wired, payloads, capsys):
        wired.queue(payloads.run("completed"), payloads.list(payloads.message(text="4")))
        assert cli.main(["run", "--assistant", "asst_1", "--message", "2+2?"]) == 0

        method, endpoint, body, _ = wired.calls[0]
        assert (method, endpoint) == ("POST", "threads/runs")
        assert body["thread"] == {"messages": [{"role": "user", "content": "2+2?"}]}
        out = capsys.readouterr().out
        assert "run_1 completed" in out
        assert out.rstrip().endswith("4")

    def test_run_on_existing_thread(self, wired, payloads):
        wired.queue(
            payloads.message(),
            payloads.run("completed"),
            payloads.list(payloads.message()),
        )
        cli.main(["run", "--assistant", "asst_1", "--thread", "thread_1", "--message", "hi"])
        assert wired.endpoints[:2] == [
            ("POST", "threads/thread_1/messages"),
            ("POST", "threads/thread_1/runs"),
        ]

    def test_failed_run_exit_code(self, wired, payloads, capsys):
        wired.queue(payloads.run(
            "failed", last_error={"code": "server_error", "message": "boom"}
        ))
        assert cli.main(["run", "--assistant", "asst_1"]) == 1
        assert "server_error: boom" in capsys.readouterr().out

    def test_cancel_already_finished(self, wired, payloads, capsys):
        wired.queue(payloads.run("completed"))
        assert cli.main(["cancel", "thread_1", "run_1"]) == 1
        assert "already completed" in capsys.readouterr().err

    def test_service_error_exit_code(self, wired, capsys):
        wired.queue(APIStatusError(401, "Incorrect API key provided"))
        assert cli.main(["models"]) == 1
        assert "Incorrect API key" in capsys.readouterr().err


class TestCredentials:
    def test_prompts_when_no_key(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(config.API_KEY_ENV, raising=False)
        monkeypatch.delenv(config.KEY_FILE_ENV, raising=False)
        monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: "sk-typed\n")

        assert cli.resolve_settings().api_key == "sk-typed"

    def test_uses_environment_without_prompt(self, monkeypatch):
        monkeypatch.setenv(config.API_KEY_ENV, "sk-env")

        def fail(prompt):
            raise AssertionError("prompted")

        monkeypatch.setattr(cli.getpass, "getpass", fail)
        assert cli.resolve_settings().api_key == "sk-env"
