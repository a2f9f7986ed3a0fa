import io
import logging

import pytest

from hextwitch import cli
from hextwitch.auth import ApiHandler
from hextwitch.config import Preferences
from hextwitch.events import EatMode

LINES = [
    "@badges=moderator/1;display-name=Bob :bob!bob@bob.tmi.twitch.tv PRIVMSG #chan :hello\n",
    "\n",
    ":tmi.twitch.tv CLEARCHAT #chan\r\n",
]


@pytest.fixture(autouse=True)
def restore_root_logging():
    # main() reconfigures the root logger.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class CountingDispatcher:
    def __init__(self):
        self.lines: list[str] = []

    def handle_line(self, raw):
        self.lines.append(raw)
        return EatMode.NONE


class PollingApi:
    def __init__(self, polls_while_waiting: int):
        self.remaining = polls_while_waiting
        self.polls = 0

    @property
    def is_waiting(self):
        return self.remaining > 0

    def validate(self):
        self.polls += 1
        self.remaining -= 1
        return self.remaining == 0


def test_run_lines_skips_blank_lines():
    dispatcher = CountingDispatcher()
    assert cli.run_lines(LINES, dispatcher) == 2
    assert dispatcher.lines[1] == ":tmi.twitch.tv CLEARCHAT #chan"


def test_run_lines_polls_only_while_waiting():
    api = PollingApi(polls_while_waiting=1)
    cli.run_lines(LINES * 3, CountingDispatcher(), api)
    assert api.polls == 1


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.delenv("HEXTWITCH_OAUTH_TOKEN", raising=False)
    assert cli.main([], stdin=io.StringIO("".join(LINES))) == 0
    out = capsys.readouterr().out
    assert "#chan [CHANNEL_MESSAGE] Bob hello 🗡" in out
    assert "#chan [ERROR] Chat has been cleared by a moderator" in out


def test_main_reads_file(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("HEXTWITCH_OAUTH_TOKEN", raising=False)
    path = tmp_path / "session.log"
    path.write_text("".join(LINES), encoding="utf-8")
    assert cli.main([str(path)]) == 0
    assert "Chat has been cleared" in capsys.readouterr().out


def test_main_missing_file(tmp_path, monkeypatch):
    monkeypatch.delenv("HEXTWITCH_OAUTH_TOKEN", raising=False)
    assert cli.main([str(tmp_path / "absent.log")]) == 1


def test_main_with_stored_token_shuts_down_handler(monkeypatch):
    started: list[ApiHandler] = []
    stopped: list[ApiHandler] = []
    monkeypatch.setenv("HEXTWITCH_OAUTH_TOKEN", "tok")
    monkeypatch.setattr(ApiHandler, "_start", lambda self: started.append(self))
    monkeypatch.setattr(ApiHandler, "shutdown", lambda self: stopped.append(self))
    assert cli.main([], stdin=io.StringIO("")) == 0
    assert len(started) == 1
    assert stopped == started


def test_health_check_ok(monkeypatch):
    monkeypatch.setenv("HEXTWITCH_DEBUG", "true")
    assert cli.main(["--health-check"]) == 0


def test_health_check_rejects_invalid_preferences(monkeypatch):
    def invalid(environ=None):
        return Preferences(debug="maybe")

    monkeypatch.setattr(cli.PreferenceStore, "from_env", invalid)
    assert cli.main(["--health-check"]) == 1
