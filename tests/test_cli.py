"""Tests for the terminal interface"""

import importlib
import json
import logging

import pytest

from foliobot import cli, config
from foliobot.builtin_knowledge import default_keyword_responses
from foliobot.knowledge import KnowledgeBase
from foliobot.widget import ChatWidget


def _script(monkeypatch, lines):
    answers = iter(lines)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))


def test_about(capsys):
    assert cli.main(["--about"]) == 0
    assert "foliobot" in capsys.readouterr().out


def test_bad_knowledge_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "kb.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert cli.main(["--kb", str(path)]) == 2
    assert "kb.json" in capsys.readouterr().err


def test_load_knowledge_choices(tmp_path):
    parser = cli.build_parser()
    assert isinstance(cli.load_knowledge(parser.parse_args(["--keywords"])), dict)
    path = tmp_path / "kb.json"
    path.write_text(json.dumps({"hello": "Hi!"}), encoding="utf-8")
    assert cli.load_knowledge(parser.parse_args(["--kb", str(path)])) == {"hello": "Hi!"}


def test_interactive_session(monkeypatch, capsys):
    _script(monkeypatch, ["hi", "stats", "history", "close", "what is llm", "open", "  ", "quit"])
    assert cli.main(["--delay", "0", "--no-typing"]) == 0
    out = capsys.readouterr().out
    assert "Thanks for visiting my portfolio" in out
    assert "Fallback replies: 0" in out
    assert "The chat is closed" in out
    assert "(chat opened)" in out


def test_interactive_session_with_delay(monkeypatch, capsys):
    _script(monkeypatch, ["ohellos", "quit"])
    assert cli.main(["--keywords", "--delay", "0.05", "--no-typing"]) == 0
    assert "Thanks for visiting my portfolio" in capsys.readouterr().out


def test_end_of_input_quits(monkeypatch):
    def raise_eof(_prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert cli.main(["--delay", "0", "--no-typing"]) == 0


@pytest.mark.parametrize("command,expected", [
    ("help", True),
    ("HISTORY", True),
    ("clear", True),
    ("quit", False),
    ("what is llm", None),
])
def test_handle_command(command, expected, capsys):
    renderer = cli.TerminalRenderer(typing_delay=0)
    app = cli.FolioBotCLI(ChatWidget(renderer=renderer), renderer)
    assert app.handle_command(command) is expected


def test_clear_resets_printed_position(capsys):
    renderer = cli.TerminalRenderer(typing_delay=0)
    widget = ChatWidget([("hi", "Hello!")], renderer=renderer)
    app = cli.FolioBotCLI(widget, renderer)
    widget.open()
    app.send("hi")
    app.handle_command("clear")
    app.send("hi")
    assert capsys.readouterr().out.count("Hello!") == 2


def test_keywords_flag_beats_environment_file(tmp_path, monkeypatch):
    path = tmp_path / "kb.json"
    path.write_text(json.dumps([{"question": "hi", "answer": "Hello"}]), encoding="utf-8")
    monkeypatch.setenv("FOLIOBOT_KB_FILE", str(path))
    monkeypatch.setattr(config, "KNOWLEDGE_BASE_FILE", str(path))
    parser = cli.build_parser()
    assert cli.load_knowledge(parser.parse_args(["--keywords"])) == default_keyword_responses()
    kb = cli.load_knowledge(parser.parse_args([]))
    assert isinstance(kb, KnowledgeBase)
    assert kb[0].answer == "Hello"


def test_kb_and_keywords_are_exclusive(capsys):
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--kb", "kb.json", "--keywords"])


def test_module_entry_quiets_package_logging():
    package_logger = logging.getLogger("foliobot")
    previous = package_logger.level
    try:
        importlib.import_module("foliobot.__main__")
        assert package_logger.level == logging.ERROR
    finally:
        package_logger.setLevel(previous)
