"""Smoke tests for the command-line entrypoint.

Validates:
- APP_VERSION formatting
- argument parsing for each subcommand
- rendering of results and failures
- preference subcommands against an in-memory store
- section slugs for --category
- console logging setup and a full main() run against a settings file
"""

from __future__ import annotations

import json
import logging

import pytest

from conftest import FakeResponse, ok_payload
from newsdesk import main as cli
from newsdesk.config import LANGUAGE_KEY
from newsdesk.main import APP_VERSION, build_parser, configure_logging, main, render_outcome, run
from newsdesk.models import ErrorKind, NewsFailure


def test_app_version_constant() -> None:
    """APP_VERSION should be a simple version string without a 'v' prefix."""
    assert APP_VERSION == "0.2"


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_headlines_command_prints_articles(service, session, capsys) -> None:
    session.queue(FakeResponse(200, ok_payload(count=2, total=2)))
    args = build_parser().parse_args(["headlines", "--category", "science", "--page", "1"])
    assert run(args, service) == 0
    out = capsys.readouterr().out
    assert "2 of 2 article(s)" in out
    assert "[BBC News] Headline 0" in out


def test_search_command_reports_failure(service, capsys) -> None:
    args = build_parser().parse_args(["search", "bad;query"])
    assert run(args, service) == 1
    assert "InvalidQuery" in capsys.readouterr().out


def test_language_command_sets_and_shows(service, capsys) -> None:
    assert run(build_parser().parse_args(["language", "fr"]), service) == 0
    assert capsys.readouterr().out.strip() == "fr Français"
    assert run(build_parser().parse_args(["language", "xx"]), service) == 1


def test_select_and_sources_commands(service, capsys) -> None:
    assert run(build_parser().parse_args(["select", "en", "cnn", "wired"]), service) == 0
    assert capsys.readouterr().out.strip() == "cnn, wired"
    assert run(build_parser().parse_args(["sources", "--language", "en"]), service) == 0
    out = capsys.readouterr().out
    assert "* cnn" in out
    assert "  bbc-news" in out


def test_render_failure_line() -> None:
    failure = NewsFailure(kind=ErrorKind.RATE_LIMITED, message="Too many requests")
    assert render_outcome(failure) == ["error: RateLimited: Too many requests"]


@pytest.fixture
def console_handler_reset():
    yield
    if cli._console_handler is not None:
        logging.getLogger().removeHandler(cli._console_handler)
        cli._console_handler = None


def test_headlines_category_accepts_section_slug(service, session, capsys) -> None:
    session.queue(FakeResponse(200, ok_payload(count=1, total=1)))
    assert run(build_parser().parse_args(["headlines", "--category", "Shows"]), service) == 0
    assert session.calls[0]["params"]["category"] == "entertainment"
    assert run(build_parser().parse_args(["headlines", "--category", "gossip"]), service) == 1
    assert "InvalidCategory" in capsys.readouterr().out
    assert len(session.calls) == 1


def test_configure_logging_installs_one_console_handler(console_handler_reset) -> None:
    first = configure_logging()
    second = configure_logging(debug=True)
    assert first is second
    assert logging.getLogger().handlers.count(first) == 1
    assert first.level == logging.DEBUG


def test_main_language_command_writes_settings_file(tmp_path, capsys, console_handler_reset) -> None:
    settings = tmp_path / "settings.json"
    assert main(["--settings", str(settings), "language", "de"]) == 0
    assert capsys.readouterr().out.strip() == "de Deutsch"
    assert json.loads(settings.read_text(encoding="utf-8"))[LANGUAGE_KEY] == "de"
    assert main(["--settings", str(settings), "language"]) == 0
    assert capsys.readouterr().out.strip() == "de Deutsch"
