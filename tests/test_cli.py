"""Tests for the ``hub`` CLI commands."""

from __future__ import annotations

from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from hub_pages import cli
from hub_pages.assembler import PageAssembler
from hub_pages.config import HubConfig
from hub_pages.models import TopicType

NOTE = {
    "title": "Note",
    "base_path": "/note",
    "details": {"body": '<h2 id="one">One</h2>'},
}


@pytest.fixture
def fake_assembler(
    monkeypatch: pytest.MonkeyPatch, content_client, search_client
) -> PageAssembler:
    assembler = PageAssembler(
        HubConfig(),
        content_client=content_client({"/note": NOTE}),
        search_client=search_client(lambda query: {"results": []}),
    )
    monkeypatch.setattr(cli, "_assembler", lambda config, *, verbose: assembler)
    return assembler


def test_content_command_prints_json(
    fake_assembler: PageAssembler, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.content("/note")
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["title"] == "Note"
    assert payload["contents_list"] == [{"text": "One", "id": "one"}]


def test_missing_page_exits_non_zero(
    fake_assembler: PageAssembler, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.content("/absent")
    assert excinfo.value.code == 1
    assert "No content published at '/absent'" in capsys.readouterr().err


def test_subtopic_command_reports_missing_topic(
    fake_assembler: PageAssembler, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit):
        cli.subtopic("benefits", "entitlement", topic_type=TopicType.SPECIALIST)
    assert "/topic/benefits/entitlement" in capsys.readouterr().err


def test_missing_default_config_falls_back_to_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assembler = cli._assembler(cli.DEFAULT_CONFIG, verbose=False)
    assert assembler.config == HubConfig()


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli._assembler(tmp_path / "absent.yaml", verbose=False)
