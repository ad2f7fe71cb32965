from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tripeaks.cli.main import app, apply_command
from tripeaks.layout import default_layout
from tripeaks.session import GameSession

runner = CliRunner()


def test_show_lists_zones_and_playable_cards() -> None:
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0, result.output
    assert "Tableau" in result.output
    assert "Stock" in result.output
    assert "Discard" in result.output
    assert result.output.count("playable") == 2


def test_show_rejects_malformed_layout(tmp_path: Path) -> None:
    path = tmp_path / "stage.json"
    path.write_text(json.dumps({"Playfield": []}), encoding="utf-8")

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 2
    assert "Invalid layout" in result.output
    assert "Stack" in result.output


def test_play_runs_scripted_moves() -> None:
    result = runner.invoke(app, ["play", "--moves", "2,0,u,u,x"])

    assert result.exit_code == 0, result.output
    assert "to the discard pile" in result.output
    assert "covered" in result.output
    assert "Card 2 returned to main" in result.output
    assert "Nothing to undo" in result.output
    assert "Unknown command" in result.output


def test_play_reads_commands_from_stdin() -> None:
    result = runner.invoke(app, ["play"], input="7\nq\n")

    assert result.exit_code == 0, result.output
    assert "(card 7) to the discard pile" in result.output


def test_apply_command_stops_on_quit() -> None:
    session = GameSession()
    session.start(default_layout())

    assert apply_command(session, "  ")
    assert apply_command(session, "5")
    assert not apply_command(session, "q")
    assert session.ledger.history_size == 0


def test_show_ends_its_session(monkeypatch: pytest.MonkeyPatch) -> None:
    ended: list[bool] = []
    original_end = GameSession.end

    def record_end(self: GameSession) -> None:
        ended.append(True)
        original_end(self)

    monkeypatch.setattr(GameSession, "end", record_end)

    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0, result.output
    assert ended == [True]
