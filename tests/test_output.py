from __future__ import annotations

import csv
from pathlib import Path

from engine.autofill import autofill_bracket
from engine.state import create_initial_bracket, select_winner
from models.live import LiveResult
from models.team import DEFAULT_SEEDING
from output.picks_export import export_picks_csv, picks_in_fill_order, print_fill_order
from output.printer import print_bracket, print_status_table


def test_picks_in_fill_order():
    state = create_initial_bracket("Alex")
    state = select_winner(state, "nfc-wc-1", DEFAULT_SEEDING["NFC"][2])
    state = select_winner(state, "afc-wc-3", DEFAULT_SEEDING["AFC"][5])

    rows = picks_in_fill_order(state)
    assert [r["matchup"] for r in rows] == ["afc-wc-3", "nfc-wc-1"]
    assert rows[0] == {
        "pick_number": 1,
        "round": "Wild Card",
        "conference": "AFC",
        "matchup": "afc-wc-3",
        "seed": 5,
        "team": "BUF",
    }


def test_full_bracket_fill_order_ends_with_super_bowl():
    rows = picks_in_fill_order(autofill_bracket(create_initial_bracket("Alex")))
    assert len(rows) == 13
    assert rows[-1]["matchup"] == "super-bowl"
    assert rows[-1]["conference"] == "Super Bowl"
    assert [r["pick_number"] for r in rows] == list(range(1, 14))


def test_export_picks_csv(tmp_path: Path):
    path = tmp_path / "picks.csv"
    export_picks_csv(autofill_bracket(create_initial_bracket("Alex")), str(path))

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 13
    assert rows[0]["team"] == "NE"
    assert rows[-1]["team"] == "DEN"


def test_print_bracket(capsys):
    print_bracket(autofill_bracket(create_initial_bracket("Alex")))
    out = capsys.readouterr().out
    assert "ALEX'S BRACKET" in out
    assert "CHAMPION: (1) Denver Broncos" in out
    assert "Picks made: 13 / 13" in out
    assert "Bracket complete!" in out


def test_print_fill_order(capsys):
    print_fill_order(select_winner(create_initial_bracket("Alex"), "afc-wc-1", DEFAULT_SEEDING["AFC"][2]))
    out = capsys.readouterr().out
    assert "(2) NE  [afc-wc-1]" in out
    assert "Total picks: 1" in out


def test_print_status_table_shows_lock_reasons(capsys):
    lookup = {"afc-wc-1": LiveResult("NE", "LAC", 14, 3, is_in_progress=True)}.get
    print_status_table(create_initial_bracket("Alex"), lookup)
    out = capsys.readouterr().out
    assert "game_started" in out
    assert "teams_undecided" in out
    assert "14-3" in out
