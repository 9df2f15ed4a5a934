"""Pretty-print bracket output."""

from tabulate import tabulate

import config
from engine.state import LockReason, count_picks, lock_reason
from models.bracket import BracketState, ConferenceBracket, Matchup, iter_matchups
from models.live import LiveResultLookup


def format_matchup(matchup: Matchup) -> str:
    line = str(matchup)
    if matchup.winner:
        line += f"  ->  {matchup.winner}"
    return line


def print_bracket(state: BracketState):
    """Print the full bracket, round by round."""
    print("\n" + "=" * 60)
    print(f"           {state.owner_name.upper()}'S BRACKET" if state.owner_name else "           BRACKET")
    print(f"           {state.name}")
    print("=" * 60)

    for conf in (state.afc, state.nfc):
        _print_conference(conf)

    print(f"\n{'=' * 60}")
    print("           SUPER BOWL")
    print("=" * 60)
    print(f"\n  {format_matchup(state.super_bowl)}")
    if state.champion:
        print(f"  CHAMPION: {state.champion}")

    print("\n" + "=" * 60)
    print(f"  Picks made: {count_picks(state)} / {config.NUM_MATCHUPS}")
    if state.is_complete:
        print("  Bracket complete!")


def _print_conference(conf: ConferenceBracket):
    print(f"\n--- {conf.conference} ---")
    print(f"  Bye: {conf.bye_team}")

    print("  Wild Card:")
    for m in conf.wild_card:
        print(f"    [{m.id}] {format_matchup(m)}")

    print("  Divisional:")
    for m in conf.divisional:
        print(f"    [{m.id}] {format_matchup(m)}")

    print(f"  {conf.conference} Championship:")
    print(f"    [{conf.championship.id}] {format_matchup(conf.championship)}")


def print_status_table(state: BracketState, live_lookup: LiveResultLookup | None = None):
    """Print every matchup with its status and why it is locked, if it is."""
    rows = []
    for m in iter_matchups(state):
        reason = lock_reason(state, m.id, live_lookup)
        live = live_lookup(m.id) if live_lookup else None
        score = f"{live.home_score}-{live.away_score}" if live and live.has_started else ""
        rows.append([
            m.id,
            m.round.label,
            str(m.home_team) if m.home_team else "TBD",
            str(m.away_team) if m.away_team else "TBD",
            str(m.winner) if m.winner else "",
            m.status.value,
            "" if reason is LockReason.NONE else reason.value,
            score,
        ])

    headers = ["Matchup", "Round", "Home", "Away", "Pick", "Status", "Locked", "Score"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
