"""Pick listings in fill-in order.

Outputs picks round by round (AFC before NFC within each round), the order a
bracket is usually filled in, so picks can be copied into another site.
"""

import csv

from models.bracket import BracketState, Round, matchups_by_round

FILL_ORDER = [Round.WILD_CARD, Round.DIVISIONAL, Round.CONFERENCE, Round.SUPER_BOWL]


def picks_in_fill_order(state: BracketState) -> list[dict]:
    """All decided matchups as rows: pick_number, round, conference, matchup, seed, team."""
    rows = []
    for round_ in FILL_ORDER:
        for m in sorted(matchups_by_round(state, round_), key=lambda m: (m.conference or "", m.id)):
            if m.winner is None:
                continue
            rows.append({
                "pick_number": len(rows) + 1,
                "round": round_.label,
                "conference": m.conference or "Super Bowl",
                "matchup": m.id,
                "seed": m.winner.seed,
                "team": m.winner.id,
            })
    return rows


def print_fill_order(state: BracketState):
    print("\n" + "=" * 60)
    print("    BRACKET FILL-IN ORDER")
    print("=" * 60)

    current_round = None
    rows = picks_in_fill_order(state)
    for row in rows:
        if row["round"] != current_round:
            current_round = row["round"]
            print(f"\n  {current_round}:")
        print(f"    {row['pick_number']:2d}. ({row['seed']}) {row['team']}  [{row['matchup']}]")

    print(f"\n  Total picks: {len(rows)}")
    print("=" * 60)


def export_picks_csv(state: BracketState, filepath: str):
    """Export picks as a CSV file.

    Columns: pick_number, round, conference, matchup, seed, team
    """
    rows = picks_in_fill_order(state)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["pick_number", "round", "conference", "matchup", "seed", "team"])
        writer.writeheader()
        writer.writerows(rows)

    print(f"Exported {len(rows)} picks to {filepath}")
