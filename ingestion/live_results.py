"""Live game results from a CSV snapshot.

Used to lock matchups whose real games have kicked off. Fetching and polling
live scores is left to whatever produces the file.

Expected columns: matchup_id, home_team, away_team, home_score, away_score, status
Optional columns: quarter, time_remaining
Status is one of: scheduled, in_progress, final
"""

import pandas as pd

from models.live import LiveResult, LiveResultLookup

REQUIRED_COLUMNS = ["matchup_id", "home_team", "away_team", "home_score", "away_score", "status"]
STATUSES = {"scheduled", "in_progress", "final"}


def load_live_results_from_csv(filepath: str) -> dict[str, LiveResult]:
    """Load live results keyed by matchup id.

    Raises:
        ValueError: a required column is missing or a status is unknown
    """
    df = pd.read_csv(filepath, dtype={"matchup_id": str, "home_team": str, "away_team": str})
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{filepath}: missing columns {missing}")

    results = {}
    for _, row in df.iterrows():
        status = str(row["status"]).strip().lower()
        if status not in STATUSES:
            raise ValueError(f"{filepath}: unknown status {status!r} for {row['matchup_id']}")

        quarter = row.get("quarter")
        time_remaining = row.get("time_remaining")
        results[str(row["matchup_id"]).strip()] = LiveResult(
            home_team_id=str(row["home_team"]).strip(),
            away_team_id=str(row["away_team"]).strip(),
            home_score=_to_int(row["home_score"]),
            away_score=_to_int(row["away_score"]),
            is_in_progress=status == "in_progress",
            is_complete=status == "final",
            quarter=None if pd.isna(quarter) else int(quarter),
            time_remaining=None if pd.isna(time_remaining) else str(time_remaining),
        )

    print(f"Loaded live results for {len(results)} games from {filepath}")
    return results


def make_lookup(results: dict[str, LiveResult]) -> LiveResultLookup:
    """Wrap loaded results as the lookup the engine's lock checks take."""
    return results.get


def _to_int(value) -> int:
    if pd.isna(value):
        return 0
    return int(value)
