"""Seeding loader - override the built-in playoff seeds.

Expected JSON format:
{
    "AFC": {
        "1": {"id": "DEN", "city": "Denver", "name": "Broncos"},
        ...
        "7": {"id": "LAC", "city": "Los Angeles", "name": "Chargers"}
    },
    "NFC": {...}
}
"""

import json
import os

import config
from models.team import Seeding, Team, validate_seeding


def load_seeding_from_json(filepath: str) -> Seeding:
    """Load a seeding table from a JSON file.

    Raises:
        ValueError: a conference or seed is missing, a team id repeats, or an entry has no id
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    seeding: Seeding = {}
    for conference in config.CONFERENCES:
        entries = data.get(conference)
        if not entries:
            raise ValueError(f"{filepath}: missing conference {conference}")

        teams = {}
        for seed_str, entry in entries.items():
            seed = int(seed_str)
            if not 1 <= seed <= config.SEEDS_PER_CONFERENCE:
                raise ValueError(f"{filepath}: {conference} seed {seed} out of range")
            if isinstance(entry, str):
                entry = {"id": entry}
            team_id = str(entry.get("id", "")).strip()
            if not team_id:
                raise ValueError(f"{filepath}: {conference} #{seed} has no team id")
            teams[seed] = Team(
                id=team_id,
                conference=conference,
                seed=seed,
                city=entry.get("city", ""),
                name=entry.get("name", ""),
            )
        seeding[conference] = teams

    validate_seeding(seeding)
    print(f"Loaded seeding from {filepath}")
    return seeding


def save_seeding_to_json(seeding: Seeding, filepath: str):
    """Save a seeding table in the format load_seeding_from_json reads."""
    data = {}
    for conference in config.CONFERENCES:
        data[conference] = {
            str(seed): {"id": team.id, "city": team.city, "name": team.name}
            for seed, team in sorted(seeding[conference].items())
        }

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"Saved seeding to {filepath}")
