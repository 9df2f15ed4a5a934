"""Team data model."""

from dataclasses import dataclass

import config


@dataclass(frozen=True)
class Team:
    id: str  # abbreviation, e.g. "DEN"
    conference: str  # "AFC" or "NFC"
    seed: int  # 1-7 within the conference
    city: str = ""
    name: str = ""

    def __str__(self):
        label = f"{self.city} {self.name}".strip() or self.id
        return f"({self.seed}) {label}"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, Team):
            return False
        return self.id == other.id


# {conference: {seed: Team}}
Seeding = dict[str, dict[int, Team]]


def build_seeding(table: dict[str, dict[int, tuple[str, str, str]]] | None = None) -> Seeding:
    """Build Team objects from a raw seeding table.

    Args:
        table: {conference: {seed: (team_id, city, name)}}. Defaults to config.DEFAULT_SEEDING.
    """
    table = table if table is not None else config.DEFAULT_SEEDING
    seeding: Seeding = {}
    for conference, by_seed in table.items():
        seeding[conference] = {
            seed: Team(id=team_id, conference=conference, seed=seed, city=city, name=name)
            for seed, (team_id, city, name) in by_seed.items()
        }
    return seeding


DEFAULT_SEEDING = build_seeding()


def get_seed_team(conference: str, seed: int, seeding: Seeding | None = None) -> Team:
    """Look up the team holding a seed. Raises KeyError for unknown conference or seed."""
    seeding = seeding if seeding is not None else DEFAULT_SEEDING
    return seeding[conference][seed]


def validate_seeding(seeding: Seeding):
    """Check that every conference has seeds 1-7 and team ids are unique."""
    seen = set()
    for conference in config.CONFERENCES:
        if conference not in seeding:
            raise ValueError(f"Seeding is missing conference {conference}")
        for seed in range(1, config.SEEDS_PER_CONFERENCE + 1):
            team = seeding[conference].get(seed)
            if team is None:
                raise ValueError(f"Seeding is missing {conference} seed {seed}")
            if team.conference != conference or team.seed != seed:
                raise ValueError(f"Team {team.id} is filed under {conference} #{seed} but says {team.conference} #{team.seed}")
            if team.id in seen:
                raise ValueError(f"Duplicate team id in seeding: {team.id}")
            seen.add(team.id)
