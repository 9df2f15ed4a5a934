"""Bracket data structure.

The playoff field is two 7-team conference brackets feeding a Super Bowl:

- Wild Card:    3 games per conference (2v7, 3v6, 4v5); seed 1 has a bye
- Divisional:   2 games per conference, re-seeded from wild card winners
- Conference:   1 championship game per conference
- Super Bowl:   AFC champion vs NFC champion

13 matchups in total. Every value here is immutable; the engine builds a new
BracketState for each change and reuses Matchup objects that did not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import config
from models.team import Team


class Round(Enum):
    WILD_CARD = "wildCard"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    SUPER_BOWL = "superBowl"

    @property
    def label(self) -> str:
        return {
            Round.WILD_CARD: "Wild Card",
            Round.DIVISIONAL: "Divisional",
            Round.CONFERENCE: "Conference Championship",
            Round.SUPER_BOWL: "Super Bowl",
        }[self]


class MatchupStatus(Enum):
    UNREACHABLE = "unreachable"  # at least one team still depends on earlier picks
    PICKABLE = "pickable"  # both teams known, no winner yet
    DECIDED = "decided"


@dataclass(frozen=True)
class Matchup:
    id: str
    round: Round
    conference: str | None  # None for the Super Bowl
    home_team: Team | None = None
    away_team: Team | None = None
    winner: Team | None = None

    @property
    def status(self) -> MatchupStatus:
        if self.winner is not None:
            return MatchupStatus.DECIDED
        if self.home_team is not None and self.away_team is not None:
            return MatchupStatus.PICKABLE
        return MatchupStatus.UNREACHABLE

    def has_team(self, team: Team | None) -> bool:
        return team is not None and team in (self.home_team, self.away_team)

    def __str__(self):
        home = str(self.home_team) if self.home_team else "TBD"
        away = str(self.away_team) if self.away_team else "TBD"
        return f"{home} vs {away}"


@dataclass(frozen=True)
class ConferenceBracket:
    conference: str
    bye_team: Team
    wild_card: tuple[Matchup, Matchup, Matchup]
    divisional: tuple[Matchup, Matchup]
    championship: Matchup

    @property
    def matchups(self) -> list[Matchup]:
        return [*self.wild_card, *self.divisional, self.championship]


@dataclass(frozen=True)
class BracketState:
    afc: ConferenceBracket
    nfc: ConferenceBracket
    super_bowl: Matchup
    owner_name: str
    name: str = config.DEFAULT_BRACKET_NAME
    is_complete: bool = False

    def conference(self, conference: str) -> ConferenceBracket:
        if conference == "AFC":
            return self.afc
        if conference == "NFC":
            return self.nfc
        raise ValueError(f"Unknown conference: {conference}")

    @property
    def champion(self) -> Team | None:
        return self.super_bowl.winner


def iter_matchups(state: BracketState) -> Iterator[Matchup]:
    """Yield all 13 matchups in codec order.

    0-2 AFC wild card, 3-5 NFC wild card, 6-7 AFC divisional, 8-9 NFC divisional,
    10 AFC championship, 11 NFC championship, 12 Super Bowl.
    """
    yield from state.afc.wild_card
    yield from state.nfc.wild_card
    yield from state.afc.divisional
    yield from state.nfc.divisional
    yield state.afc.championship
    yield state.nfc.championship
    yield state.super_bowl


def find_matchup(state: BracketState, matchup_id: str) -> Matchup | None:
    """Find a matchup by id, or None if the id is unknown."""
    for matchup in iter_matchups(state):
        if matchup.id == matchup_id:
            return matchup
    return None


def matchups_by_round(state: BracketState, round_: Round) -> list[Matchup]:
    return [m for m in iter_matchups(state) if m.round is round_]
