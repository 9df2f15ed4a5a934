"""Bracket state engine.

Owns the full 13-game tree. Every operation takes a BracketState and returns a
new one; the input is never modified. After any pick or clear the divisional,
championship and Super Bowl teams are rebuilt from the winners feeding them, and
any downstream winner that is no longer one of its matchup's teams is dropped.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

import config
from engine.derivation import (
    Pairing,
    compute_championship_pairing,
    compute_divisional_pairing,
    compute_super_bowl_pairing,
)
from models.bracket import (
    BracketState,
    ConferenceBracket,
    Matchup,
    Round,
    find_matchup,
    iter_matchups,
)
from models.live import LiveResultLookup
from models.team import DEFAULT_SEEDING, Seeding, Team


class LockReason(Enum):
    NONE = "none"
    TEAMS_UNDECIDED = "teams_undecided"  # one or both team slots still empty
    GAME_STARTED = "game_started"  # the real game is under way or final


class InvalidPick(ValueError):
    """A pick or clear that the bracket can't accept. The caller's state is unchanged."""

    UNKNOWN_MATCHUP = "unknown_matchup"
    NOT_IN_MATCHUP = "not_in_matchup"
    TEAMS_UNDECIDED = LockReason.TEAMS_UNDECIDED.value
    GAME_STARTED = LockReason.GAME_STARTED.value

    def __init__(self, matchup_id: str, reason: str, message: str | None = None):
        self.matchup_id = matchup_id
        self.reason = reason
        super().__init__(message or f"Invalid pick for {matchup_id}: {reason}")


# --- Construction ---

def create_initial_bracket(owner_name: str, bracket_name: str | None = None,
                           seeding: Seeding | None = None) -> BracketState:
    """Build a fresh bracket: wild card games seeded, everything after them empty.

    Args:
        owner_name: Whose bracket this is
        bracket_name: Display name, defaults to config.DEFAULT_BRACKET_NAME
        seeding: {conference: {seed: Team}}, defaults to the built-in table
    """
    seeding = seeding if seeding is not None else DEFAULT_SEEDING

    conferences = {}
    for conference in config.CONFERENCES:
        teams = seeding[conference]
        wild_card = tuple(
            Matchup(
                id=config.wild_card_id(conference, slot),
                round=Round.WILD_CARD,
                conference=conference,
                home_team=teams[home_seed],
                away_team=teams[away_seed],
            )
            for slot, (home_seed, away_seed) in enumerate(config.WILD_CARD_SEED_MATCHUPS, 1)
        )
        divisional = tuple(
            Matchup(id=config.divisional_id(conference, slot), round=Round.DIVISIONAL, conference=conference)
            for slot in (1, 2)
        )
        championship = Matchup(id=config.championship_id(conference), round=Round.CONFERENCE,
                               conference=conference)
        conferences[conference] = ConferenceBracket(
            conference=conference,
            bye_team=teams[config.BYE_SEED],
            wild_card=wild_card,
            divisional=divisional,
            championship=championship,
        )

    state = BracketState(
        afc=conferences["AFC"],
        nfc=conferences["NFC"],
        super_bowl=Matchup(id=config.SUPER_BOWL_ID, round=Round.SUPER_BOWL, conference=None),
        owner_name=owner_name,
        name=bracket_name or config.DEFAULT_BRACKET_NAME,
    )
    # Places each #1 seed into its divisional slot
    return _propagate(state)


def reset_bracket(state: BracketState) -> BracketState:
    """Clear every pick, keeping the owner, bracket name and seeding."""
    afc = replace(state.afc, wild_card=tuple(replace(m, winner=None) for m in state.afc.wild_card))
    nfc = replace(state.nfc, wild_card=tuple(replace(m, winner=None) for m in state.nfc.wild_card))
    return _propagate(replace(state, afc=afc, nfc=nfc))


# --- Picks ---

def select_winner(state: BracketState, matchup_id: str, team: Team,
                  live_lookup: LiveResultLookup | None = None) -> BracketState:
    """Pick the winner of a matchup and rebuild everything downstream.

    Raises:
        InvalidPick: unknown matchup, matchup locked, or team not playing in it
    """
    matchup = _require_matchup(state, matchup_id)

    reason = lock_reason(state, matchup_id, live_lookup)
    if reason is not LockReason.NONE:
        raise InvalidPick(matchup_id, reason.value,
                          f"{matchup_id} is locked ({reason.value}); pick not accepted")
    if not matchup.has_team(team):
        raise InvalidPick(matchup_id, InvalidPick.NOT_IN_MATCHUP,
                          f"{team} is not playing in {matchup_id} ({matchup})")

    if matchup.winner == team:
        return state

    # Store the matchup's own Team object so the winner always matches a slot
    winner = matchup.home_team if matchup.home_team == team else matchup.away_team
    return _propagate(_replace_matchup(state, replace(matchup, winner=winner)))


def clear_winner(state: BracketState, matchup_id: str,
                 live_lookup: LiveResultLookup | None = None) -> BracketState:
    """Remove a matchup's winner and drop every later pick that depended on it.

    Raises:
        InvalidPick: unknown matchup, or its real game has already started
    """
    matchup = _require_matchup(state, matchup_id)
    if _game_started(matchup_id, live_lookup):
        raise InvalidPick(matchup_id, InvalidPick.GAME_STARTED,
                          f"{matchup_id} has already kicked off; pick can't be cleared")
    if matchup.winner is None:
        return state
    return _propagate(_replace_matchup(state, replace(matchup, winner=None)))


# --- Queries ---

def has_both_teams(matchup: Matchup) -> bool:
    return matchup.home_team is not None and matchup.away_team is not None


def lock_reason(state: BracketState, matchup_id: str,
                live_lookup: LiveResultLookup | None = None) -> LockReason:
    """Why a matchup can't take a pick right now, or LockReason.NONE if it can.

    The engine enforces the team-slot half. The game-started half only applies
    when a live result lookup is supplied.
    """
    matchup = _require_matchup(state, matchup_id)
    if not has_both_teams(matchup):
        return LockReason.TEAMS_UNDECIDED
    if _game_started(matchup_id, live_lookup):
        return LockReason.GAME_STARTED
    return LockReason.NONE


def is_matchup_locked(state: BracketState, matchup_id: str,
                      live_lookup: LiveResultLookup | None = None) -> bool:
    return lock_reason(state, matchup_id, live_lookup) is not LockReason.NONE


def is_bracket_complete(state: BracketState) -> bool:
    """True iff all 13 matchups have a winner. Ignores the stored is_complete flag."""
    return all(m.winner is not None for m in iter_matchups(state))


def count_picks(state: BracketState) -> int:
    return sum(1 for m in iter_matchups(state) if m.winner is not None)


# --- Internals ---

def _require_matchup(state: BracketState, matchup_id: str) -> Matchup:
    matchup = find_matchup(state, matchup_id)
    if matchup is None:
        raise InvalidPick(matchup_id, InvalidPick.UNKNOWN_MATCHUP, f"Unknown matchup: {matchup_id}")
    return matchup


def _game_started(matchup_id: str, live_lookup: LiveResultLookup | None) -> bool:
    if live_lookup is None:
        return False
    result = live_lookup(matchup_id)
    return result is not None and result.has_started


def _replace_matchup(state: BracketState, updated: Matchup) -> BracketState:
    """Swap one matchup into the tree by id."""
    if updated.id == state.super_bowl.id:
        return replace(state, super_bowl=updated)

    conf = state.conference(updated.conference)

    def swap(matchups):
        return tuple(updated if m.id == updated.id else m for m in matchups)

    if updated.id == conf.championship.id:
        new_conf = replace(conf, championship=updated)
    elif updated.round is Round.DIVISIONAL:
        new_conf = replace(conf, divisional=swap(conf.divisional))
    else:
        new_conf = replace(conf, wild_card=swap(conf.wild_card))

    if conf.conference == "AFC":
        return replace(state, afc=new_conf)
    return replace(state, nfc=new_conf)


def _with_teams(matchup: Matchup, pairing: Pairing) -> Matchup:
    """Apply derived teams. Keeps the winner only if both teams are known and
    it is still one of them.

    Returns the same object when nothing changed.
    """
    home, away = pairing
    winner = matchup.winner
    if home is None or away is None or winner not in (home, away):
        winner = None
    if winner is not None:
        # Point at the slot's own Team object
        winner = home if home == winner else away

    if (home, away, winner) == (matchup.home_team, matchup.away_team, matchup.winner):
        return matchup
    return replace(matchup, home_team=home, away_team=away, winner=winner)


def _propagate_conference(conf: ConferenceBracket) -> ConferenceBracket:
    div_pairings = compute_divisional_pairing(
        conf.conference, [m.winner for m in conf.wild_card], conf.bye_team)
    divisional = tuple(_with_teams(m, p) for m, p in zip(conf.divisional, div_pairings))

    champ_pairing = compute_championship_pairing([m.winner for m in divisional])
    championship = _with_teams(conf.championship, champ_pairing)

    if all(a is b for a, b in zip(divisional, conf.divisional)) and championship is conf.championship:
        return conf
    return replace(conf, divisional=divisional, championship=championship)


def _propagate(state: BracketState) -> BracketState:
    """Rebuild every derived round top-down, then recompute completion."""
    afc = _propagate_conference(state.afc)
    nfc = _propagate_conference(state.nfc)
    super_bowl = _with_teams(
        state.super_bowl,
        compute_super_bowl_pairing(afc.championship.winner, nfc.championship.winner),
    )
    rebuilt = replace(state, afc=afc, nfc=nfc, super_bowl=super_bowl)
    return replace(rebuilt, is_complete=is_bracket_complete(rebuilt))
