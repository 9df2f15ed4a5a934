"""Bracket derivation rules.

Pure functions that compute the teams in each later round from the winners of
the round before it. NFL rules:

- Divisional: the #1 seed (bye) hosts the lowest remaining seed among the three
  wild card winners; the other two winners meet, better seed at home.
- Conference championship: the two divisional winners meet, better seed at home.
- Super Bowl: AFC champion vs NFC champion, no seed comparison.

Incomplete inputs never raise. Missing teams come back as None so the engine
can rebuild the whole tree after any single pick.
"""

from typing import NamedTuple, Sequence

import config
from models.team import Team, get_seed_team


class Pairing(NamedTuple):
    home: Team | None
    away: Team | None


EMPTY_PAIRING = Pairing(None, None)


def order_by_seed(team_a: Team, team_b: Team) -> Pairing:
    """Better (lower-numbered) seed hosts."""
    if team_b.seed < team_a.seed:
        return Pairing(team_b, team_a)
    return Pairing(team_a, team_b)


def compute_divisional_pairing(conference: str,
                               wild_card_winners: Sequence[Team | None],
                               bye_team: Team | None = None) -> tuple[Pairing, Pairing]:
    """Re-seed the divisional round from the three wild card winners.

    Args:
        conference: "AFC" or "NFC"
        wild_card_winners: Winners of wild card slots 1-3, None where not picked yet
        bye_team: The conference's #1 seed. Defaults to the built-in seeding table.

    Returns:
        (pairing vs the bye team, pairing between the other two winners)
    """
    if len(wild_card_winners) != len(config.WILD_CARD_SEED_MATCHUPS):
        raise ValueError(f"Expected 3 wild card winners, got {len(wild_card_winners)}")
    if bye_team is None:
        bye_team = get_seed_team(conference, config.BYE_SEED)

    # Until every wild card game is picked we can't know who the lowest seed is
    if any(w is None for w in wild_card_winners):
        return Pairing(bye_team, None), EMPTY_PAIRING

    by_seed = sorted(wild_card_winners, key=lambda t: t.seed)
    lowest = by_seed[-1]
    return Pairing(bye_team, lowest), order_by_seed(by_seed[0], by_seed[1])


def compute_championship_pairing(divisional_winners: Sequence[Team | None]) -> Pairing:
    """Pair the two divisional winners; better seed hosts once both are known."""
    if len(divisional_winners) != 2:
        raise ValueError(f"Expected 2 divisional winners, got {len(divisional_winners)}")
    first, second = divisional_winners
    if first is None or second is None:
        return Pairing(first, second)
    return order_by_seed(first, second)


def compute_super_bowl_pairing(afc_champion: Team | None, nfc_champion: Team | None) -> Pairing:
    # AFC listed as home; the game is at a neutral site
    return Pairing(afc_champion, nfc_champion)
