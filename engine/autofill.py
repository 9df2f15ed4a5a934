"""Fill in the rest of a bracket automatically.

Two strategies:
- chalk:  the better seed always wins (Super Bowl: better seed, AFC on ties)
- random: the better seed wins with a probability that grows with the seed gap

Picks go through select_winner one round at a time, so every downstream
matchup is derived exactly as if a user had clicked through the bracket.
"""

import numpy as np

import config
from engine.state import LockReason, lock_reason, select_winner
from models.bracket import BracketState, Matchup, Round, matchups_by_round
from models.live import LiveResultLookup
from models.team import Team

STRATEGIES = ("chalk", "random")

ROUND_ORDER = [Round.WILD_CARD, Round.DIVISIONAL, Round.CONFERENCE, Round.SUPER_BOWL]


def autofill_bracket(state: BracketState, strategy: str = "chalk",
                     rng: np.random.Generator | None = None,
                     live_lookup: LiveResultLookup | None = None) -> BracketState:
    """Pick every undecided matchup that can take a pick.

    Existing picks are kept. Matchups whose real game has started are skipped.

    Args:
        state: Bracket to fill
        strategy: "chalk" or "random"
        rng: Random generator for the random strategy
        live_lookup: Optional live result source for lock checks
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}")
    if strategy == "random" and rng is None:
        rng = np.random.default_rng()

    # Picks only rebuild later rounds, so each round can be read once
    for round_ in ROUND_ORDER:
        for matchup in matchups_by_round(state, round_):
            if matchup.winner is not None:
                continue
            if lock_reason(state, matchup.id, live_lookup) is not LockReason.NONE:
                continue
            winner = _choose(matchup, strategy, rng)
            state = select_winner(state, matchup.id, winner, live_lookup)

    return state


def favorite_probability(favorite: Team, underdog: Team) -> float:
    """Chance the better seed is picked in random mode."""
    gap = underdog.seed - favorite.seed
    p = config.RANDOM_FILL_BASE + config.RANDOM_FILL_PER_SEED * gap
    return max(config.RANDOM_FILL_MIN, min(config.RANDOM_FILL_MAX, p))


def _choose(matchup: Matchup, strategy: str, rng: np.random.Generator | None) -> Team:
    home, away = matchup.home_team, matchup.away_team
    if away.seed < home.seed:
        favorite, underdog = away, home
    else:
        favorite, underdog = home, away

    if strategy == "chalk":
        return favorite
    return favorite if rng.random() < favorite_probability(favorite, underdog) else underdog
