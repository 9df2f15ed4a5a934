from __future__ import annotations

import pytest

from engine.state import (
    InvalidPick,
    LockReason,
    clear_winner,
    count_picks,
    create_initial_bracket,
    has_both_teams,
    is_bracket_complete,
    is_matchup_locked,
    lock_reason,
    reset_bracket,
    select_winner,
)
from models.bracket import MatchupStatus, find_matchup, iter_matchups
from models.live import LiveResult
from models.team import DEFAULT_SEEDING


def afc(seed: int):
    return DEFAULT_SEEDING["AFC"][seed]


def nfc(seed: int):
    return DEFAULT_SEEDING["NFC"][seed]


def pick(state, matchup_id, team):
    return select_winner(state, matchup_id, team)


def home_team_wins_everything(state):
    """Pick the home team in every matchup, round by round."""
    for matchup_id in [
        "afc-wc-1", "afc-wc-2", "afc-wc-3", "nfc-wc-1", "nfc-wc-2", "nfc-wc-3",
        "afc-div-1", "afc-div-2", "nfc-div-1", "nfc-div-2",
        "afc-champ", "nfc-champ", "super-bowl",
    ]:
        state = pick(state, matchup_id, find_matchup(state, matchup_id).home_team)
    return state


def test_initial_bracket_seeds_wild_card_round():
    state = create_initial_bracket("Alex")

    assert state.owner_name == "Alex"
    assert state.is_complete is False
    assert [(m.home_team.seed, m.away_team.seed) for m in state.afc.wild_card] == [(2, 7), (3, 6), (4, 5)]
    assert [m.id for m in state.nfc.wild_card] == ["nfc-wc-1", "nfc-wc-2", "nfc-wc-3"]
    assert state.afc.bye_team == afc(1)

    # Only the #1 seed is known past the wild card round
    div1 = find_matchup(state, "afc-div-1")
    assert div1.home_team == afc(1)
    assert div1.away_team is None
    for matchup_id in ["afc-div-2", "afc-champ", "nfc-champ", "super-bowl"]:
        m = find_matchup(state, matchup_id)
        assert m.home_team is None and m.away_team is None
        assert m.status is MatchupStatus.UNREACHABLE
    assert all(m.winner is None for m in iter_matchups(state))


def test_concrete_afc_reseeding_scenario():
    state = create_initial_bracket("Alex")
    state = pick(state, "afc-wc-1", afc(2))
    state = pick(state, "afc-wc-2", afc(3))
    state = pick(state, "afc-wc-3", afc(4))

    div1 = find_matchup(state, "afc-div-1")
    div2 = find_matchup(state, "afc-div-2")
    assert (div1.home_team, div1.away_team) == (afc(1), afc(4))
    assert (div2.home_team, div2.away_team) == (afc(2), afc(3))
    assert div1.status is MatchupStatus.PICKABLE


def test_select_winner_returns_new_state_and_keeps_old():
    state = create_initial_bracket("Alex")
    new_state = pick(state, "afc-wc-1", afc(7))

    assert new_state is not state
    assert find_matchup(state, "afc-wc-1").winner is None
    assert find_matchup(new_state, "afc-wc-1").winner == afc(7)
    # Untouched conference keeps its identity
    assert new_state.nfc is state.nfc


def test_selecting_same_winner_again_is_a_no_op():
    state = pick(create_initial_bracket("Alex"), "afc-wc-1", afc(2))
    assert pick(state, "afc-wc-1", afc(2)) is state


def test_cascade_clearing_empties_divisional_round():
    state = create_initial_bracket("Alex")
    state = pick(state, "afc-wc-1", afc(2))
    state = pick(state, "afc-wc-2", afc(3))
    state = pick(state, "afc-wc-3", afc(4))
    state = pick(state, "afc-div-2", afc(2))
    state = pick(state, "afc-div-1", afc(1))
    state = pick(state, "afc-champ", afc(1))
    assert find_matchup(state, "super-bowl").home_team == afc(1)

    state = clear_winner(state, "afc-wc-1")

    div2 = find_matchup(state, "afc-div-2")
    assert div2.home_team is None and div2.away_team is None
    assert div2.winner is None
    assert find_matchup(state, "afc-div-1").away_team is None
    champ = find_matchup(state, "afc-champ")
    assert champ.winner is None
    assert champ.away_team is None
    assert find_matchup(state, "super-bowl").home_team is None


def test_changing_upstream_pick_drops_stale_downstream_winner():
    state = create_initial_bracket("Alex")
    state = pick(state, "afc-wc-1", afc(2))
    state = pick(state, "afc-wc-2", afc(3))
    state = pick(state, "afc-wc-3", afc(4))
    state = pick(state, "afc-div-1", afc(4))
    state = pick(state, "afc-div-2", afc(2))

    # 5 beats 4: the bye team now hosts 5, and the 4 seed pick is gone
    state = pick(state, "afc-wc-3", afc(5))
    div1 = find_matchup(state, "afc-div-1")
    assert (div1.home_team, div1.away_team) == (afc(1), afc(5))
    assert div1.winner is None

    # 2 vs 3 is unaffected, so its pick survives
    div2 = find_matchup(state, "afc-div-2")
    assert div2.winner == afc(2)


def test_reseeding_keeps_winner_that_is_still_playing():
    state = create_initial_bracket("Alex")
    state = pick(state, "afc-wc-1", afc(2))
    state = pick(state, "afc-wc-2", afc(3))
    state = pick(state, "afc-wc-3", afc(4))
    state = pick(state, "afc-div-1", afc(1))

    # 6 beats 3: the bye team now hosts 6 instead of 4, so its pick is kept
    state = pick(state, "afc-wc-2", afc(6))
    div1 = find_matchup(state, "afc-div-1")
    assert (div1.home_team, div1.away_team) == (afc(1), afc(6))
    assert div1.winner == afc(1)
    div2 = find_matchup(state, "afc-div-2")
    assert (div2.home_team, div2.away_team) == (afc(2), afc(4))


def test_select_winner_on_locked_matchup_is_rejected():
    state = create_initial_bracket("Alex")
    with pytest.raises(InvalidPick) as exc:
        select_winner(state, "afc-div-1", afc(1))
    assert exc.value.reason == InvalidPick.TEAMS_UNDECIDED
    assert exc.value.matchup_id == "afc-div-1"
    assert find_matchup(state, "afc-div-1").winner is None
    assert all(m.winner is None for m in iter_matchups(state))


def test_select_winner_rejects_team_not_in_matchup():
    state = create_initial_bracket("Alex")
    with pytest.raises(InvalidPick) as exc:
        select_winner(state, "afc-wc-1", afc(3))
    assert exc.value.reason == InvalidPick.NOT_IN_MATCHUP

    with pytest.raises(InvalidPick):
        select_winner(state, "afc-wc-1", nfc(2))


def test_unknown_matchup_is_rejected():
    state = create_initial_bracket("Alex")
    with pytest.raises(InvalidPick) as exc:
        select_winner(state, "afc-wc-9", afc(2))
    assert exc.value.reason == InvalidPick.UNKNOWN_MATCHUP

    with pytest.raises(InvalidPick):
        clear_winner(state, "nope")


def test_clear_undecided_matchup_returns_same_state():
    state = create_initial_bracket("Alex")
    assert clear_winner(state, "afc-wc-1") is state


def test_completion():
    state = home_team_wins_everything(create_initial_bracket("Alex"))

    assert count_picks(state) == 13
    assert state.is_complete is True
    assert is_bracket_complete(state) is True
    assert state.champion == afc(1)

    cleared = clear_winner(state, "super-bowl")
    assert cleared.is_complete is False
    assert is_bracket_complete(cleared) is False
    assert count_picks(cleared) == 12


def test_clearing_any_single_pick_breaks_completion():
    full = home_team_wins_everything(create_initial_bracket("Alex"))
    for m in iter_matchups(full):
        assert clear_winner(full, m.id).is_complete is False


def test_lock_reasons():
    state = create_initial_bracket("Alex")
    assert lock_reason(state, "afc-wc-1") is LockReason.NONE
    assert lock_reason(state, "afc-div-1") is LockReason.TEAMS_UNDECIDED
    assert is_matchup_locked(state, "super-bowl") is True
    assert is_matchup_locked(state, "nfc-wc-2") is False
    assert has_both_teams(find_matchup(state, "nfc-wc-2"))
    assert not has_both_teams(find_matchup(state, "nfc-div-1"))


def test_live_game_locks_matchup():
    results = {"afc-wc-1": LiveResult(home_team_id="NE", away_team_id="LAC", home_score=7,
                                      away_score=3, is_in_progress=True)}
    lookup = results.get
    state = create_initial_bracket("Alex")

    assert lock_reason(state, "afc-wc-1", lookup) is LockReason.GAME_STARTED
    assert lock_reason(state, "afc-wc-2", lookup) is LockReason.NONE
    # Slots still decide first
    assert lock_reason(state, "afc-div-1", lookup) is LockReason.TEAMS_UNDECIDED

    with pytest.raises(InvalidPick) as exc:
        select_winner(state, "afc-wc-1", afc(2), live_lookup=lookup)
    assert exc.value.reason == InvalidPick.GAME_STARTED

    # Without a lookup the engine only checks team slots
    assert find_matchup(select_winner(state, "afc-wc-1", afc(2)), "afc-wc-1").winner == afc(2)


def test_clear_winner_blocked_once_game_started():
    state = pick(create_initial_bracket("Alex"), "afc-wc-1", afc(2))
    lookup = {"afc-wc-1": LiveResult("NE", "LAC", 21, 14, is_complete=True)}.get
    with pytest.raises(InvalidPick):
        clear_winner(state, "afc-wc-1", live_lookup=lookup)


def test_reset_bracket_keeps_owner_and_seeding():
    state = home_team_wins_everything(create_initial_bracket("Alex", "Round 2"))
    fresh = reset_bracket(state)

    assert fresh.owner_name == "Alex"
    assert fresh.name == "Round 2"
    assert count_picks(fresh) == 0
    assert fresh.is_complete is False
    assert find_matchup(fresh, "afc-wc-1").home_team == afc(2)
    assert find_matchup(fresh, "afc-div-1").home_team == afc(1)
