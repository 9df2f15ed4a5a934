"""Saved brackets.

A saved bracket is a small JSON document holding the owner, the bracket name
and the pick token. Loading always rebuilds the picks through the codec, so a
stale or hand-edited "is_complete" value is never trusted.

{
    "owner": "Alex",
    "name": "NFL Playoffs",
    "token": "VVVVAQ",
    "is_complete": true
}
"""

import json
import os

import config
from codec.picks import apply_picks_to_fresh_bracket, decode_bracket_picks, encode_bracket_picks
from engine.state import count_picks
from models.bracket import BracketState
from models.team import Seeding


def save_bracket_to_json(state: BracketState, filepath: str):
    data = {
        "owner": state.owner_name,
        "name": state.name,
        "token": encode_bracket_picks(state),
        "is_complete": state.is_complete,
    }

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"Saved bracket to {filepath}")


def load_bracket_from_json(filepath: str, seeding: Seeding | None = None) -> BracketState:
    """Load a saved bracket.

    Raises:
        ValueError: the file has no token
        CodecError: the token is malformed
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    token = data.get("token")
    if not token:
        raise ValueError(f"{filepath}: no bracket token")

    codes = decode_bracket_picks(token)
    state = apply_picks_to_fresh_bracket(
        codes,
        data.get("owner") or config.DEFAULT_SHARED_OWNER,
        seeding,
        bracket_name=data.get("name"),
    )

    if "is_complete" in data and bool(data["is_complete"]) != state.is_complete:
        print(f"Warning: {filepath} says is_complete={data['is_complete']}, "
              f"but the picks say {state.is_complete}")

    print(f"Loaded bracket from {filepath}: {count_picks(state)}/{config.NUM_MATCHUPS} picks")
    return state
