"""Shareable bracket links.

A shared link carries the pick token and the owner's name as query
parameters, e.g. https://nflbracket.app/?b=VVVVAQ&name=Alex
"""

from typing import NamedTuple
from urllib.parse import parse_qs, urlencode, urlsplit

import config
from codec.picks import CodecError, apply_picks_to_fresh_bracket, decode_bracket_picks, encode_bracket_picks
from models.bracket import BracketState
from models.team import Seeding


class SharedParams(NamedTuple):
    encoded_bracket: str | None
    owner_name: str | None
    view_mode: str | None  # "live" or None


def generate_shareable_url(state: BracketState, base_url: str = config.SHARE_BASE_URL) -> str:
    """Build the full share link for a bracket."""
    params = {config.SHARE_PARAM: encode_bracket_picks(state)}
    if state.owner_name:
        params[config.OWNER_PARAM] = state.owner_name
    return f"{base_url.rstrip('/')}/?{urlencode(params)}"


def parse_url_params(url_or_query: str) -> SharedParams:
    """Pull the bracket token, owner name and view mode out of a link or query string."""
    query = urlsplit(url_or_query).query if "?" in url_or_query else url_or_query.lstrip("?")
    params = parse_qs(query)

    def first(key):
        values = params.get(key)
        return values[0] if values else None

    view = first(config.VIEW_PARAM)
    return SharedParams(
        encoded_bracket=first(config.SHARE_PARAM),
        owner_name=first(config.OWNER_PARAM),
        view_mode="live" if view == "live" else None,
    )


def load_shared_bracket(url_or_query: str, seeding: Seeding | None = None) -> BracketState | None:
    """Rebuild the bracket carried by a share link.

    Returns None when the link has no bracket token or the token is malformed,
    so the caller can fall back to a normal, non-shared view.
    """
    params = parse_url_params(url_or_query)
    if not params.encoded_bracket:
        return None

    owner = params.owner_name or config.DEFAULT_SHARED_OWNER
    try:
        codes = decode_bracket_picks(params.encoded_bracket)
    except CodecError as e:
        print(f"Warning: Could not decode shared bracket: {e}")
        return None
    return apply_picks_to_fresh_bracket(codes, owner, seeding)
