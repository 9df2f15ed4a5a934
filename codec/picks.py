"""Compact pick encoding for shareable bracket links.

Encoding scheme:
- 13 matchups x 2 bits each = 26 bits
- Values: 0 = no pick, 1 = home team won, 2 = away team won (3 is reserved)
- Code i sits at bits 2*i..2*i+1 of a 32-bit little-endian integer
- The 4 bytes are base64url encoded without padding (6 characters)

Matchup order (index -> matchup):
    0-2:   AFC Wild Card 1-3
    3-5:   NFC Wild Card 1-3
    6-7:   AFC Divisional 1-2
    8-9:   NFC Divisional 1-2
    10:    AFC Championship
    11:    NFC Championship
    12:    Super Bowl

Only winner decisions are stored. Team identities are re-derived from the
seeding table when a token is applied. There is no version field, so this
layout must never change.
"""

import base64
import binascii
import re
from dataclasses import replace

import config
from engine.derivation import (
    Pairing,
    compute_championship_pairing,
    compute_divisional_pairing,
    compute_super_bowl_pairing,
)
from engine.state import create_initial_bracket, is_bracket_complete
from models.bracket import ConferenceBracket, Matchup, BracketState, iter_matchups
from models.team import Seeding

NO_PICK = 0
HOME_WON = 1
AWAY_WON = 2

CODE_BITS = 2
CODE_MASK = 0b11
TOKEN_BYTES = 4

_BASE64URL_CHARS = re.compile(r"^[A-Za-z0-9_-]*$")


class CodecError(ValueError):
    """A share token that can't be decoded."""


def winner_code(matchup: Matchup | None) -> int:
    """0 = no pick, 1 = home team won, 2 = away team won.

    A winner matching neither team is treated as no pick.
    """
    if matchup is None or matchup.winner is None:
        return NO_PICK
    if matchup.home_team is not None and matchup.winner == matchup.home_team:
        return HOME_WON
    if matchup.away_team is not None and matchup.winner == matchup.away_team:
        return AWAY_WON
    return NO_PICK


def pack_codes(codes: list[int]) -> int:
    packed = 0
    for i, code in enumerate(codes):
        packed |= (code & CODE_MASK) << (i * CODE_BITS)
    return packed


def unpack_codes(packed: int) -> list[int]:
    return [(packed >> (i * CODE_BITS)) & CODE_MASK for i in range(config.NUM_MATCHUPS)]


def encode_bracket_picks(state: BracketState) -> str:
    """Encode a bracket's 13 picks to a 6-character URL-safe token."""
    codes = [winner_code(m) for m in iter_matchups(state)]
    raw = pack_codes(codes).to_bytes(TOKEN_BYTES, "little")
    return base64.b64encode(raw).decode("ascii").replace("+", "-").replace("/", "_").rstrip("=")


def decode_bracket_picks(token: str) -> list[int]:
    """Decode a token back into 13 winner codes.

    Raises:
        CodecError: characters outside the base64url alphabet, undecodable
            input, or anything other than exactly 4 decoded bytes
    """
    if not isinstance(token, str) or not _BASE64URL_CHARS.match(token):
        raise CodecError(f"Token contains characters outside the base64url alphabet: {token!r}")

    b64 = token.replace("-", "+").replace("_", "/")
    b64 += "=" * (-len(b64) % 4)
    try:
        raw = base64.b64decode(b64, validate=True)
    except binascii.Error as e:
        raise CodecError(f"Could not decode token {token!r}: {e}") from e

    if len(raw) != TOKEN_BYTES:
        raise CodecError(f"Token {token!r} decoded to {len(raw)} bytes, expected {TOKEN_BYTES}")

    return unpack_codes(int.from_bytes(raw, "little"))


def apply_picks_to_fresh_bracket(codes: list[int], owner_name: str,
                                 seeding: Seeding | None = None,
                                 bracket_name: str | None = None) -> BracketState:
    """Rebuild a bracket from 13 winner codes.

    Each round's teams are derived from the winners just applied to the round
    before it, and only then is that round's code applied. A code pointing at
    an empty slot, or the reserved value 3, leaves the matchup undecided.

    Raises:
        CodecError: if codes does not hold exactly 13 values
    """
    if len(codes) != config.NUM_MATCHUPS:
        raise CodecError(f"Expected {config.NUM_MATCHUPS} pick codes, got {len(codes)}")

    state = create_initial_bracket(owner_name, bracket_name, seeding)

    afc = replace(state.afc, wild_card=_apply_round(state.afc.wild_card, codes[0:3]))
    nfc = replace(state.nfc, wild_card=_apply_round(state.nfc.wild_card, codes[3:6]))

    afc = _apply_divisional(afc, codes[6:8])
    nfc = _apply_divisional(nfc, codes[8:10])

    afc = _apply_championship(afc, codes[10])
    nfc = _apply_championship(nfc, codes[11])

    sb_pairing = compute_super_bowl_pairing(afc.championship.winner, nfc.championship.winner)
    super_bowl = _apply_code(_seat(state.super_bowl, sb_pairing), codes[12])

    state = replace(state, afc=afc, nfc=nfc, super_bowl=super_bowl)
    return replace(state, is_complete=is_bracket_complete(state))


def _seat(matchup: Matchup, pairing: Pairing) -> Matchup:
    return replace(matchup, home_team=pairing.home, away_team=pairing.away, winner=None)


def _apply_code(matchup: Matchup, code: int) -> Matchup:
    # Same rule as the engine: no winner until both teams are known
    if matchup.home_team is None or matchup.away_team is None:
        return matchup
    if code == HOME_WON:
        return replace(matchup, winner=matchup.home_team)
    if code == AWAY_WON:
        return replace(matchup, winner=matchup.away_team)
    return matchup


def _apply_round(matchups, codes):
    return tuple(_apply_code(m, c) for m, c in zip(matchups, codes))


def _apply_divisional(conf: ConferenceBracket, codes: list[int]) -> ConferenceBracket:
    pairings = compute_divisional_pairing(
        conf.conference, [m.winner for m in conf.wild_card], conf.bye_team)
    seated = tuple(_seat(m, p) for m, p in zip(conf.divisional, pairings))
    return replace(conf, divisional=_apply_round(seated, codes))


def _apply_championship(conf: ConferenceBracket, code: int) -> ConferenceBracket:
    pairing = compute_championship_pairing([m.winner for m in conf.divisional])
    return replace(conf, championship=_apply_code(_seat(conf.championship, pairing), code))
