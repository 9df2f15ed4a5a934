"""Central configuration for the NFL playoff bracket picker."""

import os

CONFERENCES = ["AFC", "NFC"]

# Seeds 1-7 per conference; seed 1 has the wild card bye
SEEDS_PER_CONFERENCE = 7
BYE_SEED = 1

# Wild card pairings (home seed, away seed), in slot order
WILD_CARD_SEED_MATCHUPS = [(2, 7), (3, 6), (4, 5)]

# Default seeding table: {conference: {seed: (team_id, city, name)}}
DEFAULT_SEEDING = {
    "AFC": {
        1: ("DEN", "Denver", "Broncos"),
        2: ("NE", "New England", "Patriots"),
        3: ("JAX", "Jacksonville", "Jaguars"),
        4: ("HOU", "Houston", "Texans"),
        5: ("BUF", "Buffalo", "Bills"),
        6: ("PIT", "Pittsburgh", "Steelers"),
        7: ("LAC", "Los Angeles", "Chargers"),
    },
    "NFC": {
        1: ("SEA", "Seattle", "Seahawks"),
        2: ("CHI", "Chicago", "Bears"),
        3: ("PHI", "Philadelphia", "Eagles"),
        4: ("CAR", "Carolina", "Panthers"),
        5: ("LA", "Los Angeles", "Rams"),
        6: ("SF", "San Francisco", "49ers"),
        7: ("GB", "Green Bay", "Packers"),
    },
}

# Matchup ids
SUPER_BOWL_ID = "super-bowl"


def wild_card_id(conference: str, slot: int) -> str:
    return f"{conference.lower()}-wc-{slot}"


def divisional_id(conference: str, slot: int) -> str:
    return f"{conference.lower()}-div-{slot}"


def championship_id(conference: str) -> str:
    return f"{conference.lower()}-champ"


# Codec order: index -> matchup id. Changing this breaks every shared link.
MATCHUP_ORDER = (
    [wild_card_id("AFC", s) for s in (1, 2, 3)]
    + [wild_card_id("NFC", s) for s in (1, 2, 3)]
    + [divisional_id("AFC", s) for s in (1, 2)]
    + [divisional_id("NFC", s) for s in (1, 2)]
    + [championship_id("AFC"), championship_id("NFC"), SUPER_BOWL_ID]
)
NUM_MATCHUPS = len(MATCHUP_ORDER)  # 13

# Sharing
SHARE_BASE_URL = "https://nflbracket.app"
SHARE_PARAM = "b"
OWNER_PARAM = "name"
VIEW_PARAM = "view"
DEFAULT_SHARED_OWNER = "Someone"
DEFAULT_BRACKET_NAME = "NFL Playoffs"

# Autofill: probability the better seed is picked in random mode, per seed of difference
RANDOM_FILL_BASE = 0.5
RANDOM_FILL_PER_SEED = 0.05
RANDOM_FILL_MIN = 0.2
RANDOM_FILL_MAX = 0.8

# CLI session storage
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
STATE_FILE = os.path.join(DATA_DIR, "state.pkl")
