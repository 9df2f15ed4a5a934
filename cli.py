"""NFL Playoff Bracket Picker - CLI entry point.

Usage:
    python cli.py new --owner "Alex" [--name "My Picks"] [--seeding seeds.json]
    python cli.py pick afc-wc-1 NE [--live live.csv]
    python cli.py clear afc-wc-1
    python cli.py fill [--strategy chalk|random] [--seed 42]
    python cli.py reset
    python cli.py show [--live live.csv]
    python cli.py share [--base-url https://...]
    python cli.py open "https://nflbracket.app/?b=VVVVAQ&name=Alex"
    python cli.py save --file brackets/alex.json
    python cli.py load --file brackets/alex.json
    python cli.py export [--format text|csv] [--output path]
"""

import argparse
import os
import pickle
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from codec.picks import CodecError
from engine.state import InvalidPick

STATE_FILE = config.STATE_FILE


def save_state(state: dict):
    """Save the session to disk."""
    os.makedirs(os.path.dirname(STATE_FILE), exist_ok=True)
    with open(STATE_FILE, "wb") as f:
        pickle.dump(state, f)


def load_state() -> dict:
    """Load the session from disk."""
    if os.path.exists(STATE_FILE):
        with open(STATE_FILE, "rb") as f:
            return pickle.load(f)
    return {}


def _require_bracket(state: dict):
    bracket = state.get("bracket")
    if bracket is None:
        print("ERROR: No bracket yet. Run 'python cli.py new --owner NAME' first.")
    return bracket


def _live_lookup(args):
    path = getattr(args, "live", None)
    if not path:
        return None
    from ingestion.live_results import load_live_results_from_csv, make_lookup
    return make_lookup(load_live_results_from_csv(path))


def _resolve_team(matchup, team_id: str):
    """Find the team in a matchup by id, case-insensitive."""
    for team in (matchup.home_team, matchup.away_team):
        if team is not None and team.id.lower() == team_id.lower():
            return team
    return None


# --- Commands ---

def cmd_new(args):
    """Start a fresh bracket."""
    from engine.state import create_initial_bracket

    seeding = None
    if args.seeding:
        from ingestion.seeding_loader import load_seeding_from_json
        seeding = load_seeding_from_json(args.seeding)

    bracket = create_initial_bracket(args.owner, args.name, seeding)
    save_state({"bracket": bracket, "seeding": seeding})

    from output.printer import print_bracket
    print_bracket(bracket)


def cmd_pick(args):
    """Pick the winner of a matchup."""
    from engine.state import select_winner
    from models.bracket import find_matchup

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    matchup = find_matchup(bracket, args.matchup)
    if matchup is None:
        print(f"ERROR: Unknown matchup: {args.matchup}")
        print(f"Valid matchups: {', '.join(config.MATCHUP_ORDER)}")
        return

    team = _resolve_team(matchup, args.team)
    if team is None:
        print(f"ERROR: {args.team} is not playing in {args.matchup} ({matchup})")
        return

    try:
        bracket = select_winner(bracket, args.matchup, team, _live_lookup(args))
    except InvalidPick as e:
        print(f"ERROR: {e}")
        return

    state["bracket"] = bracket
    save_state(state)
    print(f"Picked {team} in {args.matchup}")


def cmd_clear(args):
    """Clear a pick and everything that depended on it."""
    from engine.state import clear_winner

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    try:
        bracket = clear_winner(bracket, args.matchup, _live_lookup(args))
    except InvalidPick as e:
        print(f"ERROR: {e}")
        return

    state["bracket"] = bracket
    save_state(state)
    print(f"Cleared {args.matchup}")


def cmd_fill(args):
    """Fill in every remaining pick."""
    import numpy as np
    from engine.autofill import autofill_bracket

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    rng = np.random.default_rng(args.seed)
    bracket = autofill_bracket(bracket, strategy=args.strategy, rng=rng, live_lookup=_live_lookup(args))

    state["bracket"] = bracket
    save_state(state)

    from output.printer import print_bracket
    print_bracket(bracket)


def cmd_reset(args):
    """Clear every pick."""
    from engine.state import reset_bracket

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    state["bracket"] = reset_bracket(bracket)
    save_state(state)
    print("Bracket reset!")


def cmd_show(args):
    """Display the bracket and matchup status."""
    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    from output.printer import print_bracket, print_status_table
    print_bracket(bracket)
    print()
    print_status_table(bracket, _live_lookup(args))


def cmd_share(args):
    """Print a shareable link."""
    from codec.url import generate_shareable_url

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    print(generate_shareable_url(bracket, args.base_url))


def cmd_open(args):
    """Open a bracket from a shared link."""
    from codec.url import load_shared_bracket

    state = load_state()
    bracket = load_shared_bracket(args.url, state.get("seeding"))
    if bracket is None:
        print("ERROR: No valid bracket in that link.")
        return

    state["bracket"] = bracket
    save_state(state)

    from output.printer import print_bracket
    print_bracket(bracket)


def cmd_save(args):
    """Save the bracket to a JSON file."""
    from ingestion.bracket_store import save_bracket_to_json

    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    save_bracket_to_json(bracket, args.file)


def cmd_load(args):
    """Load a saved bracket."""
    from ingestion.bracket_store import load_bracket_from_json

    state = load_state()
    try:
        bracket = load_bracket_from_json(args.file, state.get("seeding"))
    except (CodecError, ValueError) as e:
        print(f"ERROR: Could not load {args.file}: {e}")
        return

    state["bracket"] = bracket
    save_state(state)


def cmd_export(args):
    """Export the picks."""
    state = load_state()
    bracket = _require_bracket(state)
    if bracket is None:
        return

    if args.format == "text":
        from output.picks_export import print_fill_order
        print_fill_order(bracket)
    elif args.format == "csv":
        from output.picks_export import export_picks_csv
        output_path = args.output or os.path.join(config.DATA_DIR, "bracket_picks.csv")
        export_picks_csv(bracket, output_path)
    else:
        print(f"Unknown format: {args.format}")


# --- Main ---

def main():
    parser = argparse.ArgumentParser(
        description="NFL Playoff Bracket Picker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. python cli.py new --owner "Alex"      # Start a bracket
  2. python cli.py pick afc-wc-1 NE        # Pick winners (see 'show' for matchup ids)
  3. python cli.py fill --strategy chalk   # Optionally fill the rest
  4. python cli.py share                   # Get a link to send to friends
        """
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # new
    p_new = subparsers.add_parser("new", help="Start a fresh bracket")
    p_new.add_argument("--owner", required=True, help="Bracket owner's name")
    p_new.add_argument("--name", default=config.DEFAULT_BRACKET_NAME, help="Bracket name")
    p_new.add_argument("--seeding", help="JSON file overriding the playoff seeds")

    # pick
    p_pick = subparsers.add_parser("pick", help="Pick the winner of a matchup")
    p_pick.add_argument("matchup", help="Matchup id, e.g. afc-wc-1")
    p_pick.add_argument("team", help="Team id, e.g. NE")
    p_pick.add_argument("--live", help="CSV of live results; started games are locked")

    # clear
    p_clear = subparsers.add_parser("clear", help="Clear a pick")
    p_clear.add_argument("matchup", help="Matchup id")
    p_clear.add_argument("--live", help="CSV of live results; started games are locked")

    # fill
    p_fill = subparsers.add_parser("fill", help="Fill in every remaining pick")
    p_fill.add_argument("--strategy", choices=["chalk", "random"], default="chalk")
    p_fill.add_argument("--seed", type=int, help="Random seed (for --strategy random)")
    p_fill.add_argument("--live", help="CSV of live results; started games are skipped")

    # reset
    subparsers.add_parser("reset", help="Clear every pick")

    # show
    p_show = subparsers.add_parser("show", help="Display the bracket")
    p_show.add_argument("--live", help="CSV of live results")

    # share
    p_share = subparsers.add_parser("share", help="Print a shareable link")
    p_share.add_argument("--base-url", default=config.SHARE_BASE_URL)

    # open
    p_open = subparsers.add_parser("open", help="Open a bracket from a shared link")
    p_open.add_argument("url", help="Shared link or query string")

    # save / load
    p_save = subparsers.add_parser("save", help="Save the bracket to a JSON file")
    p_save.add_argument("--file", required=True)
    p_load = subparsers.add_parser("load", help="Load a saved bracket")
    p_load.add_argument("--file", required=True)

    # export
    p_export = subparsers.add_parser("export", help="Export the picks")
    p_export.add_argument("--format", choices=["text", "csv"], default="text")
    p_export.add_argument("--output", help="Output file path (for csv format)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    commands = {
        "new": cmd_new,
        "pick": cmd_pick,
        "clear": cmd_clear,
        "fill": cmd_fill,
        "reset": cmd_reset,
        "show": cmd_show,
        "share": cmd_share,
        "open": cmd_open,
        "save": cmd_save,
        "load": cmd_load,
        "export": cmd_export,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        cmd_func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
