# Area: Shared
"""
naval_referee.cli — Command-line interface
==========================================

Drives the referee against a SQLite store, one operation per call.

Usage:
    python -m naval_referee init HUB_ADDRESS
    python -m naval_referee --as alice new-game alice
    python -m naval_referee --as bob join 1 bob
    python -m naval_referee --as alice commit 1 alice <64 hex chars>
    python -m naval_referee --as alice shoot 1 alice 3 4
    python -m naval_referee --as bob report 1 bob hit
    python -m naval_referee show 1

GAME arguments accept a numeric id or a game code (e.g. 1DJ1).
All-digit arguments are always read as ids.
The --as address is the only principal authorized for the call.
"""

import argparse
import json
import sqlite3
import sys
from typing import Any, Dict, List, Optional

from ._config import load_config, log_level, validate_config
from ._engine import (
    BattleshipReferee,
    ContractStorage,
    LoggingHubNotifier,
    OutboxHubNotifier,
    SignerSetAuthorizer,
    SqliteStore,
    build_game_snapshot,
    code_to_game_id,
    game_id_to_code,
)
from ._engine.hub import HubNotifier
from ._shared.logging_config import enable_quiet_mode, log_rejection, setup_logging
from .errors import ContractError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="naval-referee",
        description="Naval Referee - authenticated battleship match engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m naval_referee init HUB
  python -m naval_referee --as alice new-game alice
  python -m naval_referee --as bob report 1 bob miss
  NAVAL_CALLER=alice python -m naval_referee claim 1 alice
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--db", type=str, help="Path to SQLite database")
    parser.add_argument("--as", dest="caller", type=str, help="Address authorizing this call")
    parser.add_argument("--outbox", type=str, help="Append hub calls to this JSON-lines file")
    parser.add_argument("--quiet", action="store_true", help="Only warnings and errors on the terminal")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Set the hub address (once)")
    p.add_argument("hub")

    p = sub.add_parser("new-game", help="Open a match")
    p.add_argument("player")

    p = sub.add_parser("join", help="Fill the open second seat")
    p.add_argument("game")
    p.add_argument("player")

    p = sub.add_parser("commit", help="Commit a 32-byte board hash (hex)")
    p.add_argument("game")
    p.add_argument("player")
    p.add_argument("board_hash")

    p = sub.add_parser("shoot", help="Fire at a cell")
    p.add_argument("game")
    p.add_argument("player")
    p.add_argument("x", type=int)
    p.add_argument("y", type=int)

    p = sub.add_parser("report", help="Report the outstanding shot as defender")
    p.add_argument("game")
    p.add_argument("player")
    p.add_argument("result", choices=["hit", "miss"])

    p = sub.add_parser("sonar", help="Use the one-per-match sonar")
    p.add_argument("game")
    p.add_argument("player")
    p.add_argument("x", type=int)
    p.add_argument("y", type=int)

    p = sub.add_parser("report-sonar", help="Report the sonar count as defender")
    p.add_argument("game")
    p.add_argument("player")
    p.add_argument("count", type=int)

    p = sub.add_parser("claim", help="Claim victory")
    p.add_argument("game")
    p.add_argument("player")

    p = sub.add_parser("show", help="Print a match snapshot as JSON")
    p.add_argument("game")

    p = sub.add_parser("sonar-available", help="Check whether a player may use sonar now")
    p.add_argument("game")
    p.add_argument("player")

    sub.add_parser("count", help="Print the number of matches created")

    return parser.parse_args(argv)


def resolve_game(value: str) -> int:
    """Accept a numeric id or a game code."""
    if value.isdigit():
        return int(value)
    game_id = code_to_game_id(value)
    if game_id is None:
        raise ValueError(f"Invalid game id or code: {value}")
    return game_id


def build_referee(config: Dict[str, Any]) -> BattleshipReferee:
    """Wire store, authorizer and hub notifier from config."""
    storage = ContractStorage(SqliteStore(config["db_path"]))
    caller = config.get("caller")
    authorizer = SignerSetAuthorizer({caller} if caller else ())
    sender = config["contract_address"]
    hub: HubNotifier
    if config.get("hub_outbox_path"):
        hub = OutboxHubNotifier(config["hub_outbox_path"], sender=sender)
    else:
        hub = LoggingHubNotifier(sender=sender)
    return BattleshipReferee(
        storage, authorizer=authorizer, hub=hub, contract_address=sender
    )


def run_command(referee: BattleshipReferee, args: argparse.Namespace) -> Any:
    """Execute one command and return what should be printed."""
    cmd = args.command
    if cmd == "init":
        referee.initialize(args.hub)
        return f"Initialized with hub {args.hub}"
    if cmd == "new-game":
        game_id = referee.new_game(args.player)
        return {"game_id": game_id, "game_code": game_id_to_code(game_id)}
    if cmd == "count":
        return referee.game_count()

    game_id = resolve_game(args.game)
    if cmd == "join":
        referee.join_game(game_id, args.player)
    elif cmd == "commit":
        referee.commit_board(game_id, args.player, args.board_hash)
    elif cmd == "shoot":
        referee.take_shot(game_id, args.player, args.x, args.y)
    elif cmd == "report":
        referee.report_result(game_id, args.player, args.result == "hit")
    elif cmd == "sonar":
        referee.use_sonar(game_id, args.player, args.x, args.y)
    elif cmd == "report-sonar":
        referee.report_sonar(game_id, args.player, args.count)
    elif cmd == "claim":
        referee.claim_victory(game_id, args.player)
    elif cmd == "sonar-available":
        return referee.sonar_available(game_id, args.player)
    elif cmd != "show":
        raise ValueError(f"Unknown command: {cmd}")
    return build_game_snapshot(game_id, referee.get_game(game_id))


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    config = load_config(args.config)
    if args.db:
        config["db_path"] = args.db
    if args.caller:
        config["caller"] = args.caller
    if args.outbox:
        config["hub_outbox_path"] = args.outbox

    try:
        validate_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.get("log_file"), level=log_level(config))
    if args.quiet:
        enable_quiet_mode()

    referee = build_referee(config)
    try:
        result = run_command(referee, args)
    except ContractError as e:
        log_rejection(e)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except sqlite3.OperationalError as e:
        print(f"Error: database busy, nothing written ({e})", file=sys.stderr)
        return 1

    if isinstance(result, (dict, list, bool)):
        print(json.dumps(result, indent=2))
    else:
        print(result)
    return 0
