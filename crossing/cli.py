"""
Crossing CLI - Command-line interface for the puzzle.

Usage:
    crossing play                  Play in the terminal
    crossing serve [--port 8000]   Run the HTTP/WebSocket API
    crossing rules                 Print the roster and the rules
"""

import argparse
import logging
import sys

from .engine_core.state import GameState, Location
from .engine_core.action import Action
from .engine_core.action_generator import ActionGenerator
from .games.family_thief import ROSTER, RULES, PUZZLE_NAME
from .logging_config import configure_logging
from .session import SessionManager

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  <actor id>        board / step off (same as: select <actor id>)
  select <id>       board / step off
  sail              cross the river
  undo              undo the last crossing
  reset             start over
  rules             show the rules
  help              show this help
  quit              leave the game"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Crossing - River crossing puzzle engine",
        prog="crossing",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: $CROSSING_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("play", help="Play the puzzle in the terminal")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    subparsers.add_parser("rules", help="Print the roster and the rules")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    elif args.command == "rules":
        cmd_rules(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_rules(args):
    """Print the roster and the rules."""
    print(format_rules())


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Serving Crossing API on %s:%d", args.host, args.port)
    uvicorn.run("crossing.api.app:app", host=args.host, port=args.port)


def cmd_play(args, input_func=input, output_func=print):
    """Interactive terminal game loop."""
    manager = SessionManager()
    session = manager.create_session(player_name="Terminal")

    output_func(f"=== {PUZZLE_NAME} ===")
    output_func(HELP_TEXT)
    output_func(render_state(session.game_state))

    while True:
        try:
            line = input_func("> ")
        except EOFError:
            break
        action = parse_command(line)
        if action == "quit":
            break
        if action == "help":
            output_func(HELP_TEXT)
            continue
        if action == "rules":
            output_func(format_rules())
            continue
        if action is None:
            output_func("Unknown command. Type 'help' for the list of commands.")
            continue

        manager.dispatch(session.session_id, action)
        output_func(render_state(session.game_state))

    manager.end_session(session.session_id, reason="user_quit")
    output_func("Goodbye!")


def parse_command(line: str):
    """
    Turn a line of input into an Action.

    Returns "quit", "help" or "rules" for the non-game commands,
    and None for anything unrecognised.
    """
    words = line.strip().lower().split()
    if not words:
        return None
    command = words[0]

    if command in ("quit", "exit", "q"):
        return "quit"
    if command in ("help", "?"):
        return "help"
    if command == "rules":
        return "rules"
    if command == "sail":
        return Action.sail()
    if command == "undo":
        return Action.undo()
    if command == "reset":
        return Action.reset()
    if command == "select":
        if len(words) != 2:
            return None
        return Action.select_actor(words[1])
    if len(words) == 1:
        # Unknown ids are refused by the reducer with a message
        return Action.select_actor(command)
    return None


def _format_group(state: GameState, location: Location) -> str:
    actors = state.actors_at(location)
    if not actors:
        return "(empty)"
    return ", ".join(
        f"{a.name} [{a.actor_id}]{'*' if a.is_driver else ''}" for a in actors
    )


def render_state(state: GameState) -> str:
    """Plain-text rendering of a state (drivers marked with *)."""
    ferry = f"Ferry ({state.ferry_side.value} side): {_format_group(state, Location.FERRY)}"
    lines = [
        "",
        f"Start shore:       {_format_group(state, Location.START)}",
        f"Destination shore: {_format_group(state, Location.DESTINATION)}",
        ferry,
        f"Moves: {state.move_count}   Undo available: {state.history_depth}",
        f"[{state.severity.value.upper()}] {state.message}",
    ]
    selectable = ActionGenerator().selectable_actor_ids(state)
    if selectable:
        lines.append("Selectable: " + ", ".join(selectable))
    return "\n".join(lines)


def format_rules() -> str:
    lines = [PUZZLE_NAME, "", "Roster:"]
    for d in ROSTER:
        driver = " (driver)" if d.is_driver else ""
        lines.append(f"  {d.actor_id:<10} {d.name}{driver}")
    lines.append("")
    lines.append("Rules:")
    lines.extend(f"  - {rule}" for rule in RULES)
    return "\n".join(lines)


if __name__ == "__main__":
    main()
