"""Operator shell for Ring Steward.

Usage:
    python -m ringsteward.shell --file tournament.json            # interactive
    python -m ringsteward.shell --file tournament.json assign --event forms
"""

# Ring Steward
# Copyright (C) 2025  Ring Steward developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from ringsteward import __version__
from ringsteward.controllers.rings import suggest_definitions
from ringsteward.exceptions import RingStewardException
from ringsteward.models.competitor import CompetitorFactory
from ringsteward.storage import load_tournament, save_tournament
from ringsteward.tournament import Tournament
from ringsteward.type_hints import FORMS, SPARRING
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


COMMANDS = {
    "status": {
        "description": "Show competitor, category and ring counts",
        "options": {},
    },
    "import": {
        "description": "Add competitors from a JSON roster (list of rows)",
        "options": {"--roster": "Roster file (JSON)"},
    },
    "categories": {
        "description": "List categories",
        "options": {"--event": "forms or sparring", "--division": "Division name"},
    },
    "suggest-categories": {
        "description": "Build categories by gender and age for a division",
        "options": {"--event": "forms or sparring", "--division": "Division name"},
    },
    "assign": {
        "description": "Assign competitors of every category to pools",
        "options": {
            "--event": "forms or sparring (default: forms)",
            "--division": "Restrict to one division",
            "--no-order": "Skip running order assignment",
        },
    },
    "map-sparring": {
        "description": "Place sparring competitors on their forms rings",
        "options": {"--division": "Restrict to one division"},
    },
    "physical": {
        "description": "Label pools with physical rings (PR1, PR1a...)",
        "options": {
            "--division": "Restrict to one division",
            "--rings": "Number of physical rings",
        },
    },
    "rings": {
        "description": "List competition rings",
        "options": {"--event": "forms or sparring", "--division": "Division name"},
    },
    "move": {
        "description": "Move a competitor to another pool",
        "options": {
            "--competitor": "Competitor id",
            "--event": "forms or sparring",
            "--category": "Target category id (omit to clear)",
            "--pool": "Target pool, e.g. P2",
        },
    },
    "withdraw": {
        "description": "Withdraw a competitor",
        "options": {"--competitor": "Competitor id", "--scope": "forms, sparring or both"},
    },
    "reinstate": {
        "description": "Reinstate a withdrawn competitor",
        "options": {
            "--competitor": "Competitor id",
            "--event": "forms or sparring",
            "--division": "Division to compete in",
        },
    },
    "checkpoint": {
        "description": "Create a checkpoint",
        "options": {"--name": "Checkpoint name"},
    },
    "checkpoints": {"description": "List checkpoints", "options": {}},
    "diff": {
        "description": "Compare a checkpoint with the current state",
        "options": {"--id": "Checkpoint id"},
    },
    "restore": {
        "description": "Load a checkpoint (undoable)",
        "options": {"--id": "Checkpoint id"},
    },
    "rename-checkpoint": {
        "description": "Rename a checkpoint",
        "options": {"--id": "Checkpoint id", "--name": "New name"},
    },
    "delete-checkpoint": {
        "description": "Delete a checkpoint",
        "options": {"--id": "Checkpoint id"},
    },
    "undo": {"description": "Undo the last change", "options": {}},
    "redo": {"description": "Redo the last undone change", "options": {}},
    "warnings": {"description": "Show warnings", "options": {}},
    "save": {"description": "Save the tournament", "options": {"--file": "Output file"}},
}

# Commands that change the dataset and trigger a save in one-shot mode
MUTATING_COMMANDS = {
    "import",
    "suggest-categories",
    "assign",
    "map-sparring",
    "physical",
    "move",
    "withdraw",
    "reinstate",
    "checkpoint",
    "restore",
    "rename-checkpoint",
    "delete-checkpoint",
    "undo",
    "redo",
}


class ShellSession:
    """The tournament being worked on and where it is saved."""

    def __init__(self, tournament: Optional[Tournament] = None, path: Optional[Path] = None):
        self.tournament = tournament or Tournament()
        self.path = path
        self.dirty = False
        self.tournament.subscribe(self._mark_dirty)

    def _mark_dirty(self, event: str) -> None:
        self.dirty = True


def print_commands_list():
    """Print all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:20}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        return
    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")
    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer
    completions["/help"] = None
    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


# ========== Argument Parsers ==========


def _event_argument(parser: argparse.ArgumentParser, default: Optional[str] = FORMS):
    parser.add_argument("--event", choices=[FORMS, SPARRING], default=default)


def create_parser(command: str) -> argparse.ArgumentParser:
    """Create the argument parser of one shell command."""
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    if command == "import":
        parser.add_argument("--roster", required=True)
    elif command in ("categories", "rings"):
        _event_argument(parser, default=None)
        parser.add_argument("--division")
    elif command == "suggest-categories":
        _event_argument(parser)
        parser.add_argument("--division")
    elif command == "assign":
        _event_argument(parser)
        parser.add_argument("--division")
        parser.add_argument("--no-order", action="store_true")
    elif command == "map-sparring":
        parser.add_argument("--division")
    elif command == "physical":
        parser.add_argument("--division")
        parser.add_argument("--rings", type=int)
    elif command == "move":
        parser.add_argument("--competitor", required=True)
        _event_argument(parser)
        parser.add_argument("--category")
        parser.add_argument("--pool")
    elif command == "withdraw":
        parser.add_argument("--competitor", required=True)
        parser.add_argument("--scope", choices=[FORMS, SPARRING, "both"], default="both")
    elif command == "reinstate":
        parser.add_argument("--competitor", required=True)
        _event_argument(parser)
        parser.add_argument("--division", required=True)
    elif command == "checkpoint":
        parser.add_argument("--name")
    elif command in ("diff", "restore", "delete-checkpoint"):
        parser.add_argument("--id", required=True)
    elif command == "rename-checkpoint":
        parser.add_argument("--id", required=True)
        parser.add_argument("--name", required=True)
    elif command == "save":
        parser.add_argument("--file")
    return parser


# ========== Command Handlers ==========


def _report(ok: bool, success: str, failure: str) -> int:
    if ok:
        print(f"{Colors.OKGREEN}{success}{Colors.ENDC}")
        return 0
    print(f"{Colors.FAIL}{failure}{Colors.ENDC}")
    return 1


def run_status_command(session: ShellSession, args: argparse.Namespace) -> int:
    tournament = session.tournament
    print(f"\n{Colors.BOLD}{tournament.name}{Colors.ENDC}")
    print(f"  Competitors: {len(tournament.competitors)}")
    print(f"  Categories: {len(tournament.categories)}")
    print(f"  Rings: {len(tournament.rings)}")
    print(f"  Checkpoints: {len(tournament.checkpoints)}")
    print(f"  Undo: {tournament.can_undo}  Redo: {tournament.can_redo}")
    return 0


def run_import_command(session: ShellSession, args: argparse.Namespace) -> int:
    with open(args.roster, "r", encoding="utf-8") as f:
        rows = json.load(f)
    competitors = CompetitorFactory(strict=True).create_batch(rows)
    session.tournament.add_competitors(competitors)
    print(f"{Colors.OKGREEN}Imported {len(competitors)} competitor(s){Colors.ENDC}")
    return 0


def run_categories_command(session: ShellSession, args: argparse.Namespace) -> int:
    for category in session.tournament.categories:
        if args.event and category.event_type != args.event:
            continue
        if args.division and category.division != args.division:
            continue
        print(
            f"  {category.id}  {category.division:12} {category.event_type:9} "
            f"{category.name:20} pools={category.num_pools} "
            f"competitors={len(category.competitor_ids)}"
        )
    return 0


def run_suggest_categories_command(session: ShellSession, args: argparse.Namespace) -> int:
    definitions = suggest_definitions(session.tournament.competitors, args.division)
    built = session.tournament.generate_categories(definitions, args.event)
    print(f"{Colors.OKGREEN}Built {len(built)} {args.event} categories{Colors.ENDC}")
    return 0


def run_assign_command(session: ShellSession, args: argparse.Namespace) -> int:
    result = session.tournament.assign_rings(args.event, args.division, order=not args.no_order)
    print(f"{Colors.OKGREEN}Assigned {len(result.rings)} ring(s){Colors.ENDC}")
    return 0


def run_map_sparring_command(session: ShellSession, args: argparse.Namespace) -> int:
    result = session.tournament.map_sparring_to_forms(args.division)
    print(
        f"{Colors.OKGREEN}Created {len(result.secondary_rings)} sparring ring(s){Colors.ENDC}"
    )
    return 0


def run_physical_command(session: ShellSession, args: argparse.Namespace) -> int:
    mappings = session.tournament.auto_assign_physical_rings(args.division, args.rings)
    for mapping in mappings:
        print(f"  {mapping.physical_ring_name:6} {mapping.category_pool_name}")
    return 0


def run_rings_command(session: ShellSession, args: argparse.Namespace) -> int:
    for ring in session.tournament.rings:
        if args.event and ring.event_type != args.event:
            continue
        if args.division and ring.division != args.division:
            continue
        print(
            f"  {ring.physical_ring_id:10} {ring.event_type:9} {ring.name:30} "
            f"{ring.size} competitor(s)"
        )
    return 0


def run_move_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.move_competitor(args.competitor, args.event, args.category, args.pool)
    return _report(ok, "Competitor moved", "Competitor or category not found")


def run_withdraw_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.withdraw_competitor(args.competitor, args.scope)
    return _report(ok, "Competitor withdrawn", "Competitor not found")


def run_reinstate_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.reinstate_competitor(args.competitor, args.event, args.division)
    return _report(ok, "Competitor reinstated", "Competitor not found")


def run_checkpoint_command(session: ShellSession, args: argparse.Namespace) -> int:
    checkpoint = session.tournament.create_checkpoint(args.name)
    print(f"{Colors.OKGREEN}Created '{checkpoint.name}' ({checkpoint.id}){Colors.ENDC}")
    return 0


def run_checkpoints_command(session: ShellSession, args: argparse.Namespace) -> int:
    for checkpoint in session.tournament.checkpoints:
        print(f"  {checkpoint.id}  {checkpoint.timestamp:%Y-%m-%d %H:%M}  {checkpoint.name}")
    return 0


def run_diff_command(session: ShellSession, args: argparse.Namespace) -> int:
    diff = session.tournament.diff_checkpoint(args.id)
    if diff is None:
        return _report(False, "", "Checkpoint not found")
    print(f"\n{Colors.BOLD}Added:{Colors.ENDC} {len(diff.added)}")
    for competitor in diff.added:
        print(f"  + {competitor.name}")
    print(f"{Colors.BOLD}Removed:{Colors.ENDC} {len(diff.removed)}")
    for competitor in diff.removed:
        print(f"  - {competitor.name}")
    print(f"{Colors.BOLD}Modified:{Colors.ENDC} {len(diff.modified)}")
    for change in diff.modified:
        print(
            f"  ~ {change.competitor_name}: {change.field} "
            f"{change.old_value!r} -> {change.new_value!r}"
        )
    if diff.rings_affected:
        print(f"{Colors.BOLD}Rings affected:{Colors.ENDC} {', '.join(sorted(diff.rings_affected))}")
    return 0


def run_restore_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.load_checkpoint(args.id)
    return _report(ok, "Checkpoint loaded", "Checkpoint not found")


def run_rename_checkpoint_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.rename_checkpoint(args.id, args.name)
    return _report(ok, "Checkpoint renamed", "Checkpoint not found")


def run_delete_checkpoint_command(session: ShellSession, args: argparse.Namespace) -> int:
    ok = session.tournament.delete_checkpoint(args.id)
    return _report(ok, "Checkpoint deleted", "Checkpoint not found")


def run_undo_command(session: ShellSession, args: argparse.Namespace) -> int:
    return _report(session.tournament.undo(), "Undone", "Nothing to undo")


def run_redo_command(session: ShellSession, args: argparse.Namespace) -> int:
    return _report(session.tournament.redo(), "Redone", "Nothing to redo")


def run_warnings_command(session: ShellSession, args: argparse.Namespace) -> int:
    warnings = session.tournament.warnings()
    if not warnings:
        print(f"{Colors.OKGREEN}No warnings{Colors.ENDC}")
    for warning in warnings:
        print(f"  {Colors.WARNING}{warning.message}{Colors.ENDC}")
    return 0


def run_save_command(session: ShellSession, args: argparse.Namespace) -> int:
    target = args.file or session.path
    if target is None:
        return _report(False, "", "No file given; use save --file PATH")
    session.path = save_tournament(session.tournament, target)
    session.dirty = False
    print(f"{Colors.OKGREEN}Tournament saved to: {session.path}{Colors.ENDC}")
    return 0


HANDLERS: Dict[str, Callable[[ShellSession, argparse.Namespace], int]] = {
    "status": run_status_command,
    "import": run_import_command,
    "categories": run_categories_command,
    "suggest-categories": run_suggest_categories_command,
    "assign": run_assign_command,
    "map-sparring": run_map_sparring_command,
    "physical": run_physical_command,
    "rings": run_rings_command,
    "move": run_move_command,
    "withdraw": run_withdraw_command,
    "reinstate": run_reinstate_command,
    "checkpoint": run_checkpoint_command,
    "checkpoints": run_checkpoints_command,
    "diff": run_diff_command,
    "restore": run_restore_command,
    "rename-checkpoint": run_rename_checkpoint_command,
    "delete-checkpoint": run_delete_checkpoint_command,
    "undo": run_undo_command,
    "redo": run_redo_command,
    "warnings": run_warnings_command,
    "save": run_save_command,
}


def run_command(session: ShellSession, command: str, args_list: List[str]) -> int:
    """Parse and run one shell command.

    Raises:
        SystemExit: If the arguments do not parse
        RingStewardException: If the tournament rejects the operation
    """
    command = command.lstrip("/")
    if command not in HANDLERS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        return 1
    args = create_parser(command).parse_args(args_list)
    return HANDLERS[command](session, args)


# ========== Modes ==========


def run_interactive_mode(session: ShellSession) -> int:
    """Run in interactive mode with autocomplete."""
    print(f"{Colors.BOLD}Ring Steward {__version__}{Colors.ENDC}")
    print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands\n")

    style = Style.from_dict({"prompt": "#00aa00 bold"})
    prompt_session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = prompt_session.prompt("ringsteward> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                if session.dirty:
                    print(f"{Colors.WARNING}Unsaved changes discarded{Colors.ENDC}")
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            if user_input.startswith("/help ") or user_input.startswith("help "):
                print_command_help(user_input.split()[1].lstrip("/"))
                continue

            parts = user_input.split()
            try:
                run_command(session, parts[0], parts[1:])
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except (RingStewardException, OSError, ValueError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="ringsteward",
        description="Ring assignment and checkpoints for tournaments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  ringsteward --file spring_open.json

  # Assign forms rings, then save
  ringsteward --file spring_open.json assign --event forms
        """,
    )
    parser.add_argument("--file", help="Tournament file (JSON)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("command", nargs="?", help="Command to run once")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments")
    return parser


def open_session(path: Optional[str]) -> ShellSession:
    """Load the tournament at ``path``, or start a new one if it does not exist."""
    if path is None:
        return ShellSession()
    file_path = Path(path)
    if file_path.exists():
        return ShellSession(load_tournament(file_path), file_path)
    logger.info(f"{file_path} does not exist, starting a new tournament")
    return ShellSession(path=file_path)


def main(argv: Optional[List[str]] = None) -> int:
    args = create_main_parser().parse_args(argv)
    try:
        session = open_session(args.file)
        if not args.command:
            return run_interactive_mode(session)

        status = run_command(session, args.command, args.args)
        if status == 0 and args.command.lstrip("/") in MUTATING_COMMANDS and session.path:
            save_tournament(session.tournament, session.path)
        return status
    except RingStewardException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
