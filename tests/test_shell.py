import json
from dataclasses import replace

import pytest

from ringsteward.shell.__main__ import (
    COMMANDS,
    HANDLERS,
    MUTATING_COMMANDS,
    ShellSession,
    create_completer,
    create_parser,
    main,
    run_command,
)
from ringsteward.storage import load_tournament, save_tournament


def test_every_command_has_a_handler():
    assert set(HANDLERS) == set(COMMANDS)
    assert MUTATING_COMMANDS <= set(COMMANDS)


def test_every_command_has_a_parser():
    for command in COMMANDS:
        assert create_parser(command).prog == command


def test_completer_offers_plain_and_slash_forms():
    completer = create_completer()

    assert "assign" in completer.options
    assert "/assign" in completer.options
    assert "/help" in completer.options


def test_unknown_command(capsys):
    assert run_command(ShellSession(), "bogus", []) == 1
    assert "Unknown command" in capsys.readouterr().out


def test_bad_arguments_exit():
    with pytest.raises(SystemExit):
        run_command(ShellSession(), "withdraw", ["--scope", "forms"])


def test_session_tracks_changes(tournament):
    session = ShellSession(tournament)
    assert not session.dirty

    assert run_command(session, "/assign", ["--event", "forms"]) == 0

    assert session.dirty
    assert all(c.forms.pool for c in tournament.competitors)


def test_checkpoint_commands(tournament, capsys):
    session = ShellSession(tournament)
    run_command(session, "checkpoint", ["--name", "Start"])
    checkpoint_id = tournament.checkpoints[0].id
    run_command(session, "assign", [])
    capsys.readouterr()

    assert run_command(session, "diff", ["--id", checkpoint_id]) == 0
    out = capsys.readouterr().out
    assert "Modified:" in out
    assert "Mixed 8-14_P1" in out

    assert run_command(session, "restore", ["--id", checkpoint_id]) == 0
    assert all(c.forms.pool is None for c in tournament.competitors)
    assert run_command(session, "diff", ["--id", "missing"]) == 1


def test_import_roster(tmp_path):
    roster = tmp_path / "roster.json"
    roster.write_text(
        json.dumps(
            [
                {"first_name": "Ana", "last_name": "Lopez", "age": "18 and Up",
                 "forms_division": "Black Belt", "sparring_division": "Same as forms"},
                {"first_name": "Ben", "last_name": "Ng", "age": 9,
                 "forms_division": "Beginner"},
            ]
        ),
        encoding="utf-8",
    )
    session = ShellSession()

    assert run_command(session, "import", ["--roster", str(roster)]) == 0

    ages = sorted(c.age for c in session.tournament.competitors)
    assert ages == [9, 18]


def test_save_without_path_fails():
    assert run_command(ShellSession(), "save", []) == 1


def test_one_shot_mutation_is_saved(tmp_path, tournament):
    path = tmp_path / "spring.json"
    save_tournament(tournament, path)

    assert main(["--file", str(path), "assign", "--event", "forms"]) == 0

    reloaded = load_tournament(path)
    assert all(c.forms.pool for c in reloaded.competitors)


def test_one_shot_read_does_not_save(tmp_path, tournament):
    path = tmp_path / "spring.json"
    save_tournament(tournament, path)
    before = path.read_text(encoding="utf-8")

    assert main(["--file", str(path), "rings"]) == 0

    assert path.read_text(encoding="utf-8") == before


def test_capacity_error_is_reported(tmp_path, tournament, capsys):
    tournament.update_category(replace(tournament.get_category("cat-forms"), num_pools=5))
    path = tmp_path / "spring.json"
    save_tournament(tournament, path)

    assert main(["--file", str(path), "assign"]) == 1
    assert "Error" in capsys.readouterr().out
