"""
Tests for the command-line interface.
"""

import re

import pytest

from ..cli import main


def test_deck_command(capsys):
    main(["deck", "--seed", "3"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines[0].split()) == 44
    assert lines[1] == "44 cards"


def test_deck_is_seeded(capsys):
    main(["deck", "--seed", "8"])
    first = capsys.readouterr().out
    main(["deck", "--seed", "8"])
    assert capsys.readouterr().out == first


@pytest.mark.parametrize("policy", ["click", "random"])
def test_simulate(capsys, policy):
    main(["simulate", "--seed", "1", "--policy", policy, "--quiet"])

    out = capsys.readouterr().out
    assert re.search(r"^(Survived|Died) after \d+ actions\. Final score: -?\d+$", out.strip())
    assert out.count("\n") == 1


@pytest.mark.parametrize("argv", [
    ["simulate", "--seed", "1", "--quiet"],
    ["simulate", "--seed", "4", "--policy", "random", "--quiet"],
    ["deck", "--seed", "1"],
])
def test_exit_status_is_success(capsys, argv):
    """The console script passes main's return value to sys.exit."""
    assert not main(argv)


def test_simulate_prints_changes(capsys):
    main(["simulate", "--seed", "2"])

    out = capsys.readouterr().out
    assert "  1. Drew " in out
    assert "[health " in out


def test_simulate_rejects_bad_health(capsys):
    with pytest.raises(SystemExit):
        main(["simulate", "--max-health", "0"])
    assert "max_health must be positive" in capsys.readouterr().out


def test_no_command():
    with pytest.raises(SystemExit):
        main([])
