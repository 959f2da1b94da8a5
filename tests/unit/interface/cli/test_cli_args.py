from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of global flags to session overrides.
2. Mapping of subcommand arguments to operation keyword arguments.
3. Rejection of invalid choices.
"""

import pytest

from sourcelog.domain.models import Level, Preference
from sourcelog.interface.cli.args import args_to_overrides, args_to_session_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_global_flags_mapping():
    args = parse_args(["--root", "/tmp/logs", "--ignore", "--debug-subdir", "test", "path"])

    overrides = args_to_session_overrides(args)

    assert overrides == {
        "root_path": "/tmp/logs",
        "preference": Preference.IGNORE,
        "debug_subdir": "test",
    }


def test_defaults_keep_preference_unset():
    overrides = args_to_session_overrides(parse_args(["path"]))
    assert overrides == {"root_path": None}


def test_write_mapping_joins_message_words():
    args = parse_args(["write", "deploy", "started", "-s", "Deploy", "-l", "VERBOSE", "--echo"])

    overrides = args_to_overrides(args)

    assert overrides["message"] == "deploy started"
    assert overrides["source"] == "Deploy"
    assert overrides["level"] is Level.VERBOSE
    assert overrides["passthrough"] is True
    assert overrides["diagnostic"] is False
    assert overrides["explicit_path"] is None


def test_write_level_defaults_to_info():
    assert args_to_overrides(parse_args(["write", "x"]))["level"] is Level.INFO


def test_tail_and_list_mapping():
    assert args_to_overrides(parse_args(["tail", "-s", "Deploy", "-n", "5"])) == {
        "source_filter": "Deploy",
        "line_count": 5,
    }
    assert args_to_overrides(parse_args(["list", "--limit", "3"])) == {
        "source_filter": "",
        "limit": 3,
    }


def test_rotate_mapping():
    args = parse_args([
        "rotate", "--age-days", "3", "--purge-days", "30", "--cadence-days", "1", "--force"
    ])

    assert args_to_overrides(args) == {
        "path": None,
        "age_days": 3,
        "purge_days": 30,
        "cadence_days": 1,
        "force": True,
    }


def test_invalid_level_rejected():
    with pytest.raises(SystemExit):
        parse_args(["write", "x", "--level", "loud"])


def test_command_is_required():
    with pytest.raises(SystemExit):
        parse_args([])
