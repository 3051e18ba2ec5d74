"""Tests for the lin-help CLI: output, flags and exit codes."""

from __future__ import annotations

import json

import pytest

from linhelp import __version__
from linhelp.cli import main, parse_args
from linhelp.errors import EX_CONFIG, EX_DATAERR, EX_OK, EX_SOFTWARE, EX_USAGE, UsageError


@pytest.fixture
def entries_file(isolated_env):
    return isolated_env / "entries.json"


def test_add_list_search(capsys, entries_file):
    assert main(["add", "ls -la", "list all files"]) == EX_OK
    assert "Saved #1: ls -la" in capsys.readouterr().out

    assert main(["add", "pwd", "print working directory"]) == EX_OK
    assert "Saved #2: pwd" in capsys.readouterr().out

    assert main(["list"]) == EX_OK
    out = capsys.readouterr().out
    assert "ID" in out and "Command" in out and "Description" in out
    assert out.index("ls -la") < out.index("pwd")

    assert main(["search", "list"]) == EX_OK
    out = capsys.readouterr().out
    assert "ls -la" in out
    assert "pwd" not in out

    stored = json.loads(entries_file.read_text())
    assert [e["id"] for e in stored["entries"]] == [1, 2]


def test_list_empty_store(capsys):
    assert main(["list"]) == EX_OK
    assert "No entries found." in capsys.readouterr().out


def test_help_and_version(capsys):
    assert main(["--help"]) == EX_OK
    assert "lin-help add <COMMAND> <DESCRIPTION>" in capsys.readouterr().out

    assert main(["--version"]) == EX_OK
    assert capsys.readouterr().out.strip() == f"lin-help {__version__}"


def test_no_args_is_usage_error(capsys):
    assert main([]) == EX_USAGE
    assert "Usage:" in capsys.readouterr().err


def test_unknown_subcommand_is_usage_error(capsys, entries_file):
    assert main(["remove", "1"]) == EX_USAGE
    err = capsys.readouterr().err
    assert "unable to recognize subcommand: remove" in err
    # nothing loaded or created
    assert not entries_file.exists()


def test_unknown_subcommand_checked_before_remote_config(capsys):
    assert main(["--remote", "bogus"]) == EX_USAGE


def test_missing_arguments_is_usage_error(capsys):
    assert main(["add", "ls"]) == EX_USAGE
    assert main(["search"]) == EX_USAGE


def test_corrupt_store_exits_with_data_error(capsys, entries_file):
    entries_file.parent.mkdir(parents=True)
    entries_file.write_text("{not json")

    assert main(["list"]) == EX_DATAERR
    assert capsys.readouterr().err.startswith("Error: unable to read entries")
    assert entries_file.read_text() == "{not json"


def test_unreadable_store_exits_with_software_error(capsys, entries_file):
    entries_file.mkdir(parents=True)
    assert main(["list"]) == EX_SOFTWARE


def test_remote_without_identity_exits_with_config_error(capsys):
    assert main(["--remote", "list"]) == EX_CONFIG
    assert "LINHELP_BUCKET" in capsys.readouterr().err


def test_config_file_selects_remote(capsys, tmp_path):
    config_dir = tmp_path / "config" / "linhelp"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[storage]\nremote = true\n")

    assert main(["list"]) == EX_CONFIG
    # --local overrides the config file
    assert main(["--local", "list"]) == EX_OK


def test_parse_args_flags_only_before_subcommand():
    assert parse_args(["-r", "add", "-l", "-r"]) == (True, ["add", "-l", "-r"])
    assert parse_args(["--local", "list"]) == (False, ["list"])
    assert parse_args(["--", "-weird"]) == (None, ["-weird"])
    assert parse_args([]) == (None, [])


def test_parse_args_unknown_option():
    with pytest.raises(UsageError):
        parse_args(["--bogus", "list"])


def test_add_command_starting_with_dash(capsys):
    assert main(["add", "-la", "flags for ls"]) == EX_OK
    assert "Saved #1: -la" in capsys.readouterr().out
