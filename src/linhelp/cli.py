"""
CLI for lin-help.

Minimal CLI using stdlib argument handling for fast startup.
This is the only place that turns errors into exit codes.

Usage:
    lin-help add "<command>" "<description>"
    lin-help search <term>
    lin-help list
    lin-help --help
"""

import logging
import sys

from linhelp.errors import EX_OK, EX_USAGE, LinHelpError, UsageError

logger = logging.getLogger("linhelp")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def print_help(file=None) -> None:
    """Print help message."""
    print("""lin-help - a handy tool for collecting common shell commands

Usage:
    lin-help [options] <command> [args]

Commands:
    lin-help add <COMMAND> <DESCRIPTION>   Save a command (quote both)
    lin-help search <TERM>                 Show commands matching the term
    lin-help list                          List all saved commands

Options:
    --remote, -r                  Use the remote bucket (LINHELP_BUCKET / LINHELP_OBJECT_KEY)
    --local, -l                   Use the local entries file
    --help, -h                    Show this help
    --version, -V                 Show version

Examples:
    lin-help add "tar -xzf archive.tar.gz" "extract a gzipped tarball"
    lin-help search tar
    lin-help --remote list

Search is a case-sensitive substring match on command and description.""", file=file)


def print_version() -> None:
    """Print version."""
    from linhelp import __version__
    print(f"lin-help {__version__}")


def set_log_level(level: str) -> None:
    """Set the root log level by name, falling back to WARNING."""
    value = logging.getLevelName(level.upper())
    logging.getLogger().setLevel(value if isinstance(value, int) else logging.WARNING)


def setup_logging(level: str) -> None:
    """Configure stderr logging for this process."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    set_log_level(level)


def parse_args(args: list[str]) -> tuple[bool | None, list[str]]:
    """
    Split backend flags from positional arguments.

    Returns (remote flag or None, positionals). Flags are only read before
    the subcommand; everything after it is taken verbatim, so a saved
    command or description may itself start with a dash.
    """
    remote: bool | None = None

    for i, arg in enumerate(args):
        if arg == "--":
            return remote, args[i + 1:]
        if arg in ("--remote", "-r"):
            remote = True
        elif arg in ("--local", "-l"):
            remote = False
        elif arg.startswith("-") and len(arg) > 1:
            raise UsageError(f"unknown option: {arg}")
        else:
            return remote, args[i:]

    return remote, []


def run(verb: str, args: list[str], remote_flag: bool | None) -> int:
    """Resolve configuration and backend, then run one verb."""
    from linhelp.config import get_log_level, load_config, use_remote
    from linhelp.display import format_entries, format_saved
    from linhelp.service import VERBS, CommandService
    from linhelp.storage import get_backend

    if verb not in VERBS:
        raise UsageError(f"unable to recognize subcommand: {verb}")

    config = load_config()
    set_log_level(get_log_level(config))

    backend = get_backend(use_remote(config, remote_flag), config)
    service = CommandService(backend)
    entries = service.execute(verb, args)

    if verb == "add":
        print(format_saved(entries[0]))
    elif verb == "search":
        print(format_entries(entries, title=f"MATCHING '{args[0]}'"))
    else:
        print(format_entries(entries))

    return EX_OK


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns the process exit code; never exits by itself.
    """
    from linhelp.config import get_log_level

    args = sys.argv[1:] if argv is None else argv
    setup_logging(get_log_level())

    if not args:
        print_help(file=sys.stderr)
        return EX_USAGE

    first_arg = args[0]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return EX_OK

    if first_arg in ("--version", "-V", "version"):
        print_version()
        return EX_OK

    try:
        remote_flag, positionals = parse_args(args)
        if not positionals:
            raise UsageError("missing subcommand")
        return run(positionals[0], positionals[1:], remote_flag)
    except LinHelpError as e:
        logger.debug(f"{type(e).__name__} (exit {e.exit_code})", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        if isinstance(e, UsageError):
            print("Run 'lin-help --help' for usage.", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
