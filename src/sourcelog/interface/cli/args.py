from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global flags plus one subcommand per
operation) and translates parsed namespaces into keyword overrides for
the session operations.
"""

import argparse
from typing import Any, Dict

from sourcelog import __version__
from sourcelog.domain.constants import (
    ALLOWED_DEBUG_SUBDIRS,
    DEFAULT_AGE_DAYS,
    DEFAULT_CADENCE_DAYS,
    DEFAULT_LIST_LIMIT,
    DEFAULT_PURGE_DAYS,
    DEFAULT_TAIL_LINES,
)
from sourcelog.domain.models import Level, Preference

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the sourcelog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="sourcelog",
        description="Route messages to per-source log files, tail them and rotate old files.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Session Configuration ---
    p.add_argument(
        "--root",
        dest="root_path",
        default=None,
        help="Log root directory (defaults to <Documents>/Logs).",
    )
    p.add_argument(
        "--ignore",
        action="store_true",
        help="Do not persist entries; echo to host output only.",
    )
    p.add_argument(
        "--debug-subdir",
        dest="debug_subdir",
        choices=ALLOWED_DEBUG_SUBDIRS,
        default=None,
        help="Subdirectory receiving diagnostic entries.",
    )

    # --- Diagnostics and Format ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate host logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--diag-log",
        dest="diag_log",
        default=None,
        help="Also persist host diagnostics to this (size-rotated) file.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Render results as JSON.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- write ---
    w = sub.add_parser("write", help="Append a message to its source log.")
    w.add_argument("message", nargs="+", help="Message text.")
    w.add_argument("-s", "--source", default=None, help="Logical source name or script path.")
    w.add_argument(
        "-l", "--level",
        default=Level.INFO.value,
        choices=[lv.value.lower() for lv in Level],
        type=str.lower,
        help="Entry level.",
    )
    w.add_argument("--diagnostic", action="store_true", help="Write into the debug subdirectory.")
    w.add_argument("--file", dest="explicit_path", default=None, help="Explicit target file.")
    w.add_argument("--echo", dest="passthrough", action="store_true", help="Print the written line.")

    # --- tail ---
    t = sub.add_parser("tail", help="Show the end of the newest matching log.")
    t.add_argument("-s", "--source", dest="source_filter", default="", help="Filename substring filter.")
    t.add_argument("-n", "--lines", dest="line_count", type=int, default=DEFAULT_TAIL_LINES)

    # --- list ---
    ls = sub.add_parser("list", help="Enumerate the newest log files.")
    ls.add_argument("-s", "--source", dest="source_filter", default="", help="Filename substring filter.")
    ls.add_argument("--limit", type=int, default=DEFAULT_LIST_LIMIT)

    # --- rotate ---
    r = sub.add_parser("rotate", help="Archive aged logs and purge old archives.")
    r.add_argument("--path", default=None, help="Directory to rotate (defaults to the log root).")
    r.add_argument("--age-days", dest="age_days", type=int, default=DEFAULT_AGE_DAYS)
    r.add_argument("--purge-days", dest="purge_days", type=int, default=DEFAULT_PURGE_DAYS)
    r.add_argument("--cadence-days", dest="cadence_days", type=int, default=DEFAULT_CADENCE_DAYS)
    r.add_argument("--force", action="store_true", help="Bypass the cadence gate.")

    # --- path ---
    sub.add_parser("path", help="Print the resolved log root.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_session_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate global flags into LogSession.initialize keyword arguments.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Session overrides subset.
    """
    overrides: Dict[str, Any] = {"root_path": args.root_path}
    if args.ignore:
        overrides["preference"] = Preference.IGNORE
    if args.debug_subdir:
        overrides["debug_subdir"] = args.debug_subdir
    return overrides


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate subcommand arguments into keyword arguments of the operation.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Operation keyword arguments.
    """
    if args.command == "write":
        return {
            "message": " ".join(args.message),
            "source": args.source,
            "level": Level.parse(args.level),
            "diagnostic": bool(args.diagnostic),
            "explicit_path": args.explicit_path,
            "passthrough": bool(args.passthrough),
        }
    if args.command == "tail":
        return {"source_filter": args.source_filter, "line_count": max(0, args.line_count)}
    if args.command == "list":
        return {"source_filter": args.source_filter, "limit": args.limit}
    if args.command == "rotate":
        return {
            "path": args.path,
            "age_days": args.age_days,
            "purge_days": args.purge_days,
            "cadence_days": args.cadence_days,
            "force": bool(args.force),
        }
    return {}
