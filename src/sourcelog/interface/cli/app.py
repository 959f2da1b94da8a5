from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: host logging bootstrap, session
initialization from the global flags, dispatch to the requested operation
and result rendering (human-readable or JSON).
"""

import json
import sys
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from sourcelog.core.session import LogSession
from sourcelog.domain.models import LogFileInfo, ReadResult, RotationReport
from sourcelog.infra.logging import HostLoggingConfig, configure_logging, get_logger
from sourcelog.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 nothing found or failure, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Host logging bootstrap (stderr, optional diagnostics file)
    configure_logging(HostLoggingConfig.for_cli(debug=args.debug, diag_log=args.diag_log))

    logger.debug(f"CLI command '{args.command}' initiated.")

    # 3. Session initialization
    session = LogSession.initialize(**cli_args.args_to_session_overrides(args))
    overrides = cli_args.args_to_overrides(args)

    # 4. Dispatch
    try:
        if args.command == "path":
            return _render_path(session, args.json_output)
        if args.command == "write":
            line = session.log(**overrides)
            if line is not None:
                print(line)
            return 0
        if args.command == "tail":
            return _render_tail(session.read_latest(**overrides), args.json_output)
        if args.command == "list":
            return _render_list(session.list_recent(**overrides), args.json_output)
        if args.command == "rotate":
            return _render_rotation(session.rotate(**overrides), args.json_output)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130

    parser.error(f"Unknown command: {args.command}")
    return 2

# -----------------------------------------------------------------------------
# RESULT RENDERING
# -----------------------------------------------------------------------------

def _render_path(session: LogSession, as_json: bool) -> int:
    path = session.logging_path
    if as_json:
        print(json.dumps({"logging_path": path}))
    elif path:
        print(path)
    return 0 if path else 1


def _render_tail(result: ReadResult, as_json: bool) -> int:
    if as_json:
        payload: Dict[str, Any] = {
            "file": _jsonable(asdict(result.file_info)) if result.file_info else None,
            "lines": result.tail_lines,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0 if result.found else 1

    if not result.found:
        return 1

    info = result.file_info
    print(f"==> {info.name} ({info.modified:%Y-%m-%d %H:%M:%S}) <==")
    for line in result.tail_lines:
        print(line)
    return 0


def _render_list(files: List[LogFileInfo], as_json: bool) -> int:
    if as_json:
        print(json.dumps([_jsonable(asdict(f)) for f in files], ensure_ascii=False, indent=2))
    else:
        for f in files:
            print(f"{f.modified:%Y-%m-%d %H:%M:%S}  {f.size:>10}  {f.name}")
    return 0 if files else 1


def _render_rotation(report: RotationReport, as_json: bool) -> int:
    if as_json:
        print(json.dumps(_jsonable(asdict(report)), indent=2))
    else:
        _print_human_summary(report)
    return 1 if report.reason == "path missing" else 0


def _print_human_summary(report: RotationReport) -> None:
    """Render a rotation report for terminal output."""
    if not report.executed:
        print(f"Rotation skipped ({report.reason}).")
        if report.next_due:
            print(f"Next rotation due: {report.next_due:%Y-%m-%d %H:%M:%S}")
        return

    print(f"Rotation executed ({report.reason}).")
    print(f"  Archived:        {report.moved}")
    print(f"  Purged:          {report.purged}")
    if report.move_failures or report.delete_failures:
        print(f"  Move failures:   {report.move_failures}")
        print(f"  Delete failures: {report.delete_failures}")


def _jsonable(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert datetime values of a flat dict to ISO strings."""
    return {k: (v.isoformat() if isinstance(v, datetime) else v) for k, v in data.items()}
