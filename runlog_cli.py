from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from runlog_core.config import ErrorPolicy, LoggerConfig
from runlog_core.errors import RunlogError
from runlog_core.logging_config import get_logger
from runlog_core.message_types import MessageType
from runlog_core.paths import GENERATION_NAMES, LOG_DIR
from runlog_core.rotation import list_generations, prepare_log_file, read_generation
from runlog_core.session import LogSession

logger = get_logger("cli")

TYPE_CHOICES = {t.name.lower().replace("_", "-"): t for t in MessageType}


# -----------------------------
# Commands
# -----------------------------
def cmd_write(args: argparse.Namespace) -> None:
    """
    Run one complete session: rotate, header, the given messages, footer.
    """
    config = LoggerConfig(
        log_directory=args.dir,
        console=args.console,
        timestamps=args.timestamps,
        error_policy=ErrorPolicy.THROW,
    )
    types = [TYPE_CHOICES[t] for t in (args.type or ["general"])]
    session = LogSession(config)

    try:
        session.initialize()
        session.log_many(args.messages, types)
        session.end()
    except RunlogError as e:
        raise SystemExit(f"[ERROR] {e.message}")

    logger.info("Wrote %d message(s) to %s", len(args.messages), args.dir)
    if not args.console:
        print(f"Logged {len(args.messages)} message(s) to {Path(args.dir) / GENERATION_NAMES[0]}")


def cmd_rotate(args: argparse.Namespace) -> None:
    """
    Shift the generations in the log directory without starting a session.
    """
    try:
        active = prepare_log_file(args.dir)
    except RunlogError as e:
        raise SystemExit(f"[ERROR] {e.message}")
    print(f"Rotated. Next session writes to {active}")


def cmd_list(args: argparse.Namespace) -> None:
    """
    Human-friendly listing of the retained generations.
    """
    gens = list_generations(args.dir)
    print(f"{len(gens)} generation(s) in {args.dir}:\n")
    for path in gens:
        index = GENERATION_NAMES.index(path.name)
        print(f"- [{index}] {path.name}  {path.stat().st_size} bytes")


def cmd_show(args: argparse.Namespace) -> None:
    """
    Print one generation (0 = current, 1 = previous, 2 = oldest).
    """
    try:
        text = read_generation(args.dir, args.generation)
    except FileNotFoundError:
        raise SystemExit(f"No generation {args.generation} in {args.dir}")
    print(text, end="")


# -----------------------------
# Argparse wiring
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="runlog_cli",
        description="Rotating text log CLI",
    )

    sub = p.add_subparsers(dest="command", required=True)

    def add_dir(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--dir",
            default=str(LOG_DIR),
            help=f"Log directory (default: {LOG_DIR})",
        )

    # write
    p_write = sub.add_parser(
        "write",
        help="Run a session that logs the given messages (rotate + header + footer)",
    )
    add_dir(p_write)
    p_write.add_argument("messages", nargs="+", help="Messages to log, one line each")
    p_write.add_argument(
        "--type",
        action="append",
        choices=sorted(TYPE_CHOICES),
        help="Message type, repeat per message; the last one is reused for the rest",
    )
    p_write.add_argument(
        "--console",
        action="store_true",
        help="Mirror lines to the terminal",
    )
    p_write.add_argument(
        "--timestamps",
        action="store_true",
        help="Prefix lines with [HH:MM:SS] (UTC)",
    )
    p_write.set_defaults(func=cmd_write)

    # rotate
    p_rotate = sub.add_parser(
        "rotate",
        help="Rotate generations (log.txt -> log1.txt -> log2.txt)",
    )
    add_dir(p_rotate)
    p_rotate.set_defaults(func=cmd_rotate)

    # list
    p_list = sub.add_parser(
        "list",
        help="List retained log generations",
    )
    add_dir(p_list)
    p_list.set_defaults(func=cmd_list)

    # show
    p_show = sub.add_parser(
        "show",
        help="Print one log generation",
    )
    add_dir(p_show)
    p_show.add_argument(
        "--generation",
        type=int,
        default=0,
        choices=range(len(GENERATION_NAMES)),
        help="0 = current, 1 = previous, 2 = oldest (default: 0)",
    )
    p_show.set_defaults(func=cmd_show)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        raise SystemExit(1)
    func(args)


if __name__ == "__main__":
    main()
