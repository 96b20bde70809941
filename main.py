from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import ConfigError, load_config
from runtime.timestamp import inject_timestamp, timestamp_opts_from_config


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_log_level() -> str:
    level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"


def _parse_now(raw: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if raw[-1:] in ("Z", "z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Prefix an agent message with the current user time.")
    p.add_argument("message", nargs="?", help="Message to stamp (read from stdin when omitted).")
    p.add_argument(
        "--config",
        default=os.getenv("GATEWAY_CONFIG"),
        help="Path to a JSON gateway config with agents.defaults.userTimezone/timeFormat.",
    )
    p.add_argument("--timezone", help="Override the configured timezone (IANA name or offset).")
    p.add_argument(
        "--time-format",
        choices=["12", "24"],
        help="Override the configured clock format.",
    )
    p.add_argument("--now", help="ISO-8601 instant to render instead of the current time.")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=_default_log_level(),
        help="Logging level (default: $LOG_LEVEL or WARNING).",
    )
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    opts = timestamp_opts_from_config(cfg)
    overrides = {}
    if args.timezone:
        overrides["timezone"] = args.timezone
    if args.time_format:
        overrides["time_format"] = args.time_format
    if args.now:
        try:
            overrides["now"] = _parse_now(args.now)
        except ValueError:
            print(f"error: --now is not an ISO-8601 timestamp: {args.now!r}", file=sys.stderr)
            return 2
    if overrides:
        opts = opts.model_copy(update=overrides)

    message = args.message if args.message is not None else sys.stdin.read().rstrip("\n")
    print(inject_timestamp(message, opts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
