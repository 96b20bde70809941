"""Timestamp injection for agent-bound messages.

The gateway agent handler stamps every message it forwards to an agent
context (TUI, web, spawned sub-agents, heartbeats) so the agent knows the
current date and time without touching the cached system prompt.

Channel messages arrive already wrapped in a dated envelope and take a
separate path, and scheduled jobs write ``Current time: ...`` themselves;
both are passed through untouched (see ``runtime.message_origin``).

Stamping is not idempotent: the rendered prefix looks like
``[Wednesday, January 28th, 2026 at 8:31 PM]`` and does not match the envelope
pattern, so calling ``inject_timestamp`` on its own output stamps it again.
Callers stamp each message exactly once.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from config import GatewayConfig, coerce_config
from models.options import TimeFormat, TimestampInjectionOptions
from runtime.date_time import (
    DEFAULT_TIMEZONE,
    format_user_time,
    resolve_user_time_format,
    resolve_user_timezone,
)
from runtime.message_origin import MessageOrigin, classify_message

__all__ = [
    "TimestampInjector",
    "inject_timestamp",
    "timestamp_opts_from_config",
]

logger = logging.getLogger(__name__)

OptionsLike = Union[TimestampInjectionOptions, Mapping[str, Any], None]
Formatter = Callable[[datetime, str, Any], Optional[str]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_options(options: OptionsLike) -> TimestampInjectionOptions:
    if options is None:
        return TimestampInjectionOptions()
    if isinstance(options, TimestampInjectionOptions):
        return options
    return TimestampInjectionOptions.model_validate(dict(options))


class TimestampInjector:
    """Prefix plain messages with ``[<formatted time>] ``.

    ``formatter``, ``format_resolver`` and ``clock`` are injectable so tests
    and alternative renderers can replace them. Anything the formatter raises
    propagates; a falsy return means "no timestamp" and the message is
    returned unchanged.
    """

    def __init__(
        self,
        *,
        formatter: Formatter = format_user_time,
        format_resolver: Callable[[Optional[str]], Any] = resolve_user_time_format,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.formatter = formatter
        self.format_resolver = format_resolver
        self.clock = clock

    def inject(self, message: str, options: OptionsLike = None) -> str:
        origin = classify_message(message)
        if origin is not MessageOrigin.PLAIN:
            logger.debug("Not stamping %s message", origin.value)
            return message

        opts = _coerce_options(options)
        now = opts.now if opts.now is not None else self.clock()
        tz = opts.timezone if opts.timezone is not None else DEFAULT_TIMEZONE
        time_format = opts.time_format if opts.time_format is not None else TimeFormat.TWELVE.value

        formatted = self.formatter(now, tz, self.format_resolver(time_format))
        if not formatted:
            logger.debug("Formatter returned nothing for tz=%r; leaving message unstamped", tz)
            return message
        return f"[{formatted}] {message}"

    __call__ = inject


_default_injector = TimestampInjector()


def inject_timestamp(message: str, options: OptionsLike = None) -> str:
    """Stamp ``message`` unless it is blank or already carries a timestamp."""
    return _default_injector.inject(message, options)


def timestamp_opts_from_config(
    cfg: Union[GatewayConfig, Mapping[str, Any], None],
) -> TimestampInjectionOptions:
    defaults = coerce_config(cfg).agents.defaults
    # time_format is passed through as configured; inject() handles defaulting.
    return TimestampInjectionOptions(
        timezone=resolve_user_timezone(defaults.user_timezone),
        time_format=defaults.time_format,
    )
