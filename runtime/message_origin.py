"""Classify where an agent-bound message came from.

Two upstream producers already put a timestamp into the text they emit:

* channel plugins wrap messages in an envelope such as
  ``[Discord alice 2026-01-28 20:31 EST] hi``;
* the scheduler writes ``Current time: ...`` into job prompts.

Any new producer that stamps its own messages should be checked against
:func:`classify_message` so the gateway does not stamp them a second time.
"""

from __future__ import annotations

import re
from enum import Enum

__all__ = [
    "CRON_TIME_PATTERN",
    "ENVELOPE_PATTERN",
    "MessageOrigin",
    "classify_message",
    "needs_timestamp",
]

# [<word> <anything> YYYY-MM-DD ...; ASCII word characters and digits only
ENVELOPE_PATTERN = re.compile(r"^\[\w+ .+ \d{4}-\d{2}-\d{2}", re.ASCII)
CRON_TIME_PATTERN = re.compile(re.escape("Current time: "))

# Whitespace and line terminators removed when testing for a blank message.
_BLANK_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class MessageOrigin(str, Enum):
    BLANK = "blank"
    CHANNEL_ENVELOPE = "channel_envelope"
    SCHEDULED_JOB = "scheduled_job"
    PLAIN = "plain"

    @property
    def has_timestamp(self) -> bool:
        return self in (MessageOrigin.CHANNEL_ENVELOPE, MessageOrigin.SCHEDULED_JOB)


def classify_message(message: str) -> MessageOrigin:
    if not message.strip(_BLANK_CHARS):
        return MessageOrigin.BLANK
    if ENVELOPE_PATTERN.search(message):
        return MessageOrigin.CHANNEL_ENVELOPE
    if CRON_TIME_PATTERN.search(message):
        return MessageOrigin.SCHEDULED_JOB
    return MessageOrigin.PLAIN


def needs_timestamp(message: str) -> bool:
    return classify_message(message) is MessageOrigin.PLAIN
