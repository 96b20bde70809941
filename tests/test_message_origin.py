import pytest

from runtime.message_origin import MessageOrigin, classify_message, needs_timestamp


@pytest.mark.parametrize(
    "message, origin",
    [
        ("", MessageOrigin.BLANK),
        ("  \n", MessageOrigin.BLANK),
        ("[Discord alice 2026-01-28 20:31 EST] hi", MessageOrigin.CHANNEL_ENVELOPE),
        ("[WhatsApp +15551234567 2026-01-28 08:00 PST] yo", MessageOrigin.CHANNEL_ENVELOPE),
        ("Current time: 3pm. Do the thing.", MessageOrigin.SCHEDULED_JOB),
        ("Job: cleanup\nCurrent time: Tue", MessageOrigin.SCHEDULED_JOB),
        ("Hello", MessageOrigin.PLAIN),
        ("[note] nothing dated here", MessageOrigin.PLAIN),
        ("Current time:3pm", MessageOrigin.PLAIN),
    ],
)
def test_classify_message(message, origin):
    assert classify_message(message) is origin


def test_envelope_must_start_the_message():
    assert classify_message("fwd: [Discord alice 2026-01-28 20:31 EST] hi") is MessageOrigin.PLAIN


def test_envelope_needs_sender_token_before_date():
    # the date right after the first word is not enough: ".+ " needs a sender
    assert classify_message("[Discord 2026-01-28] hi") is MessageOrigin.PLAIN


def test_envelope_takes_precedence_over_cron_annotation():
    msg = "[Slack bob 2026-01-28 10:00 UTC] Current time: now"
    assert classify_message(msg) is MessageOrigin.CHANNEL_ENVELOPE


def test_has_timestamp_flags():
    assert MessageOrigin.CHANNEL_ENVELOPE.has_timestamp
    assert MessageOrigin.SCHEDULED_JOB.has_timestamp
    assert not MessageOrigin.PLAIN.has_timestamp
    assert not MessageOrigin.BLANK.has_timestamp


def test_needs_timestamp_only_for_plain_messages():
    assert needs_timestamp("what's on my calendar?")
    assert not needs_timestamp("   ")
    assert not needs_timestamp("Current time: 9am")


def test_envelope_sender_must_be_ascii_word():
    assert classify_message("[Привет друг 2026-01-28] как дела") is MessageOrigin.PLAIN


def test_envelope_date_must_use_ascii_digits():
    assert classify_message("[Discord alice ٢٠٢٦-٠١-٢٨] hi") is MessageOrigin.PLAIN


@pytest.mark.parametrize("message", ["\ufeff", " \ufeff ", "\u3000 ", "\u00a0\n"])
def test_unicode_whitespace_counts_as_blank(message):
    assert classify_message(message) is MessageOrigin.BLANK


@pytest.mark.parametrize("message", ["\x1c", "\x85"])
def test_control_separators_are_not_blank(message):
    assert classify_message(message) is MessageOrigin.PLAIN
