"""Tests for the pure visibility rules."""

from datetime import datetime, timedelta, timezone

from chatline.domain.entities import (
    MESSAGE_KIND_AUDIO,
    MESSAGE_KIND_FILE,
    MESSAGE_KIND_SHARED_POST,
    MESSAGE_KIND_TEXT,
    Message,
)
from chatline.domain.visibility import preview_for, recent_conversations, visible_history

ALICE, BOB, CAROL = 1, 2, 3
T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _message(message_id, sender, receiver, *, minutes=0, kind=MESSAGE_KIND_TEXT, text="hi", **extra):
    return Message(
        id=message_id,
        sender_id=sender,
        receiver_id=receiver,
        kind=kind,
        text=text,
        created_at=T0 + timedelta(minutes=minutes),
        **extra,
    )


def test_history_is_chronological_and_limited_to_the_pair():
    messages = [
        _message(3, BOB, ALICE, minutes=2),
        _message(1, ALICE, BOB, minutes=0),
        _message(2, ALICE, CAROL, minutes=1),
    ]

    history = visible_history(messages, ALICE, BOB)

    assert [m.id for m in history] == [1, 3]


def test_equal_timestamps_are_ordered_by_id():
    messages = [_message(5, ALICE, BOB), _message(4, BOB, ALICE)]

    assert [m.id for m in visible_history(messages, ALICE, BOB)] == [4, 5]


def test_hidden_message_only_disappears_for_the_hider():
    hidden = _message(1, ALICE, BOB, hidden_for={ALICE})

    assert visible_history([hidden], ALICE, BOB) == []
    assert [m.id for m in visible_history([hidden], BOB, ALICE)] == [1]


def test_deleted_for_everyone_is_invisible_to_both():
    deleted = _message(1, ALICE, BOB, deleted_for_everyone=True)

    assert visible_history([deleted], ALICE, BOB) == []
    assert visible_history([deleted], BOB, ALICE) == []


def test_preview_falls_back_by_kind():
    assert preview_for(_message(1, ALICE, BOB, text="hello")) == "hello"
    assert preview_for(_message(2, ALICE, BOB, kind=MESSAGE_KIND_AUDIO, text=None)) == "voice message"
    assert preview_for(_message(3, ALICE, BOB, kind=MESSAGE_KIND_FILE, text=None)) == "file"
    assert (
        preview_for(_message(4, ALICE, BOB, kind=MESSAGE_KIND_SHARED_POST, text=None))
        == "shared post"
    )


def test_recent_conversations_keep_one_entry_per_counterpart():
    messages = [
        _message(1, ALICE, BOB, minutes=0, text="first"),
        _message(2, BOB, ALICE, minutes=5, text="latest from bob"),
        _message(3, CAROL, ALICE, minutes=3, kind=MESSAGE_KIND_AUDIO, text=None),
    ]

    summaries = recent_conversations(messages, ALICE)

    assert [s.counterpart_id for s in summaries] == [BOB, CAROL]
    assert summaries[0].preview == "latest from bob"
    assert summaries[0].last_message.id == 2
    assert summaries[1].preview == "voice message"


def test_recent_conversations_skip_messages_hidden_from_the_viewer():
    messages = [
        _message(1, ALICE, BOB, minutes=0, text="visible"),
        _message(2, BOB, ALICE, minutes=1, text="hidden", hidden_for={ALICE}),
        _message(3, ALICE, CAROL, minutes=2, deleted_for_everyone=True),
    ]

    summaries = recent_conversations(messages, ALICE)

    assert [(s.counterpart_id, s.preview) for s in summaries] == [(BOB, "visible")]
