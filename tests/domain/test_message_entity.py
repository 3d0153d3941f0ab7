"""Tests for the message entity and its delivery states."""

import pytest

from chatline.domain.entities import (
    MESSAGE_KIND_AUDIO,
    MESSAGE_KIND_SHARED_POST,
    MESSAGE_STATUS_DELIVERED,
    MESSAGE_STATUS_SEEN,
    MESSAGE_STATUS_SENT,
    AudioPayload,
    Message,
    SharedPostPayload,
    can_transition,
    next_status,
)


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        (MESSAGE_STATUS_SENT, MESSAGE_STATUS_DELIVERED, True),
        (MESSAGE_STATUS_DELIVERED, MESSAGE_STATUS_SEEN, True),
        (MESSAGE_STATUS_SENT, MESSAGE_STATUS_SEEN, False),
        (MESSAGE_STATUS_SEEN, MESSAGE_STATUS_DELIVERED, False),
        (MESSAGE_STATUS_DELIVERED, MESSAGE_STATUS_SENT, False),
        (MESSAGE_STATUS_SEEN, MESSAGE_STATUS_SEEN, False),
    ],
)
def test_status_only_moves_one_step_forward(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_seen_is_terminal():
    assert next_status(MESSAGE_STATUS_SEEN) is None


def test_from_payload_sets_kind_and_fields():
    audio = Message.from_payload(
        sender_id=1, receiver_id=2, payload=AudioPayload(audio_url="https://x/a.webm", duration=3.5)
    )
    shared = Message.from_payload(
        sender_id=1, receiver_id=2, payload=SharedPostPayload(post_id="post-9")
    )

    assert audio.kind == MESSAGE_KIND_AUDIO
    assert audio.audio_duration == 3.5
    assert audio.status == MESSAGE_STATUS_SENT
    assert shared.kind == MESSAGE_KIND_SHARED_POST
    assert shared.shared_post_id == "post-9"
    assert shared.text is None


def test_counterpart_of_returns_the_other_participant():
    message = Message(id=1, sender_id=1, receiver_id=2, kind="text", text="hi")

    assert message.counterpart_of(1) == 2
    assert message.counterpart_of(2) == 1
    assert message.involves(2)
    assert not message.involves(3)
