"""Tests for conversation listings and the read retry policy."""

import pytest

from chatline.application.retry import retry_transient_read
from chatline.application.use_cases.messages import (
    delete_for_me,
    list_recent_conversations,
    send_message,
)
from chatline.application.use_cases.presence import record_last_seen
from chatline.application.use_cases.push import subscribe_push
from chatline.domain.entities import AudioPayload, SharedPostPayload, TextPayload
from chatline.domain.errors import TransientStoreError, ValidationError
from chatline.infrastructure.repositories import PushSubscriptionRepository, UserRepository


def test_recent_conversations_show_the_latest_visible_message(db_session, fanout, make_user):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    send_message(db_session, fanout, sender_id=alice.id, receiver_id=bob.id, payload=TextPayload(text="hey bob"))
    send_message(
        db_session,
        fanout,
        sender_id=carol.id,
        receiver_id=alice.id,
        payload=AudioPayload(audio_url="https://cdn/v.webm", duration=4.0),
    )
    last_from_bob = send_message(
        db_session, fanout, sender_id=bob.id, receiver_id=alice.id, payload=SharedPostPayload(post_id="p1")
    )
    delete_for_me(db_session, actor_id=alice.id, message_id=last_from_bob.id)

    recent = list_recent_conversations(db_session, viewer_id=alice.id)

    assert [entry.summary.counterpart_id for entry in recent] == [carol.id, bob.id]
    assert [entry.summary.preview for entry in recent] == ["voice message", "hey bob"]
    assert recent[0].counterpart.username == "carol"


def test_recent_conversations_are_empty_without_messages(db_session, make_user):
    alice = make_user("alice")

    assert list_recent_conversations(db_session, viewer_id=alice.id) == []


def test_reads_are_retried_once_on_a_transient_error():
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise TransientStoreError("down")
        return "ok"

    assert retry_transient_read(flaky) == "ok"
    assert len(calls) == 2


def test_read_retry_gives_up_after_the_second_failure():
    def broken():
        raise TransientStoreError("down")

    with pytest.raises(TransientStoreError):
        retry_transient_read(broken)


def test_record_last_seen_updates_the_user(db_session, make_user):
    alice = make_user("alice")

    seen_at = record_last_seen(db_session, user_id=alice.id)

    stored = UserRepository(db_session).get(alice.id)
    assert stored.last_active is not None
    assert abs((stored.last_active - seen_at).total_seconds()) < 1


def test_push_subscription_is_replaced_per_user(db_session, make_user):
    alice = make_user("alice")
    subscription = {"endpoint": "https://push.example/1", "keys": {"p256dh": "k", "auth": "a"}}

    subscribe_push(db_session, user_id=alice.id, subscription=subscription)
    subscribe_push(
        db_session, user_id=alice.id, subscription={**subscription, "endpoint": "https://push.example/2"}
    )

    stored = PushSubscriptionRepository(db_session).get_for_user(alice.id)
    assert stored.subscription["endpoint"] == "https://push.example/2"


@pytest.mark.parametrize(
    "subscription",
    [
        {"endpoint": "http://insecure", "keys": {"p256dh": "k", "auth": "a"}},
        {"endpoint": "https://push.example/1", "keys": {"p256dh": "k"}},
        {"keys": {"p256dh": "k", "auth": "a"}},
    ],
)
def test_invalid_push_subscriptions_are_rejected(db_session, make_user, subscription):
    alice = make_user("alice")

    with pytest.raises(ValidationError):
        subscribe_push(db_session, user_id=alice.id, subscription=subscription)
