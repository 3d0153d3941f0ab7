"""Tests for notification deduplication and management."""

import pytest

from chatline.application.use_cases.messages import send_message
from chatline.application.use_cases.notifications import (
    acknowledge,
    count_unread,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
    notify_if_needed,
)
from chatline.domain.entities import (
    NOTIFICATION_KIND_LIKE,
    NOTIFICATION_KIND_MESSAGE,
    AudioPayload,
    TextPayload,
)
from chatline.domain.errors import AuthorizationError, NotFoundError, ValidationError


def _send(db_session, fanout, sender, receiver, payload=None):
    return send_message(
        db_session,
        fanout,
        sender_id=sender.id,
        receiver_id=receiver.id,
        payload=payload or TextPayload(text="hi"),
    )


def test_two_sends_leave_a_single_unread_notification(db_session, fanout, make_user, listen):
    alice, bob = make_user("alice"), make_user("bob")
    bob_events = listen(bob.id)

    _send(db_session, fanout, alice, bob)
    _send(db_session, fanout, alice, bob)

    assert count_unread(db_session, target_id=bob.id) == 1
    assert len(bob_events.of_type("new_message_notification")) == 1


def test_read_notification_allows_a_new_one(db_session, fanout, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    _send(db_session, fanout, alice, bob)
    (first,) = list_notifications(db_session, target_id=bob.id)

    mark_read(db_session, notification_id=first.id, actor_id=bob.id)
    _send(db_session, fanout, alice, bob)

    notifications = list_notifications(db_session, target_id=bob.id)
    assert len(notifications) == 2
    assert count_unread(db_session, target_id=bob.id) == 1


def test_dedup_is_per_sender(db_session, fanout, make_user):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")

    _send(db_session, fanout, alice, bob)
    _send(db_session, fanout, carol, bob)

    assert count_unread(db_session, target_id=bob.id) == 2


def test_message_notification_text_uses_the_preview(db_session, fanout, make_user, listen):
    alice, bob = make_user("alice"), make_user("bob")
    bob_events = listen(bob.id)

    _send(db_session, fanout, alice, bob, AudioPayload(audio_url="https://cdn/a.webm", duration=2))

    (event,) = bob_events.of_type("new_message_notification")
    assert event["data"] == {"senderName": "alice", "text": "voice message"}


def test_social_notifications_are_never_deduplicated(db_session, fanout, make_user, listen):
    alice, bob = make_user("alice"), make_user("bob")
    bob_events = listen(bob.id)

    for _ in range(2):
        created = notify_if_needed(
            db_session,
            fanout,
            kind=NOTIFICATION_KIND_LIKE,
            source_id=alice.id,
            target_id=bob.id,
            post_id="post-1",
        )
        assert created is not None

    assert count_unread(db_session, target_id=bob.id) == 2
    events = bob_events.of_type("notification")
    assert len(events) == 2
    assert events[0]["data"]["kind"] == NOTIFICATION_KIND_LIKE
    assert events[0]["data"]["source_name"] == "alice"
    assert events[0]["data"]["post_id"] == "post-1"


def test_self_notification_is_suppressed(db_session, fanout, make_user):
    alice = make_user("alice")

    assert (
        notify_if_needed(
            db_session, fanout, kind=NOTIFICATION_KIND_MESSAGE, source_id=alice.id, target_id=alice.id
        )
        is None
    )
    assert count_unread(db_session, target_id=alice.id) == 0


def test_unknown_kind_is_rejected(db_session, fanout, make_user):
    alice, bob = make_user("alice"), make_user("bob")

    with pytest.raises(ValidationError):
        notify_if_needed(db_session, fanout, kind="poke", source_id=alice.id, target_id=bob.id)


def test_only_the_target_can_change_a_notification(db_session, fanout, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    _send(db_session, fanout, alice, bob)
    (notification,) = list_notifications(db_session, target_id=bob.id)

    with pytest.raises(AuthorizationError):
        mark_read(db_session, notification_id=notification.id, actor_id=alice.id)
    with pytest.raises(AuthorizationError):
        delete_notification(db_session, notification_id=notification.id, actor_id=alice.id)
    with pytest.raises(NotFoundError):
        mark_read(db_session, notification_id=notification.id + 100, actor_id=bob.id)


def test_mark_all_read_and_delete(db_session, fanout, make_user):
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    _send(db_session, fanout, alice, bob)
    _send(db_session, fanout, carol, bob)

    assert mark_all_read(db_session, actor_id=bob.id) == 2
    assert count_unread(db_session, target_id=bob.id) == 0

    notification = list_notifications(db_session, target_id=bob.id)[0]
    delete_notification(db_session, notification_id=notification.id, actor_id=bob.id)
    assert len(list_notifications(db_session, target_id=bob.id)) == 1


def test_acknowledge_ignores_foreign_and_malformed_ids(db_session, fanout, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    _send(db_session, fanout, alice, bob)
    _send(db_session, fanout, bob, alice)
    (for_bob,) = list_notifications(db_session, target_id=bob.id)
    (for_alice,) = list_notifications(db_session, target_id=alice.id)

    updated = acknowledge(
        db_session, actor_id=bob.id, notification_ids=[for_bob.id, for_alice.id, "x", True]
    )

    assert updated == 1
    assert count_unread(db_session, target_id=bob.id) == 0
    assert count_unread(db_session, target_id=alice.id) == 1
