"""Relay of ephemeral typing indicators."""

from chatline.infrastructure.realtime import EVENT_STOP_TYPING, EVENT_TYPING, RealtimeFanout


def relay_typing(fanout: RealtimeFanout, *, from_id: int, to_id: int | None, typing: bool) -> None:
    """Tell ``to_id`` that ``from_id`` started or stopped typing. Nothing is stored."""

    if not to_id or to_id == from_id:
        return
    fanout.route(to_id, EVENT_TYPING if typing else EVENT_STOP_TYPING, {"from": from_id})


__all__ = ["relay_typing"]
