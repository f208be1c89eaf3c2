# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

from ..commontypes import NavigationDirection
from ..eventutils import should_hide_event

if typing.TYPE_CHECKING:
    from ..timeline import Client, MessageRef, RoomContext

logger = logging.getLogger(__name__)

# With no anchor to start from, only look this many events in from the edge; a room can
# have thousands of events loaded and we run on every keypress.
MAX_JUMP_DISTANCE = 100


def message_sequence(anchor: MessageRef, room_context: RoomContext, client: Client) -> typing.Optional[list[MessageRef]]:
    """Collect the messages that edit navigation moves through, oldest first.

    That's the live timeline followed by the room's pending events. Pending events can't be
    attributed to a thread yet, so they're left out when the anchor is in one.

    Returns None if any of the room state is unavailable; callers treat that as nothing to
    navigate to.
    """
    timeline = room_context.live_timeline
    if timeline is None:
        logger.debug("No live timeline; nothing to navigate")
        return None
    timeline_events = timeline.get_events()
    if timeline_events is None:
        logger.debug("Live timeline has no events loaded")
        return None
    if anchor.room_id is None:
        logger.debug("Anchor %s has no room", anchor.event_id)
        return None
    room = client.get_room(anchor.room_id)
    if room is None:
        logger.debug("Room %s is unknown to the client", anchor.room_id)
        return None
    if anchor.in_thread:
        return list(timeline_events)
    return [*timeline_events, *(room.get_pending_events() or ())]


def find_editable_event(
    events: collections.abc.Sequence[MessageRef],
    direction: NavigationDirection,
    from_event_id: typing.Optional[str],
    is_editable: collections.abc.Callable[[MessageRef], bool],
    max_jump_distance: int = MAX_JUMP_DISTANCE,
) -> typing.Optional[MessageRef]:
    """Scan from the anchor in the given direction and return the first visible, editable message.

    Backward means toward older messages (lower indices). With no anchor, the scan starts at
    the edge of the sequence it is moving away from and gives up after max_jump_distance
    further messages; from an anchor it runs to the end of the sequence. An anchor that
    isn't in the sequence finds nothing.
    """
    ordered = list(events) if direction.is_forward else list(reversed(events))
    if from_event_id is None:
        window = ordered[: max_jump_distance + 1]
    else:
        for position, event in enumerate(ordered):
            if event.event_id == from_event_id:
                break
        else:
            logger.debug("Anchor %s is not in the message sequence", from_event_id)
            return None
        window = ordered[position + 1 :]
    for candidate in window:
        if not should_hide_event(candidate) and is_editable(candidate):
            return candidate
    return None
