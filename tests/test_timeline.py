# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pytest

from nuntius.commontypes import TimelineRenderingType, UnknownEventError
from nuntius.timeline import EventStatus, MemoryClient, MemoryRoom, MemoryTimeline, MessageRef

ROOM = "!room:example.org"


def test_queue_pending_assigns_local_id():
    room = MemoryRoom(ROOM)
    local = room.queue_pending(MessageRef(event_id="", sender="@me:example.org", body="hi"))
    assert local.event_id.startswith(f"~{ROOM}:")
    assert local.room_id == ROOM
    assert local.status is EventStatus.SENDING
    assert local.is_pending
    assert room.get_pending_events() == (local,)
    assert len(room.live_timeline) == 0


def test_queue_pending_ids_are_unique():
    room = MemoryRoom(ROOM)
    first = room.queue_pending(MessageRef(event_id="", body="one"))
    second = room.queue_pending(MessageRef(event_id="", body="two"))
    assert first.event_id != second.event_id


def test_acknowledge_moves_to_timeline():
    room = MemoryRoom(ROOM, MemoryTimeline([MessageRef(event_id="$old", room_id=ROOM)]))
    local = room.queue_pending(MessageRef(event_id="", body="hi"))
    confirmed = room.acknowledge(local.event_id, "$new")
    assert confirmed.event_id == "$new"
    assert confirmed.status is None
    assert not confirmed.is_pending
    assert room.get_pending_events() == ()
    assert [e.event_id for e in room.live_timeline.get_events()] == ["$old", "$new"]


def test_acknowledge_unknown_event():
    room = MemoryRoom(ROOM)
    with pytest.raises(UnknownEventError):
        room.acknowledge("~nope", "$new")


def test_client_rooms():
    room = MemoryRoom(ROOM)
    client = MemoryClient("@me:example.org", [room])
    assert client.get_room(ROOM) is room
    assert client.get_room("!other:example.org") is None
    other = client.add_room(MemoryRoom("!other:example.org"))
    assert client.get_room("!other:example.org") is other
    assert client.get_user_id() == "@me:example.org"


def test_room_context():
    room = MemoryRoom(ROOM)
    context = room.room_context(TimelineRenderingType.Search)
    assert context.room_id == ROOM
    assert context.live_timeline is room.live_timeline
    assert context.timeline_rendering_type is TimelineRenderingType.Search


def test_thread_membership():
    assert MessageRef(event_id="$e", thread_id="$root").in_thread
    assert not MessageRef(event_id="$e").in_thread
