# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pytest

from nuntius.commontypes import NavigationDirection
from nuntius.composer.navigation import find_editable_event, message_sequence
from nuntius.timeline import EventStatus, MemoryClient, MemoryRoom, MemoryTimeline, MessageRef, RoomContext

ROOM = "!room:example.org"


def msg(event_id, **kwargs):
    return MessageRef(event_id=event_id, room_id=ROOM, sender="@me:example.org", body="hi", **kwargs)


M1, M2, M3 = msg("$m1"), msg("$m2"), msg("$m3")
M4 = msg("~m4", status=EventStatus.SENDING)
IN_THREAD = msg("$m3", thread_id="$root")


def everything(message):
    return True


def make_world(timeline, pending):
    room = MemoryRoom(ROOM, MemoryTimeline(timeline), pending=pending)
    return room.room_context(), MemoryClient("@me:example.org", [room])


def test_sequence_includes_pending_for_room_anchor():
    room_context, client = make_world([M1, M2, M3], [M4])
    assert message_sequence(M3, room_context, client) == [M1, M2, M3, M4]


def test_sequence_excludes_pending_for_thread_anchor():
    room_context, client = make_world([M1, M2, IN_THREAD], [M4])
    assert message_sequence(IN_THREAD, room_context, client) == [M1, M2, IN_THREAD]


def test_sequence_without_live_timeline():
    _, client = make_world([M1, M2, M3], [M4])
    assert message_sequence(M3, RoomContext(room_id=ROOM), client) is None


def test_sequence_without_anchor_room():
    room_context, client = make_world([M1, M2, M3], [])
    roomless = MessageRef(event_id="$m3", sender="@me:example.org", body="hi")
    assert message_sequence(roomless, room_context, client) is None


def test_sequence_with_unknown_room():
    room_context, _ = make_world([M1, M2, M3], [])
    assert message_sequence(M3, room_context, MemoryClient("@me:example.org")) is None


def test_sequence_is_rebuilt_each_time():
    room = MemoryRoom(ROOM, MemoryTimeline([M1, M2]))
    client = MemoryClient("@me:example.org", [room])
    first = message_sequence(M2, room.room_context(), client)
    room.live_timeline.append(M3)
    second = message_sequence(M2, room.room_context(), client)
    assert first == [M1, M2]
    assert second == [M1, M2, M3]


@pytest.mark.parametrize(
    "direction,anchor,expected",
    (
        (NavigationDirection.BACKWARD, "$m3", M2),
        (NavigationDirection.BACKWARD, "$m2", M1),
        (NavigationDirection.BACKWARD, "$m1", None),
        (NavigationDirection.FORWARD, "$m1", M2),
        (NavigationDirection.FORWARD, "$m2", M3),
        (NavigationDirection.FORWARD, "$m3", None),
        (NavigationDirection.FORWARD, "$missing", None),
        (NavigationDirection.BACKWARD, None, M3),
        (NavigationDirection.FORWARD, None, M1),
    ),
)
def test_find_editable_event(direction, anchor, expected):
    assert find_editable_event([M1, M2, M3], direction, anchor, everything) == expected


def test_find_in_empty_sequence():
    assert find_editable_event([], NavigationDirection.BACKWARD, None, everything) is None
    assert find_editable_event([], NavigationDirection.FORWARD, "$m1", everything) is None


def test_find_skips_non_editable_and_hidden():
    redacted = msg("$r", redacted=True)
    edit = msg("$e", replaces="$m1")
    events = [M1, redacted, edit, M2, M3]
    assert find_editable_event(events, NavigationDirection.FORWARD, "$m1", everything) == M2
    assert find_editable_event(events, NavigationDirection.BACKWARD, "$m3", lambda m: m.event_id != "$m2") == M1


def test_find_is_deterministic():
    events = [M1, M2, M3, M4]
    first = find_editable_event(events, NavigationDirection.BACKWARD, "$m3", everything)
    second = find_editable_event(events, NavigationDirection.BACKWARD, "$m3", everything)
    assert first == second == M2


def test_jump_distance_bounds_only_the_unanchored_scan():
    filler = [msg(f"$f{i}") for i in range(5)]
    events = [M1, *filler, M3]
    only_m1 = lambda m: m.event_id == "$m1"  # noqa: E731
    assert find_editable_event(events, NavigationDirection.BACKWARD, None, only_m1, max_jump_distance=5) is None
    assert find_editable_event(events, NavigationDirection.BACKWARD, None, only_m1, max_jump_distance=6) == M1


def test_anchored_scan_runs_past_jump_distance():
    filler = [msg(f"$f{i}") for i in range(150)]
    events = [M1, *filler, M3]
    only_m1 = lambda m: m.event_id == "$m1"  # noqa: E731
    assert find_editable_event(events, NavigationDirection.BACKWARD, "$m3", only_m1) == M1
    assert find_editable_event(events, NavigationDirection.BACKWARD, "$m3", only_m1, max_jump_distance=5) == M1
