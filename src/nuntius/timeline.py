# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import dataclasses
import enum
import logging
import typing

import msgspec
import timeflake

from .commontypes import TimelineRenderingType, UnknownEventError

if typing.TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

ROOM_MESSAGE = "m.room.message"


@enum.unique
class EventStatus(enum.StrEnum):
    SENDING = "sending"
    QUEUED = "queued"
    NOT_SENT = "not_sent"
    CANCELLED = "cancelled"
    SENT = "sent"


class MessageRef(msgspec.Struct, frozen=True, kw_only=True):
    event_id: str
    room_id: typing.Optional[str] = None
    sender: typing.Optional[str] = None
    event_type: str = ROOM_MESSAGE
    msgtype: typing.Optional[str] = "m.text"
    body: typing.Optional[str] = None
    thread_id: typing.Optional[str] = None
    replaces: typing.Optional[str] = None
    redacted: bool = False
    # None for events the server has confirmed
    status: typing.Optional[EventStatus] = None

    @property
    def in_thread(self):
        return self.thread_id is not None

    @property
    def is_pending(self):
        return self.status is not None and self.status is not EventStatus.SENT


class Timeline(typing.Protocol):
    def get_events(self) -> Sequence[MessageRef]:
        ...


class Room(typing.Protocol):
    room_id: str

    def get_pending_events(self) -> Sequence[MessageRef]:
        ...


class Client(typing.Protocol):
    def get_room(self, room_id: str) -> typing.Optional[Room]:
        ...

    def get_user_id(self) -> typing.Optional[str]:
        ...


@dataclasses.dataclass(kw_only=True)
class RoomContext:
    room_id: typing.Optional[str] = None
    live_timeline: typing.Optional[Timeline] = None
    timeline_rendering_type: TimelineRenderingType = TimelineRenderingType.Room


class MemoryTimeline:
    def __init__(self, events: typing.Iterable[MessageRef] = ()):
        self._events: list[MessageRef] = list(events)

    def get_events(self):
        return tuple(self._events)

    def append(self, event: MessageRef):
        self._events.append(event)

    def __len__(self):
        return len(self._events)


class MemoryRoom:
    def __init__(self, room_id: str, timeline: typing.Optional[MemoryTimeline] = None, pending: typing.Iterable[MessageRef] = ()):
        self.room_id = room_id
        self.live_timeline = timeline if timeline is not None else MemoryTimeline()
        self._pending: list[MessageRef] = list(pending)

    def get_pending_events(self):
        return tuple(self._pending)

    def queue_pending(self, message: MessageRef) -> MessageRef:
        local = msgspec.structs.replace(
            message,
            event_id=f"~{self.room_id}:{timeflake.random()}",
            room_id=self.room_id,
            status=EventStatus.SENDING,
        )
        self._pending.append(local)
        return local

    def acknowledge(self, local_id: str, remote_id: str) -> MessageRef:
        for index, pending in enumerate(self._pending):
            if pending.event_id == local_id:
                break
        else:
            raise UnknownEventError(local_id)
        del self._pending[index]
        confirmed = msgspec.structs.replace(pending, event_id=remote_id, status=None)
        self.live_timeline.append(confirmed)
        logger.debug("Pending event %s acknowledged as %s", local_id, remote_id)
        return confirmed

    def room_context(self, rendering: TimelineRenderingType = TimelineRenderingType.Room):
        return RoomContext(room_id=self.room_id, live_timeline=self.live_timeline, timeline_rendering_type=rendering)


class MemoryClient:
    def __init__(self, user_id: typing.Optional[str], rooms: typing.Iterable[MemoryRoom] = ()):
        self.user_id = user_id
        self.rooms = {room.room_id: room for room in rooms}

    def get_room(self, room_id: str) -> typing.Optional[MemoryRoom]:
        return self.rooms.get(room_id)

    def get_user_id(self):
        return self.user_id

    def add_room(self, room: MemoryRoom):
        self.rooms[room.room_id] = room
        return room
