# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import enum
import itertools
import logging
import typing

import msgspec

from .commontypes import TimelineRenderingType
from .timeline import MessageRef

logger = logging.getLogger(__name__)


@enum.unique
class Action(enum.StrEnum):
    EDIT_EVENT = "edit_event"


class EditEventPayload(msgspec.Struct, frozen=True, kw_only=True):
    action: Action = Action.EDIT_EVENT
    event: typing.Optional[MessageRef]
    timeline_rendering_type: TimelineRenderingType


DispatchCallback = collections.abc.Callable[[EditEventPayload], None]


class DispatchBus(typing.Protocol):
    def dispatch(self, payload: EditEventPayload) -> None:
        ...


class Dispatcher:
    """Fans each payload out to every registered callback, synchronously and in registration order."""

    def __init__(self):
        self._callbacks: dict[int, DispatchCallback] = {}
        self._tokens = itertools.count(1)

    def register(self, callback: DispatchCallback) -> int:
        token = next(self._tokens)
        self._callbacks[token] = callback
        return token

    def unregister(self, token: int):
        self._callbacks.pop(token, None)

    def dispatch(self, payload: EditEventPayload):
        logger.debug("Dispatching %s", payload.action)
        for token, callback in list(self._callbacks.items()):
            try:
                callback(payload)
            except Exception:
                logger.exception("Dispatch callback %d failed on %s", token, payload.action)
