# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing

from .timeline import ROOM_MESSAGE, EventStatus, MessageRef

EDITABLE_MSGTYPES = frozenset({"m.text", "m.emote"})

EditabilityPredicate = collections.abc.Callable[[MessageRef, typing.Optional[str]], bool]


def can_edit_content(message: MessageRef) -> bool:
    "Whether the message is of a kind whose content can be replaced, ignoring who sent it."
    if message.status is EventStatus.CANCELLED:
        return False
    if message.event_type != ROOM_MESSAGE or message.redacted:
        return False
    return message.msgtype in EDITABLE_MSGTYPES and isinstance(message.body, str) and len(message.body) > 0


def can_edit_own_event(message: MessageRef, user_id: typing.Optional[str]) -> bool:
    if user_id is None or message.sender != user_id:
        return False
    return can_edit_content(message)


def should_hide_event(message: MessageRef) -> bool:
    # edits are folded into the event they replace, so they never show up on their own
    return message.redacted or message.replaces is not None
