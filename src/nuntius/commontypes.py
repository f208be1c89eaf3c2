# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


@enum.unique
class TimelineRenderingType(enum.StrEnum):
    Room = "Room"
    Thread = "Thread"
    ThreadsList = "ThreadsList"
    File = "File"
    Notification = "Notification"
    Search = "Search"


@enum.unique
class NavigationDirection(enum.Enum):
    BACKWARD = enum.auto()
    FORWARD = enum.auto()

    @property
    def is_forward(self):
        return self is NavigationDirection.FORWARD


class NuntiusError(Exception):
    pass


class KeyComboError(NuntiusError, ValueError):
    pass


class UnknownEventError(NuntiusError, LookupError):
    pass
