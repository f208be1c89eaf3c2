# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import typing

import msgspec


class EditorHandle(typing.Protocol):
    def content(self) -> str:
        ...

    def is_caret_at_start(self) -> bool:
        ...

    def is_caret_at_end(self) -> bool:
        ...


class EditorSnapshot(msgspec.Struct, frozen=True):
    """A read-only view of the editor at the moment an event arrived.

    The anchor is the caret offset into the serialized content. A selection that isn't
    collapsed is described by its anchor alone, same as the editor widget does it.
    """

    text: str = ""
    anchor: int = 0

    def content(self) -> str:
        return self.text

    def is_caret_at_start(self) -> bool:
        return self.anchor == 0

    def is_caret_at_end(self) -> bool:
        return self.anchor == len(self.text)

    @classmethod
    def caret_at_end(cls, text: str):
        return cls(text=text, anchor=len(text))
