# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum
import typing

import msgspec


@enum.unique
class Key(enum.StrEnum):
    ENTER = "Enter"
    ESCAPE = "Escape"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    TAB = "Tab"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"


# These are the inputType values the editor reports on its beforeinput events. Only the
# first two mean anything to us; the rest are here so callers can name what they pass through.
@enum.unique
class InputType(enum.StrEnum):
    INSERT_PARAGRAPH = "insertParagraph"
    SEND_MESSAGE = "sendMessage"
    INSERT_TEXT = "insertText"
    INSERT_LINE_BREAK = "insertLineBreak"
    INSERT_FROM_PASTE = "insertFromPaste"
    DELETE_CONTENT_BACKWARD = "deleteContentBackward"
    DELETE_CONTENT_FORWARD = "deleteContentForward"
    FORMAT_BOLD = "formatBold"
    FORMAT_ITALIC = "formatItalic"
    HISTORY_UNDO = "historyUndo"
    HISTORY_REDO = "historyRedo"


class ModifierAnnotation(msgspec.Struct, frozen=True):
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


class ComposerEvent(msgspec.Struct, tag_field="type", kw_only=True):
    propagation_stopped: bool = False
    default_prevented: bool = False

    def stop_propagation(self):
        self.propagation_stopped = True

    def prevent_default(self):
        self.default_prevented = True

    @property
    def consumed(self):
        return self.propagation_stopped and self.default_prevented


class ClipboardEvent(ComposerEvent, tag="paste", kw_only=True):
    data: typing.Optional[str] = None


class KeyboardEvent(ComposerEvent, tag="keydown", kw_only=True):
    key: str
    modifiers: ModifierAnnotation = msgspec.field(default_factory=ModifierAnnotation)

    @classmethod
    def pressed(cls, key: str, **modifiers: bool):
        return cls(key=key, modifiers=ModifierAnnotation(**modifiers))


class InputEvent(ComposerEvent, tag="input", kw_only=True):
    input_type: str
    data: typing.Optional[str] = None


WysiwygEvent = ClipboardEvent | KeyboardEvent | InputEvent


class EventCategory(enum.Enum):
    PASS_THROUGH = enum.auto()
    KEYBOARD = enum.auto()
    GENERIC_INPUT = enum.auto()


def classify(event: WysiwygEvent) -> EventCategory:
    match event:
        case ClipboardEvent():
            # paste content negotiation belongs to the editor
            return EventCategory.PASS_THROUGH
        case KeyboardEvent():
            return EventCategory.KEYBOARD
        case _:
            return EventCategory.GENERIC_INPUT


event_decoder = msgspec.json.Decoder(WysiwygEvent)


def decode_event(raw: bytes | str) -> WysiwygEvent:
    return event_decoder.decode(raw)
