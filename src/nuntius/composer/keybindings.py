# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

from ..commontypes import KeyComboError
from .events import Key, KeyboardEvent

if typing.TYPE_CHECKING:
    from ..settings import Settings


@enum.unique
class KeyBindingAction(enum.StrEnum):
    SendMessage = "SendMessage"
    NewLine = "NewLine"
    EditPrevMessage = "EditPrevMessage"
    EditNextMessage = "EditNextMessage"
    CancelReplyOrEdit = "CancelReplyOrEdit"


MODIFIER_NAMES = {
    "ctrlorcmd": "ctrl_or_cmd",
    "ctrl": "ctrl",
    "alt": "alt",
    "shift": "shift",
    "meta": "meta",
}


class KeyCombo(msgspec.Struct, frozen=True, kw_only=True):
    key: str
    # Meta on macOS, Ctrl everywhere else
    ctrl_or_cmd: bool = False
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    @classmethod
    def parse(cls, combo: str):
        "Parse a combo such as 'shift+Enter' or 'ctrlOrCmd+ArrowUp'. The key comes last."
        head, sep, key = combo.rpartition("+")
        if key == "" and sep:
            # the key itself is "+"
            head, key = head.removesuffix("+"), "+"
        if key == "":
            raise KeyComboError(f"No key in combo {combo!r}")
        flags = {}
        for name in filter(None, head.split("+")):
            try:
                flags[MODIFIER_NAMES[name.lower()]] = True
            except KeyError:
                raise KeyComboError(f"Unknown modifier {name!r} in combo {combo!r}") from None
        return cls(key=key, **flags)

    def format(self) -> str:
        parts = [
            label
            for label, present in (
                ("ctrlOrCmd", self.ctrl_or_cmd),
                ("ctrl", self.ctrl),
                ("alt", self.alt),
                ("shift", self.shift),
                ("meta", self.meta),
            )
            if present
        ]
        parts.append(self.key)
        return "+".join(parts)

    def matches(self, event: KeyboardEvent, is_mac: bool) -> bool:
        ctrl, meta = self.ctrl, self.meta
        if self.ctrl_or_cmd:
            if is_mac:
                meta = True
            else:
                ctrl = True
        if event.key.lower() != self.key.lower():
            return False
        modifiers = event.modifiers
        return (
            modifiers.ctrl == ctrl
            and modifiers.meta == meta
            and modifiers.alt == self.alt
            and modifiers.shift == self.shift
        )


ComposerKeybindingsConfig = dict[KeyBindingAction, list[KeyCombo]]

# Order matters: the first action with a matching combo wins.
DEFAULT_COMPOSER_KEYBINDINGS: dict[KeyBindingAction, list[str]] = {
    KeyBindingAction.SendMessage: [Key.ENTER],
    KeyBindingAction.NewLine: [f"shift+{Key.ENTER}"],
    KeyBindingAction.EditPrevMessage: [f"ctrlOrCmd+{Key.ARROW_UP}"],
    KeyBindingAction.EditNextMessage: [f"ctrlOrCmd+{Key.ARROW_DOWN}"],
    KeyBindingAction.CancelReplyOrEdit: [Key.ESCAPE],
}

CTRL_ENTER_KEYBINDINGS: dict[KeyBindingAction, list[str]] = {
    KeyBindingAction.SendMessage: [f"ctrlOrCmd+{Key.ENTER}"],
    KeyBindingAction.NewLine: [Key.ENTER, f"shift+{Key.ENTER}"],
}


class KeyBindingResolver(typing.Protocol):
    def get_message_composer_action(self, event: KeyboardEvent) -> typing.Optional[KeyBindingAction]:
        ...


class KeyBindingsManager:
    def __init__(
        self,
        *,
        ctrl_enter_to_send: bool = False,
        is_mac: bool = False,
        config: typing.Optional[ComposerKeybindingsConfig] = None,
    ):
        self.ctrl_enter_to_send = ctrl_enter_to_send
        self.is_mac = is_mac
        self._action_to_combos: ComposerKeybindingsConfig = {}
        self._build_maps(config or {})

    @classmethod
    def from_settings(cls, settings: Settings):
        return cls(
            ctrl_enter_to_send=settings.ctrl_enter_to_send,
            is_mac=settings.is_mac,
            config=settings.keybindings,
        )

    def _build_maps(self, config: ComposerKeybindingsConfig):
        defaults = dict(DEFAULT_COMPOSER_KEYBINDINGS)
        if self.ctrl_enter_to_send:
            defaults.update(CTRL_ENTER_KEYBINDINGS)
        self._action_to_combos = {action: [KeyCombo.parse(c) for c in combos] for action, combos in defaults.items()}
        # user config replaces, rather than extends, the defaults for an action
        for action, combos in config.items():
            self._action_to_combos[action] = list(combos)

    def set_config(self, config: ComposerKeybindingsConfig):
        self._build_maps(config)

    def get_combos(self, action: KeyBindingAction) -> list[KeyCombo]:
        return self._action_to_combos.get(action, [])

    def get_message_composer_action(self, event: KeyboardEvent) -> typing.Optional[KeyBindingAction]:
        for action, combos in self._action_to_combos.items():
            if any(combo.matches(event, self.is_mac) for combo in combos):
                return action
        return None
