# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import pathlib
import typing

import cattrs

from .composer.keybindings import KeyBindingAction, KeyCombo
from .composer.navigation import MAX_JUMP_DISTANCE

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(KeyCombo, KeyCombo.format)
settings_converter.register_structure_hook(KeyCombo, lambda v, _: KeyCombo.parse(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    # MessageComposerInput.ctrlEnterToSend: plain Enter inserts a newline and Ctrl/Cmd+Enter sends
    ctrl_enter_to_send: bool = False
    is_mac: bool = False
    max_jump_distance: int = MAX_JUMP_DISTANCE
    keybindings: dict[KeyBindingAction, list[KeyCombo]] = dataclasses.field(default_factory=dict)

    def set_ctrl_enter_to_send(self, value: bool):
        self.ctrl_enter_to_send = value

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as inp:
            raw = json.load(inp)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls, **overrides):
        raw = {
            "_path": "test.settings.json",
            "ctrl_enter_to_send": False,
            "is_mac": False,
            "max_jump_distance": MAX_JUMP_DISTANCE,
            "keybindings": {},
        }
        raw.update(overrides)
        return settings_converter.structure(raw, cls)


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
