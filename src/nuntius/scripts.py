# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
import logging
import pathlib
import sys
import typing

import msgspec

from .commontypes import TimelineRenderingType
from .composer.events import WysiwygEvent
from .composer.keybindings import KeyBindingsManager
from .composer.processor import InputEventProcessor
from .composer.selection import EditorSnapshot
from .composer.session import ComposerContext
from .dispatcher import Dispatcher, EditEventPayload
from .settings import Settings
from .timeline import MemoryClient, MemoryRoom, MemoryTimeline, MessageRef

logger = logging.getLogger(__name__)


class ReplayFixture(msgspec.Struct, kw_only=True):
    user_id: str
    room_id: str
    timeline: list[MessageRef] = []
    pending: list[MessageRef] = []
    editing: typing.Optional[str] = None
    initial_content: typing.Optional[str] = None
    rendering: TimelineRenderingType = TimelineRenderingType.Room


class ReplayStep(msgspec.Struct, kw_only=True):
    event: WysiwygEvent
    editor: EditorSnapshot = msgspec.field(default_factory=EditorSnapshot)


class Replay:
    """Runs recorded composer events through a processor wired to an in-memory room."""

    def __init__(self, settings: Settings, fixture: ReplayFixture):
        # recorded pending events keep their ids; queue_pending would mint fresh ones
        self.room = MemoryRoom(fixture.room_id, MemoryTimeline(fixture.timeline), pending=fixture.pending)
        self.client = MemoryClient(fixture.user_id, [self.room])
        self.composer_context = ComposerContext()
        if fixture.editing is not None:
            known = [*fixture.timeline, *fixture.pending]
            edited = next((m for m in known if m.event_id == fixture.editing), None)
            if edited is None:
                logger.warning("Edited event %s is not in the fixture timeline or pending events", fixture.editing)
            else:
                self.composer_context.start_editing(edited, fixture.initial_content)
        self.dispatcher = Dispatcher()
        self.dispatcher.register(self._record_dispatch)
        self.sent = 0
        self.dispatched: list[EditEventPayload] = []
        self.processor = InputEventProcessor(
            on_send=self._record_send,
            settings=settings,
            keybindings=KeyBindingsManager.from_settings(settings),
            composer_context=self.composer_context,
            room_context=self.room.room_context(fixture.rendering),
            client=self.client,
            dispatcher=self.dispatcher,
        )

    def _record_send(self):
        self.sent += 1

    def _record_dispatch(self, payload):
        self.dispatched.append(payload)

    def step(self, step: ReplayStep) -> str:
        sent_before = self.sent
        dispatched_before = len(self.dispatched)
        result = self.processor(step.event, step.editor)
        parts = ["consumed" if result is None else "passed"]
        if self.sent > sent_before:
            parts.append("send")
        for payload in self.dispatched[dispatched_before:]:
            parts.append(f"edit {payload.event.event_id}")
        return " ".join(parts)

    def run(self, lines: typing.Iterable[bytes]) -> typing.Iterator[str]:
        decoder = msgspec.json.Decoder(ReplayStep)
        for line in lines:
            if not line.strip():
                continue
            yield self.step(decoder.decode(line))


replay_parser = argparse.ArgumentParser(prog="nuntius-replay")
replay_parser.add_argument("settings", type=pathlib.Path)
replay_parser.add_argument("fixture", type=pathlib.Path)
replay_parser.add_argument("events", type=pathlib.Path)
replay_parser.add_argument("--verbose", "-v", action="store_true")


def replay_cli(argv=sys.argv):
    parsed = replay_parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.WARNING)
    settings = Settings.load(parsed.settings)
    fixture = msgspec.json.decode(parsed.fixture.read_bytes(), type=ReplayFixture)
    replay = Replay(settings, fixture)
    with parsed.events.open("rb") as events:
        for outcome in replay.run(events):
            print(outcome)
    return 0
