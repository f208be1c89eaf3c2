# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import logging
import typing

import msgspec

from ..timeline import MessageRef

logger = logging.getLogger(__name__)


class ComposerSession(msgspec.Struct, frozen=True):
    event: MessageRef
    # what the editor held when editing began; any difference means unsaved changes
    initial_content: typing.Optional[str] = None

    @property
    def event_id(self):
        return self.event.event_id

    def is_modified(self, current_content: str):
        return self.initial_content != current_content


# The composer UI owns this and swaps the session in and out as editing starts and stops.
# We only ever read it.
@dataclasses.dataclass
class ComposerContext:
    session: typing.Optional[ComposerSession] = None

    def start_editing(self, event: MessageRef, initial_content: typing.Optional[str]):
        logger.debug("Editing %s", event.event_id)
        self.session = ComposerSession(event=event, initial_content=initial_content)
        return self.session

    def stop_editing(self):
        self.session = None
