# SPDX-FileCopyrightText: 2024 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

from ..commontypes import NavigationDirection
from ..dispatcher import EditEventPayload
from ..eventutils import can_edit_own_event
from .events import EventCategory, InputEvent, InputType, KeyboardEvent, WysiwygEvent, classify
from .keybindings import KeyBindingAction
from .navigation import find_editable_event, message_sequence

if typing.TYPE_CHECKING:
    from ..dispatcher import DispatchBus
    from ..eventutils import EditabilityPredicate
    from ..settings import Settings
    from ..timeline import Client, RoomContext
    from .keybindings import KeyBindingResolver
    from .selection import EditorHandle
    from .session import ComposerContext, ComposerSession

logger = logging.getLogger(__name__)

Send = collections.abc.Callable[[], None]


class InputEventProcessor:
    """Decides what happens to each event the rich-text composer reports.

    Calling the processor returns None when the event has been fully handled and the editor
    should do nothing further, or the event itself when the editor should handle it natively.
    Nothing here raises because room state is missing; at worst the keystroke falls back to
    whatever the editor would have done with it.
    """

    def __init__(
        self,
        *,
        on_send: Send,
        settings: Settings,
        keybindings: KeyBindingResolver,
        composer_context: ComposerContext,
        room_context: RoomContext,
        client: Client,
        dispatcher: DispatchBus,
        initial_content: typing.Optional[str] = None,
        is_editable: EditabilityPredicate = can_edit_own_event,
    ):
        self.on_send = on_send
        self.settings = settings
        self.keybindings = keybindings
        self.composer_context = composer_context
        self.room_context = room_context
        self.client = client
        self.dispatcher = dispatcher
        self.initial_content = initial_content
        self.is_editable = is_editable

    def __call__(self, event: WysiwygEvent, editor: EditorHandle) -> typing.Optional[WysiwygEvent]:
        return self.process(event, editor)

    def process(self, event: WysiwygEvent, editor: EditorHandle) -> typing.Optional[WysiwygEvent]:
        category = classify(event)
        if category is EventCategory.PASS_THROUGH:
            return event

        def send():
            event.stop_propagation()
            event.prevent_default()
            self.on_send()

        if category is EventCategory.KEYBOARD:
            return self.handle_keyboard_event(event, editor, send)
        return handle_input_event(event, send, self.settings.ctrl_enter_to_send)

    def handle_keyboard_event(self, event: KeyboardEvent, editor: EditorHandle, send: Send) -> typing.Optional[KeyboardEvent]:
        action = self.keybindings.get_message_composer_action(event)
        session = self.composer_context.session

        match action:
            case KeyBindingAction.SendMessage:
                logger.debug("Sending on %s", event.key)
                send()
                return None
            case KeyBindingAction.EditPrevMessage:
                # not editing, caret not at the very start, or unsaved changes
                if session is None or not editor.is_caret_at_start() or self._is_modified(session, editor):
                    return event
                if self.dispatch_edit_event(event, session, NavigationDirection.BACKWARD):
                    return None
                return event
            case KeyBindingAction.EditNextMessage:
                # not editing, caret not at the very end, or unsaved changes
                if session is None or not editor.is_caret_at_end() or self._is_modified(session, editor):
                    return event
                if self.dispatch_edit_event(event, session, NavigationDirection.FORWARD):
                    return None
                # TODO: cancel editing when there is no next message to move to
                return event

        return event

    def _is_modified(self, session: ComposerSession, editor: EditorHandle):
        if self.initial_content is not None:
            return self.initial_content != editor.content()
        return session.is_modified(editor.content())

    def dispatch_edit_event(self, event: KeyboardEvent, session: ComposerSession, direction: NavigationDirection) -> bool:
        """Ask the application to start editing the next editable message in the given direction.

        Returns whether a message was found; if so the event has been stopped and its default
        prevented.
        """
        events = message_sequence(session.event, self.room_context, self.client)
        if events is None:
            return False

        user_id = self.client.get_user_id()
        new_event = find_editable_event(
            events,
            direction,
            session.event_id,
            lambda message: self.is_editable(message, user_id),
            max_jump_distance=self.settings.max_jump_distance,
        )
        if new_event is None:
            logger.debug("No editable message %s of %s", direction.name.lower(), session.event_id)
            return False

        logger.debug("Moving edit from %s to %s", session.event_id, new_event.event_id)
        self.dispatcher.dispatch(
            EditEventPayload(event=new_event, timeline_rendering_type=self.room_context.timeline_rendering_type)
        )
        event.stop_propagation()
        event.prevent_default()
        return True


def handle_input_event(event: InputEvent, send: Send, is_ctrl_enter: bool) -> typing.Optional[InputEvent]:
    match event.input_type:
        case InputType.INSERT_PARAGRAPH:
            if is_ctrl_enter:
                # a literal newline goes in; Ctrl+Enter arrives separately as sendMessage
                return event
            send()
            return None
        case InputType.SEND_MESSAGE:
            if not is_ctrl_enter:
                return event
            send()
            return None
    return event
