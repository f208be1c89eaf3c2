from .events import ClipboardEvent, ComposerEvent, EventCategory, InputEvent, InputType, Key, KeyboardEvent, classify
from .processor import InputEventProcessor
from .selection import EditorHandle, EditorSnapshot
from .session import ComposerContext, ComposerSession
