"""Widget exports for mentor_chat UI."""

from .conversation import ConversationView
from .input_box import InputBox
from .message import MessageBubble
from .status_bar import StatusBar

__all__ = ["ConversationView", "InputBox", "MessageBubble", "StatusBar"]
