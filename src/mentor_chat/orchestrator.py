"""Conversation orchestration: submit, dispatch, normalize, append."""

from __future__ import annotations

from collections.abc import Callable
import inspect
import logging
from typing import Any

from .commands import ClassifiedInput, classify_input, is_submittable
from .dispatcher import RequestDispatcher
from .exceptions import InputRejected
from .message_store import MessageLog
from .models import GREETING_MESSAGE_ID, Author, Message, MessageIdFactory
from .normalizer import ResponseNormalizer
from .state import ConversationState, StateManager

LOGGER = logging.getLogger(__name__)

DEFAULT_GREETING = (
    "Hello! I'm your MigosiDesigns AI Mentor. How can I help you with your "
    "graphic design journey today? You can also ask me to create an image by "
    "typing `/imagine` followed by a prompt."
)
FALLBACK_TEXT = "Sorry, I encountered an error. Please try again."

MessageListener = Callable[[Message], Any]


class ConversationOrchestrator:
    """Sole writer of the conversation log and the request state flag.

    The presentation surface reads ``messages`` and ``is_awaiting_response``,
    edits ``pending_input`` and calls ``submit``. Listeners registered with
    ``add_listener`` are invoked (sync or async) for every appended message.
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        normalizer: ResponseNormalizer | None = None,
        greeting: str = DEFAULT_GREETING,
    ) -> None:
        self._dispatcher = dispatcher
        self._normalizer = normalizer or ResponseNormalizer()
        self._ids: MessageIdFactory = self._normalizer.id_factory
        self._state = StateManager()
        self._log = MessageLog(
            [
                Message(
                    author=Author.MODEL,
                    text=greeting.strip() or DEFAULT_GREETING,
                    id=GREETING_MESSAGE_ID,
                )
            ]
        )
        self._listeners: list[MessageListener] = []
        self.pending_input = ""

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._log.messages

    @property
    def message_count(self) -> int:
        return self._log.message_count

    @property
    def state(self) -> ConversationState:
        return self._state.state

    @property
    def is_awaiting_response(self) -> bool:
        return self._state.is_awaiting_response

    def add_listener(self, listener: MessageListener) -> None:
        """Register a callback invoked with each newly appended message."""
        self._listeners.append(listener)

    async def submit(self, text: str | None = None) -> bool:
        """Submit ``text`` (or the pending input) and await the reply.

        Returns False without touching the log when the input is empty or a
        request is already in flight; True once the reply has been appended.
        """
        raw_text = self.pending_input if text is None else text
        try:
            await self._run_turn(raw_text)
        except InputRejected as exc:
            LOGGER.info(
                "conversation.submit.rejected",
                extra={"event": "conversation.submit.rejected", "reason": str(exc)},
            )
            return False
        return True

    async def _run_turn(self, raw_text: str) -> None:
        if not is_submittable(raw_text):
            raise InputRejected("Nothing to submit.")
        async with self._state.in_flight():
            self.pending_input = ""
            await self._append(
                Message(author=Author.USER, text=raw_text, id=self._ids.next_id())
            )
            reply = await self._respond(classify_input(raw_text))
            await self._append(reply)

    async def _respond(self, request: ClassifiedInput) -> Message:
        try:
            response = await self._dispatcher.dispatch(request)
            return self._normalizer.normalize(request, response)
        except Exception as exc:  # noqa: BLE001 - every failure collapses to the fallback reply.
            LOGGER.warning(
                "conversation.reply.failed",
                extra={
                    "event": "conversation.reply.failed",
                    "mode": request.mode.value,
                    "error_type": exc.__class__.__name__,
                },
                exc_info=True,
            )
            return Message(
                author=Author.MODEL, text=FALLBACK_TEXT, id=self._ids.next_id("-error")
            )

    async def _append(self, message: Message) -> None:
        self._log.append(message)
        LOGGER.info(
            "conversation.message.appended",
            extra={
                "event": "conversation.message.appended",
                "author": message.author.value,
                "message_id": message.id,
            },
        )
        for listener in list(self._listeners):
            try:
                result = listener(message)
                if inspect.isawaitable(result):
                    await result
            except Exception:  # noqa: BLE001 - a broken view must not break the log.
                LOGGER.warning(
                    "conversation.listener.failed",
                    extra={"event": "conversation.listener.failed"},
                    exc_info=True,
                )
