"""Request lifecycle state machine with a lock-protected in-flight slot."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum
import logging

from .exceptions import InputRejected

LOGGER = logging.getLogger(__name__)


class ConversationState(str, Enum):
    """IDLE until a submission is accepted, then AWAITING_RESPONSE until it settles."""

    IDLE = "IDLE"
    AWAITING_RESPONSE = "AWAITING_RESPONSE"


class StateManager:
    """Own the single global request flag.

    Entering AWAITING_RESPONSE is a compare-and-set under an asyncio lock, so two
    submissions racing on the event loop can never both win.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._state = ConversationState.IDLE

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def is_awaiting_response(self) -> bool:
        return self._state is ConversationState.AWAITING_RESPONSE

    async def try_begin(self) -> bool:
        """Move IDLE -> AWAITING_RESPONSE; return False when already awaiting."""
        async with self._lock:
            if self._state is not ConversationState.IDLE:
                return False
            self._state = ConversationState.AWAITING_RESPONSE
        self._log_transition(ConversationState.IDLE, ConversationState.AWAITING_RESPONSE)
        return True

    async def finish(self) -> None:
        """Return to IDLE unconditionally."""
        async with self._lock:
            previous = self._state
            self._state = ConversationState.IDLE
        self._log_transition(previous, ConversationState.IDLE)

    @asynccontextmanager
    async def in_flight(self) -> AsyncIterator[None]:
        """Hold AWAITING_RESPONSE for the body of the block.

        Raises InputRejected when another request already holds the slot. The
        reset to IDLE runs however the block exits.
        """
        if not await self.try_begin():
            raise InputRejected("A request is already in flight.")
        try:
            yield
        finally:
            await self.finish()

    @staticmethod
    def _log_transition(
        from_state: ConversationState, to_state: ConversationState
    ) -> None:
        LOGGER.info(
            "conversation.state.transition",
            extra={
                "event": "conversation.state.transition",
                "from_state": from_state.value,
                "to_state": to_state.value,
            },
        )
