"""Tests for the request lifecycle state machine."""

from __future__ import annotations

import asyncio
import unittest

from mentor_chat.exceptions import InputRejected
from mentor_chat.state import ConversationState, StateManager


class StateManagerTests(unittest.IsolatedAsyncioTestCase):
    """Validate the single in-flight slot."""

    async def test_starts_idle(self) -> None:
        manager = StateManager()
        self.assertEqual(manager.state, ConversationState.IDLE)
        self.assertFalse(manager.is_awaiting_response)

    async def test_only_one_concurrent_begin_wins(self) -> None:
        manager = StateManager()
        results = await asyncio.gather(*(manager.try_begin() for _ in range(10)))
        self.assertEqual(results.count(True), 1)
        self.assertTrue(manager.is_awaiting_response)

    async def test_finish_returns_to_idle(self) -> None:
        manager = StateManager()
        self.assertTrue(await manager.try_begin())
        await manager.finish()
        self.assertEqual(manager.state, ConversationState.IDLE)
        self.assertTrue(await manager.try_begin())

    async def test_in_flight_rejects_second_entry(self) -> None:
        manager = StateManager()
        async with manager.in_flight():
            self.assertEqual(manager.state, ConversationState.AWAITING_RESPONSE)
            with self.assertRaises(InputRejected):
                async with manager.in_flight():
                    self.fail("second request must not enter")
            self.assertTrue(manager.is_awaiting_response)
        self.assertEqual(manager.state, ConversationState.IDLE)

    async def test_in_flight_resets_after_exception(self) -> None:
        manager = StateManager()
        with self.assertRaises(ValueError):
            async with manager.in_flight():
                raise ValueError("boom")
        self.assertEqual(manager.state, ConversationState.IDLE)

    async def test_transitions_are_logged(self) -> None:
        manager = StateManager()
        with self.assertLogs("mentor_chat.state", level="INFO") as logs:
            async with manager.in_flight():
                pass
        transitions = [line for line in logs.output if "conversation.state.transition" in line]
        self.assertEqual(len(transitions), 2)


if __name__ == "__main__":
    unittest.main()
