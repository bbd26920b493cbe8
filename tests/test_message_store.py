"""Tests for the append-only conversation log."""

from __future__ import annotations

import unittest

from mentor_chat.message_store import MessageLog
from mentor_chat.models import Author, Message


def _message(message_id: str, text: str = "hi") -> Message:
    return Message(author=Author.USER, text=text, id=message_id)


class MessageLogTests(unittest.TestCase):
    """Validate ordering and immutability of the log."""

    def test_append_preserves_order(self) -> None:
        log = MessageLog()
        log.append(_message("1", "one"))
        log.append(_message("2", "two"))
        self.assertEqual([m.text for m in log.messages], ["one", "two"])
        self.assertEqual(log.message_count, 2)

    def test_duplicate_id_is_rejected(self) -> None:
        log = MessageLog([_message("1")])
        with self.assertRaises(ValueError):
            log.append(_message("1"))
        self.assertEqual(log.message_count, 1)

    def test_snapshot_is_a_tuple(self) -> None:
        log = MessageLog([_message("1")])
        snapshot = log.messages
        self.assertIsInstance(snapshot, tuple)
        log.append(_message("2"))
        self.assertEqual(len(snapshot), 1)


if __name__ == "__main__":
    unittest.main()
