"""Tests for the conversation message data contract."""

from __future__ import annotations

import unittest

from mentor_chat.models import Author, Message, MessageIdFactory, Reference


class MessageTests(unittest.TestCase):
    """Validate message shape invariants."""

    def test_model_message_cannot_carry_references_and_image(self) -> None:
        with self.assertRaises(ValueError):
            Message(
                author=Author.MODEL,
                text="both",
                id="1",
                references=(Reference(uri="https://a.example", title="A"),),
                image_url="data:image/png;base64,AAAA",
            )

    def test_user_message_is_plain_text(self) -> None:
        with self.assertRaises(ValueError):
            Message(author=Author.USER, text="hi", id="1", references=())

    def test_has_references_requires_non_empty_sequence(self) -> None:
        absent = Message(author=Author.MODEL, text="a", id="1")
        empty = Message(author=Author.MODEL, text="a", id="2", references=())
        present = Message(
            author=Author.MODEL,
            text="a",
            id="3",
            references=(Reference(uri="https://a.example", title="A"),),
        )
        self.assertIsNone(absent.references)
        self.assertEqual(empty.references, ())
        self.assertFalse(absent.has_references)
        self.assertFalse(empty.has_references)
        self.assertTrue(present.has_references)

    def test_message_is_immutable(self) -> None:
        message = Message(author=Author.USER, text="hi", id="1")
        with self.assertRaises(AttributeError):
            message.text = "changed"  # type: ignore[misc]

    def test_author_values(self) -> None:
        self.assertEqual(Author.USER.value, "user")
        self.assertEqual(Author.MODEL.value, "model")


class MessageIdFactoryTests(unittest.TestCase):
    """Validate id uniqueness within a conversation."""

    def test_ids_are_unique_even_within_one_millisecond(self) -> None:
        factory = MessageIdFactory()
        ids = [factory.next_id() for _ in range(1000)]
        self.assertEqual(len(set(ids)), len(ids))

    def test_suffix_is_appended(self) -> None:
        factory = MessageIdFactory()
        self.assertTrue(factory.next_id("-image").endswith("-image"))


if __name__ == "__main__":
    unittest.main()
