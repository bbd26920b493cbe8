"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import mentor_chat


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(mentor_chat.load_config))
        self.assertTrue(callable(mentor_chat.ensure_config_dir))
        self.assertTrue(callable(mentor_chat.classify_input))
        self.assertIsNotNone(mentor_chat.Message)
        self.assertIsNotNone(mentor_chat.Reference)
        self.assertIsNotNone(mentor_chat.ConversationOrchestrator)
        self.assertIsNotNone(mentor_chat.RequestDispatcher)
        self.assertIsNotNone(mentor_chat.ResponseNormalizer)
        self.assertIsNotNone(mentor_chat.GeminiProvider)
        self.assertIsNotNone(mentor_chat.ConversationState)
        self.assertIsNotNone(mentor_chat.MentorChatError)
        self.assertIsNotNone(mentor_chat.ProviderError)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(mentor_chat, "THIS_DOES_NOT_EXIST")

    def test_all_lists_every_export(self) -> None:
        self.assertIn("MentorChatApp", mentor_chat.__all__)
        self.assertEqual(mentor_chat.__all__, sorted(mentor_chat.__all__))


if __name__ == "__main__":
    unittest.main()
