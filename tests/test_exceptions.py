"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from mentor_chat.exceptions import (
    ConfigValidationError,
    InputRejected,
    MentorChatError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderError,
    ResponseNormalizationError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(ProviderError, MentorChatError))
        self.assertTrue(issubclass(ProviderConnectionError, ProviderError))
        self.assertTrue(issubclass(ProviderAuthError, ProviderError))
        self.assertTrue(issubclass(ResponseNormalizationError, ProviderError))
        self.assertTrue(issubclass(InputRejected, MentorChatError))
        self.assertFalse(issubclass(InputRejected, ProviderError))
        self.assertTrue(issubclass(ConfigValidationError, MentorChatError))


if __name__ == "__main__":
    unittest.main()
