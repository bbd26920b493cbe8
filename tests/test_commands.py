"""Tests for /imagine classification and the submit guard."""

from __future__ import annotations

import unittest

from mentor_chat.commands import (
    IMAGINE_PREFIX,
    ClassifiedInput,
    RequestMode,
    classify_input,
    is_submittable,
)


class ClassifyInputTests(unittest.TestCase):
    """Validate routing between grounded text and image generation."""

    def test_imagine_prefix_routes_to_image_mode(self) -> None:
        result = classify_input("/imagine a minimalist logo for a coffee shop")
        self.assertEqual(
            result,
            ClassifiedInput(
                mode=RequestMode.IMAGE, prompt="a minimalist logo for a coffee shop"
            ),
        )

    def test_image_prompt_is_remainder_after_exact_prefix(self) -> None:
        for prompt in ("x", "two words", " leading space kept", "/imagine nested"):
            with self.subTest(prompt=prompt):
                result = classify_input(IMAGINE_PREFIX + prompt)
                self.assertIs(result.mode, RequestMode.IMAGE)
                self.assertEqual(result.prompt, prompt)

    def test_surrounding_whitespace_is_trimmed_before_matching(self) -> None:
        result = classify_input("   /imagine poster grid  \n")
        self.assertIs(result.mode, RequestMode.IMAGE)
        self.assertEqual(result.prompt, "poster grid")

    def test_text_mode_uses_trimmed_input(self) -> None:
        result = classify_input("  What fonts pair well with a serif heading?  ")
        self.assertIs(result.mode, RequestMode.TEXT)
        self.assertEqual(result.prompt, "What fonts pair well with a serif heading?")

    def test_prefix_match_is_case_sensitive_and_exact(self) -> None:
        for text in (
            "/Imagine a logo",
            "/IMAGINE a logo",
            "/imagined a logo",
            "/imagine\ta logo",
            "please /imagine a logo",
            "/image a logo",
        ):
            with self.subTest(text=text):
                result = classify_input(text)
                self.assertIs(result.mode, RequestMode.TEXT)
                self.assertEqual(result.prompt, text.strip())


class SubmittableTests(unittest.TestCase):
    """Validate the caller-side rejection of empty submissions."""

    def test_empty_and_whitespace_are_rejected(self) -> None:
        for text in ("", " ", "\n\t  "):
            with self.subTest(text=text):
                self.assertFalse(is_submittable(text))

    def test_bare_imagine_command_is_rejected(self) -> None:
        self.assertFalse(is_submittable("/imagine"))
        self.assertFalse(is_submittable("  /imagine   "))

    def test_real_input_is_accepted(self) -> None:
        self.assertTrue(is_submittable("hello"))
        self.assertTrue(is_submittable("/imagine a logo"))
        self.assertTrue(is_submittable("/imagines"))


if __name__ == "__main__":
    unittest.main()
