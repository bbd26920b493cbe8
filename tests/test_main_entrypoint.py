"""Tests for CLI entrypoint wiring."""

from __future__ import annotations

import io
from contextlib import redirect_stdout
import unittest
from unittest.mock import patch

try:
    from mentor_chat.__main__ import main
except ModuleNotFoundError:
    main = None  # type: ignore[assignment]


@unittest.skipIf(main is None, "textual is not installed")
class MainEntrypointTests(unittest.TestCase):
    """Validate top-level main() behavior."""

    def test_main_ensures_config_and_runs_app(self) -> None:
        with patch("mentor_chat.__main__.ensure_config_dir") as ensure_mock, patch(
            "mentor_chat.__main__.MentorChatApp"
        ) as app_cls_mock:
            app_instance = app_cls_mock.return_value
            main([])
            ensure_mock.assert_called_once()
            app_cls_mock.assert_called_once()
            app_instance.run.assert_called_once()

    def test_version_flag_skips_app(self) -> None:
        with patch("mentor_chat.__main__.MentorChatApp") as app_cls_mock:
            buffer = io.StringIO()
            with redirect_stdout(buffer):
                main(["--version"])
            app_cls_mock.assert_not_called()
            self.assertTrue(buffer.getvalue().startswith("mentorchat "))


if __name__ == "__main__":
    unittest.main()
