"""Tests for core.utils."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

from ksm_notation.core.utils import safe_call


class TestSafeCall:
    """Tests for safe_call."""

    def test_calls_function(self) -> None:
        fn = MagicMock()
        safe_call(fn, logging.getLogger("test"), "msg")
        fn.assert_called_once()

    def test_swallows_exception(self) -> None:
        fn = MagicMock(side_effect=RuntimeError("sink unavailable"))
        safe_call(fn, logging.getLogger("test"), "msg")

    def test_logs_warning_with_args(self) -> None:
        mock_logger = MagicMock()
        fn = MagicMock(side_effect=ValueError("oops"))

        safe_call(fn, mock_logger, "Failed to record counter %s", "ksm.field.resolved")

        mock_logger.warning.assert_called_once_with(
            "Failed to record counter %s", "ksm.field.resolved", exc_info=True
        )

    def test_no_warning_on_success(self) -> None:
        mock_logger = MagicMock()
        safe_call(MagicMock(), mock_logger, "msg")
        mock_logger.warning.assert_not_called()
