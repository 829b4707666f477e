"""ワークフローコマンド形式のログ出力のテスト"""

import logging
import os
from unittest.mock import patch

import pytest

from slackhub.actions import WorkflowCommandFormatter, escape_data, mask


def make_record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("slackhub", level, __file__, 1, message, None, None)


class TestWorkflowCommandFormatter:
    """WorkflowCommandFormatterのテスト"""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (logging.DEBUG, "::debug::slackhub: hello"),
            (logging.WARNING, "::warning::slackhub: hello"),
            (logging.ERROR, "::error::slackhub: hello"),
        ],
    )
    def test_levels_become_commands(self, level: int, expected: str) -> None:
        formatter = WorkflowCommandFormatter("%(name)s: %(message)s")
        assert formatter.format(make_record(level, "hello")) == expected

    def test_info_is_plain(self) -> None:
        """INFOはコマンドにしないこと"""
        formatter = WorkflowCommandFormatter("%(message)s")
        assert formatter.format(make_record(logging.INFO, "hello")) == "hello"

    def test_multiline_message_is_escaped(self) -> None:
        formatter = WorkflowCommandFormatter("%(message)s")
        assert formatter.format(make_record(logging.ERROR, "a\nb 100%")) == "::error::a%0Ab 100%25"


def test_escape_data() -> None:
    assert escape_data("50%\r\n") == "50%25%0D%0A"


def test_mask_in_actions(capsys: pytest.CaptureFixture[str]) -> None:
    """GitHub Actions上ではadd-maskコマンドを出力すること"""
    with patch.dict(os.environ, {"GITHUB_ACTIONS": "true"}):
        mask("xoxb-secret")
    assert capsys.readouterr().out == "::add-mask::xoxb-secret\n"


def test_mask_outside_actions(capsys: pytest.CaptureFixture[str]) -> None:
    with patch.dict(os.environ, {}, clear=True):
        mask("xoxb-secret")
    assert capsys.readouterr().out == ""
