"""GitHub Actions のワークフローコマンドを使ったログ出力"""

import logging
import os
import sys

# ログレベルとワークフローコマンドの対応
_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def running_in_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def escape_data(message: str) -> str:
    """ワークフローコマンドのメッセージ部分をエスケープする"""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """ログレコードを ::warning:: などのワークフローコマンドとして整形する"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def mask(value: str) -> None:
    """値をワークフローログ上でマスクする"""
    if value and running_in_actions():
        sys.stdout.write(f"::add-mask::{escape_data(value)}\n")
        sys.stdout.flush()


def setup_logging(level: str = "INFO") -> None:
    """ルートロガーを設定する

    GitHub Actions 上ではワークフローコマンド形式、それ以外では通常の形式で出力する。
    """
    handler = logging.StreamHandler(sys.stdout)
    if running_in_actions():
        handler.setFormatter(WorkflowCommandFormatter("%(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)
