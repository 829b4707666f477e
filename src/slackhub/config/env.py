"""環境変数設定

GitHub Actions のアクション入力（INPUT_*）と実行時の環境変数（GITHUB_*）を読み込む。
"""

import os

from pydantic import BaseModel, Field, ValidationError


class EnvConfig(BaseModel):
    """環境変数設定"""

    slack_bot_token: str = Field(..., description="Slack Bot User OAuth Token (xoxb-)")
    channel: str = Field(..., description="通知先のSlackチャンネルID")
    fail_on_error: bool = Field(default=False, description="エラー時にワークフローを失敗させるか")
    dump_event: bool = Field(default=False, description="イベントペイロードをログに出力するか")
    ignore_actions: list[str] = Field(default_factory=list, description="通知しないアクション（例: pull_request.edited）")

    event_name: str = Field(..., description="イベント名（例: pull_request）")
    event_path: str = Field(..., description="イベントペイロードJSONのパス")
    actor: str = Field(default="", description="イベントを発生させたユーザー")
    sha: str = Field(default="", description="イベントのコミットSHA")

    model_config = {"extra": "forbid"}


def parse_action_list(value: str) -> list[str]:
    """アクション入力をリストに変換する

    単一の値（"push"）と角括弧で囲んだカンマ区切り（"[a, b]"）の両方を受け付ける。
    """
    value = value.strip()
    if not value:
        return []
    if not value.startswith("["):
        return [value]
    return [item.strip() for item in value.strip("[]").split(",") if item.strip()]


def _parse_flag(value: str) -> bool:
    return value.strip().lower() == "true"


def load_env_config() -> EnvConfig:
    """環境変数からEnvConfigを読み込む

    Returns:
        EnvConfig: 環境変数設定

    Raises:
        ValueError: 必須環境変数が欠けている場合
    """
    try:
        return EnvConfig(
            slack_bot_token=os.environ["SLACK_BOT_TOKEN"],
            channel=os.environ["INPUT_CHANNEL"],
            fail_on_error=_parse_flag(os.environ.get("INPUT_FAIL_ON_ERROR", "")),
            dump_event=_parse_flag(os.environ.get("INPUT_DUMP_EVENT", "")),
            ignore_actions=parse_action_list(os.environ.get("INPUT_IGNORE_ACTIONS", "")),
            event_name=os.environ["GITHUB_EVENT_NAME"],
            event_path=os.environ["GITHUB_EVENT_PATH"],
            actor=os.environ.get("GITHUB_ACTOR", ""),
            sha=os.environ.get("GITHUB_SHA", ""),
        )
    except KeyError as e:
        msg = f"Required environment variable is missing: {e}"
        raise ValueError(msg) from e
    except ValidationError as e:
        msg = f"Invalid environment variable: {e}"
        raise ValueError(msg) from e
