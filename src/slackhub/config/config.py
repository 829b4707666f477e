"""統合Config クラス"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from slackhub.config.app import AppConfig, LogLevel, load_app_config
from slackhub.config.env import load_env_config


class Config(BaseModel):
    """統合設定クラス（環境変数 + アプリケーション設定）"""

    # 環境変数由来
    slack_bot_token: str = Field(..., description="Slack Bot User OAuth Token (xoxb-)")
    channel: str = Field(..., description="通知先のSlackチャンネルID")
    fail_on_error: bool = Field(default=False, description="エラー時にワークフローを失敗させるか")
    dump_event: bool = Field(default=False, description="イベントペイロードをログに出力するか")
    ignore_actions: list[str] = Field(default_factory=list, description="通知しないアクション")
    event_name: str = Field(..., description="イベント名")
    event_path: str = Field(..., description="イベントペイロードJSONのパス")
    actor: str = Field(default="", description="イベントを発生させたユーザー")
    sha: str = Field(default="", description="イベントのコミットSHA")

    # YAML由来
    post_timeout: int = Field(default=15, description="Slack API呼び出しのタイムアウト（秒）")
    log_level: LogLevel = Field(default="INFO", description="ログレベル")
    template_dir: str | None = Field(default=None, description="独自テンプレートのディレクトリ（Noneなら同梱のテンプレート）")

    model_config = {"extra": "forbid"}


def load_config(config_path: Path | None = None) -> Config:
    """環境変数とYAMLファイルから統合設定を読み込む

    Args:
        config_path: YAMLファイルのパス（Noneならデフォルト値を使う）

    Returns:
        Config: 統合設定

    Raises:
        ValueError: 必須の環境変数が欠けている場合
        FileNotFoundError: YAMLファイルが存在しない場合
    """
    # .envファイルを読み込み
    load_dotenv()

    env_config = load_env_config()
    app_config = load_app_config(config_path) if config_path is not None else AppConfig()

    return Config(
        **env_config.model_dump(),
        post_timeout=app_config.post_timeout,
        log_level=app_config.log_level,
        template_dir=app_config.template_dir,
    )
