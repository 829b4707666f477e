"""Slackへの通知投稿に関する例外"""


class SlackError(Exception):
    """Slack投稿まわりのエラーの基底クラス"""


class SlackAPIError(SlackError):
    """chat.postMessage が ok=false を返した場合のエラー"""

    def __init__(self, message: str, error_code: str) -> None:
        """初期化

        Args:
            message: エラーメッセージ
            error_code: Slack APIのエラーコード（channel_not_found など）
        """
        super().__init__(message)
        self.error_code = error_code
