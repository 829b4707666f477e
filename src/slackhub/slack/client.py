"""Slack API操作を担当するクライアントクラス"""

import logging
from typing import Any

from slack_sdk.web.async_client import AsyncWebClient

from slackhub.slack.exceptions import SlackAPIError

logger = logging.getLogger(__name__)


class SlackClient:
    """Slack API操作を担当するクライアントクラス"""

    def __init__(self, client: AsyncWebClient) -> None:
        """依存注入でAsyncWebClientを受け取る"""
        self._client = client

    async def post_message(self, payload: dict[str, Any]) -> str:
        """chat.postMessage のペイロードをそのまま投稿する

        Args:
            payload: テンプレートから生成したメッセージ（channel, text, attachments 等）

        Returns:
            str: 投稿されたメッセージのタイムスタンプ（ts）

        Raises:
            SlackAPIError: Slack API呼び出しでエラーが発生した場合
        """
        response = await self._client.chat_postMessage(**payload)

        if not response.get("ok"):
            error_code = response.get("error", "unknown_error")
            raise SlackAPIError(f"Failed to post message: {error_code}", error_code)

        logger.debug("Posted message to %s: ts=%s", payload.get("channel"), response.get("ts"))
        return response["ts"]
