"""イベントをSlackメッセージに変換して投稿するハンドラ"""

import logging
from pathlib import Path

from slackhub.github.event import EventContext
from slackhub.handler.render import render_message
from slackhub.slack import SlackClient

logger = logging.getLogger(__name__)


class Handler:
    """テンプレートからメッセージを生成し、Slackに投稿する"""

    def __init__(self, slack_client: SlackClient, template_dir: Path | None = None) -> None:
        self._slack_client = slack_client
        self._template_dir = template_dir

    async def handle(self, ec: EventContext) -> str:
        """イベントを通知する

        Args:
            ec: 通知対象のイベント

        Returns:
            str: 投稿されたメッセージのタイムスタンプ（ts）

        Raises:
            TemplateNotFoundError: イベントに対応するテンプレートがない場合
            RenderError: メッセージの生成に失敗した場合
            SlackAPIError: Slack API呼び出しでエラーが発生した場合
        """
        payload = render_message(ec, self._template_dir)
        logger.info("Posting %s notification to %s", ec.qualified_action, ec.channel)
        return await self._slack_client.post_message(payload)
