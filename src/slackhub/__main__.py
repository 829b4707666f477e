import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from slack_sdk.web.async_client import AsyncWebClient

from slackhub.actions import mask, setup_logging
from slackhub.config import Config, load_config
from slackhub.github import EventContext, EventFilter, is_ignored_action, load_event_context
from slackhub.handler import Handler
from slackhub.slack import SlackClient

logger = logging.getLogger(__name__)


async def notify(config: Config, ec: EventContext, slack_client: SlackClient) -> str | None:
    """除外条件に当たらなければイベントを通知する

    Returns:
        str | None: 投稿されたメッセージのts（通知しなかった場合はNone）
    """
    if config.dump_event:
        logger.info("Event: %s", json.dumps(ec.event, indent=2, ensure_ascii=False))

    if is_ignored_action(ec, config.ignore_actions):
        logger.info("Ignoring action: %s", ec.qualified_action)
        return None

    if EventFilter().ignore(ec):
        logger.info("Filtering action: %s", ec.qualified_action)
        return None

    template_dir = Path(config.template_dir) if config.template_dir else None
    handler = Handler(slack_client, template_dir=template_dir)
    ts = await handler.handle(ec)
    logger.info("Notified %s: ts=%s", ec.qualified_action, ts)
    return ts


async def main() -> int:
    """アプリケーションのエントリーポイント

    Returns:
        int: 終了コード
    """
    config_path = os.environ.get("SLACKHUB_CONFIG")
    try:
        config = load_config(Path(config_path) if config_path else None)
    except (ValueError, FileNotFoundError) as e:
        setup_logging()
        logger.error("Could not load configuration: %s", e)
        return 1

    setup_logging(config.log_level)
    mask(config.slack_bot_token)

    try:
        ec = load_event_context(config)
        web_client = AsyncWebClient(token=config.slack_bot_token, timeout=config.post_timeout)
        await notify(config, ec, SlackClient(web_client))
    except Exception as e:
        logger.error("Failed to notify: %s", e)
        return 1 if config.fail_on_error else 0

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
