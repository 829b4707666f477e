"""Slack関連モジュール"""

from slackhub.slack.client import SlackClient
from slackhub.slack.exceptions import SlackAPIError, SlackError

__all__ = [
    "SlackAPIError",
    "SlackClient",
    "SlackError",
]
