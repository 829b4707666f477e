"""GitHubイベント関連モジュール"""

from slackhub.github.event import EventContext, load_event_context
from slackhub.github.filters import EventFilter, is_ignored_action

__all__ = [
    "EventContext",
    "EventFilter",
    "is_ignored_action",
    "load_event_context",
]
