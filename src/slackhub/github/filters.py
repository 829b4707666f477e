"""通知しないイベントの判定"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from slackhub.github.event import EventContext

Condition = Callable[[EventContext], bool]


def _is_draft_pull_request(ec: EventContext) -> bool:
    return ec.qualified_action == "pull_request.opened" and ec.get("pull_request.draft") is True


def _is_unmerged_close(ec: EventContext) -> bool:
    return ec.qualified_action == "pull_request.closed" and ec.get("pull_request.merged") is False


def _is_empty_review(ec: EventContext) -> bool:
    # 承認以外のレビューは本文があるときだけ通知する
    if ec.qualified_action != "pull_request_review.submitted":
        return False
    if ec.get("review.state") == "approved":
        return False
    return not ec.get("review.body")


def _is_non_branch_push(ec: EventContext) -> bool:
    # タグなどブランチ以外へのpush。push以外のイベントはbranchが空でも対象外
    return ec.name == "push" and ec.branch == ""


DEFAULT_CONDITIONS: tuple[Condition, ...] = (
    _is_draft_pull_request,
    _is_unmerged_close,
    _is_empty_review,
    _is_non_branch_push,
)


@dataclass
class EventFilter:
    """いずれかの条件に一致したイベントを通知対象外にするフィルタ"""

    conditions: list[Condition] = field(default_factory=lambda: list(DEFAULT_CONDITIONS))

    def ignore(self, ec: EventContext) -> bool:
        return any(condition(ec) for condition in self.conditions)


def is_ignored_action(ec: EventContext, ignore_actions: Iterable[str]) -> bool:
    """設定で除外されたアクション（例: pull_request.edited）かどうか"""
    return ec.qualified_action in set(ignore_actions)
