"""イベントフィルタのテスト"""

from typing import Any

import pytest

from slackhub.github.event import EventContext
from slackhub.github.filters import EventFilter, is_ignored_action


def context(name: str, event: dict[str, Any]) -> EventContext:
    return EventContext(channel="C1", actor="octocat", name=name, event=event)


class TestEventFilter:
    """EventFilter.ignoreのテスト"""

    def test_draft_pull_request_is_ignored(self) -> None:
        """ドラフトPRのオープンは通知しないこと"""
        ec = context("pull_request", {"action": "opened", "pull_request": {"draft": True}})
        assert EventFilter().ignore(ec) is True

    def test_ready_pull_request_is_notified(self) -> None:
        ec = context("pull_request", {"action": "opened", "pull_request": {"draft": False}})
        assert EventFilter().ignore(ec) is False

    def test_unmerged_close_is_ignored(self) -> None:
        """マージされずに閉じられたPRは通知しないこと"""
        ec = context("pull_request", {"action": "closed", "pull_request": {"merged": False}})
        assert EventFilter().ignore(ec) is True

    def test_merged_close_is_notified(self) -> None:
        ec = context("pull_request", {"action": "closed", "pull_request": {"merged": True}})
        assert EventFilter().ignore(ec) is False

    @pytest.mark.parametrize("body", [None, ""])
    def test_empty_comment_review_is_ignored(self, body: str | None) -> None:
        """本文のない承認以外のレビューは通知しないこと"""
        ec = context("pull_request_review", {"action": "submitted", "review": {"state": "commented", "body": body}})
        assert EventFilter().ignore(ec) is True

    def test_review_with_body_is_notified(self) -> None:
        ec = context(
            "pull_request_review",
            {"action": "submitted", "review": {"state": "changes_requested", "body": "Please fix"}},
        )
        assert EventFilter().ignore(ec) is False

    def test_approval_without_body_is_notified(self) -> None:
        """本文のない承認は通知すること"""
        ec = context("pull_request_review", {"action": "submitted", "review": {"state": "approved", "body": None}})
        assert EventFilter().ignore(ec) is False

    def test_tag_push_is_ignored(self) -> None:
        """タグへのpushは通知しないこと"""
        ec = context("push", {"ref": "refs/tags/v1.0.0"})
        assert EventFilter().ignore(ec) is True

    def test_branch_push_is_notified(self) -> None:
        ec = context("push", {"ref": "refs/heads/main"})
        assert EventFilter().ignore(ec) is False

    def test_other_events_are_notified(self) -> None:
        """refを持たない他のイベントは除外されないこと"""
        ec = context("issues", {"action": "opened"})
        assert EventFilter().ignore(ec) is False

    def test_custom_conditions(self) -> None:
        """条件を差し替えられること"""
        event_filter = EventFilter(conditions=[lambda ec: ec.actor == "dependabot[bot]"])
        assert event_filter.ignore(EventContext(channel="C1", actor="dependabot[bot]", name="push")) is True
        assert event_filter.ignore(context("push", {"ref": "refs/tags/v1"})) is False


class TestIsIgnoredAction:
    """is_ignored_action関数のテスト"""

    def test_matches_qualified_action(self) -> None:
        ec = context("pull_request", {"action": "edited"})
        assert is_ignored_action(ec, ["pull_request.edited"]) is True
        assert is_ignored_action(ec, ["pull_request"]) is False

    def test_matches_event_without_action(self) -> None:
        ec = context("push", {"ref": "refs/heads/main"})
        assert is_ignored_action(ec, ["push"]) is True

    def test_empty_list(self) -> None:
        assert is_ignored_action(context("push", {}), []) is False
