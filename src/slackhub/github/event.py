"""GitHub Actions のイベントコンテキスト"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from slackhub.config import Config

logger = logging.getLogger(__name__)

_BRANCH_REF_PREFIX = "refs/heads/"


@dataclass
class EventContext:
    """通知対象のイベントを表すデータクラス"""

    channel: str  # 通知先のSlackチャンネル
    actor: str  # イベントを発生させたユーザー
    name: str  # イベント名（例: pull_request）
    event: dict[str, Any] = field(default_factory=dict)  # イベントペイロード
    sha: str = ""

    @property
    def action(self) -> str:
        """ペイロードのactionを返す（なければ "default"）"""
        action = self.get("action")
        if isinstance(action, str) and action:
            return action
        return "default"

    @property
    def qualified_action(self) -> str:
        """イベント名とactionを連結した識別子（例: pull_request.opened）"""
        action = self.get("action")
        if isinstance(action, str) and action:
            return f"{self.name}.{action}"
        return self.name

    @property
    def branch(self) -> str:
        """pushされたブランチ名（ブランチ以外のrefなら空文字）"""
        ref = self.get("ref")
        if isinstance(ref, str) and ref.startswith(_BRANCH_REF_PREFIX):
            return ref[len(_BRANCH_REF_PREFIX) :]
        return ""

    def get(self, key: str) -> Any:
        """ドット区切りのキーでペイロードの値を取得する（なければNone）"""
        value: Any = self.event
        for part in key.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value


def load_event_context(config: Config) -> EventContext:
    """GITHUB_EVENT_PATH のJSONからEventContextを作成する

    Raises:
        FileNotFoundError: イベントファイルが存在しない場合
        ValueError: イベントファイルが不正なJSONの場合
    """
    event_path = Path(config.event_path)
    if not event_path.exists():
        msg = f"Event file not found: {event_path}"
        raise FileNotFoundError(msg)

    try:
        with event_path.open(encoding="utf-8") as f:
            event = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"Invalid event file: {e}"
        raise ValueError(msg) from e

    if not isinstance(event, dict):
        msg = f"Event payload must be a JSON object: {event_path}"
        raise ValueError(msg)

    return EventContext(
        channel=config.channel,
        actor=config.actor,
        name=config.event_name,
        event=event,
        sha=config.sha,
    )
