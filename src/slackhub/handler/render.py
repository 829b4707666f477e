"""メッセージテンプレートの展開

テンプレートは templates/<イベント名>/<action>.json に置かれたJSON文書で、
${...} のプレースホルダを展開してから chat.postMessage のペイロードとして読み込む。

プレースホルダの書式:
    ${path}        値をJSON文字列としてエスケープして埋め込む
    ${md:path}     GitHub MarkdownをSlack mrkdwnに変換して埋め込む
    ${ts:path}     RFC 3339の日時をUnix秒に変換する
    ${sha:path}    コミットSHAを先頭8文字に短縮する

path には channel, actor, event_name, action, branch, sha と、
ペイロードをドット区切りで辿る event.<key> が使える。
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from string import Template
from typing import Any

from slackhub.github.event import EventContext
from slackhub.handler.exceptions import RenderError, TemplateNotFoundError
from slackhub.markdown import ConversionError, convert

logger = logging.getLogger(__name__)

SHORT_SHA_LENGTH = 8


class MessageTemplate(Template):
    """${filter:dotted.path} 形式のプレースホルダを許可するテンプレート"""

    braceidpattern = r"(?:[a-z]+:)?[_a-z][_a-z0-9.]*"


def _to_json_string(value: Any) -> str:
    """値をJSON文字列の中身（前後の引用符なし）に変換する"""
    if value is None:
        return ""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return json.dumps(str(value), ensure_ascii=False)[1:-1]


def _is_json_string_safe(text: str) -> bool:
    try:
        json.loads(f'"{text}"')
    except json.JSONDecodeError:
        return False
    return True


def slack_markdown(value: Any) -> str:
    """MarkdownをJSON文字列に埋め込めるSlack mrkdwnに変換する

    変換できない場合は元のテキストをそのまま（JSONエスケープして）使う。
    """
    if not isinstance(value, str):
        return ""
    try:
        converted = convert(value).replace('"', '\\"')
    except ConversionError as e:
        logger.warning("Could not convert markdown, posting source text instead: %s", e)
        return _to_json_string(value)

    # 制御文字などはJSONとして不正になりうる
    if not _is_json_string_safe(converted):
        logger.warning("Converted markdown is not a valid JSON string, posting source text instead")
        return _to_json_string(value)
    return converted


def as_timestamp(value: Any) -> str:
    """RFC 3339の日時をUnix秒に変換する（解釈できなければ現在時刻）"""
    try:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        ts = datetime.now(UTC)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return str(int(ts.timestamp()))


def short_sha(value: Any) -> str:
    if value is None:
        return ""
    return _to_json_string(str(value)[:SHORT_SHA_LENGTH])


FILTERS: dict[str, Callable[[Any], str]] = {
    "": _to_json_string,
    "md": slack_markdown,
    "ts": as_timestamp,
    "sha": short_sha,
}


class TemplateValues:
    """テンプレートのプレースホルダに値を供給するマッピング"""

    def __init__(self, ec: EventContext) -> None:
        self._ec = ec
        self._fields: dict[str, Any] = {
            "channel": ec.channel,
            "actor": ec.actor,
            "event_name": ec.name,
            "action": ec.action,
            "branch": ec.branch,
            "sha": ec.sha,
        }

    def __getitem__(self, key: str) -> str:
        filter_name, _, path = key.rpartition(":")
        if filter_name not in FILTERS:
            msg = f"Unknown template filter: {filter_name!r}"
            raise RenderError(msg)
        return FILTERS[filter_name](self._lookup(path))

    def _lookup(self, path: str) -> Any:
        if path.startswith("event."):
            return self._ec.get(path.removeprefix("event."))
        if path not in self._fields:
            msg = f"Unknown template field: {path!r}"
            raise RenderError(msg)
        return self._fields[path]


def load_template(event_name: str, action: str, template_dir: Path | None = None) -> MessageTemplate:
    """イベントとactionに対応するテンプレートを読み込む

    Args:
        event_name: イベント名（例: pull_request）
        action: action名（例: opened、actionのないイベントは default）
        template_dir: テンプレートディレクトリ（Noneなら同梱のテンプレート）

    Raises:
        TemplateNotFoundError: テンプレートが存在しない場合
    """
    root: Traversable = template_dir if template_dir is not None else resources.files(__package__) / "templates"
    template_file = root / event_name / f"{action}.json"
    if not template_file.is_file():
        raise TemplateNotFoundError(event_name, action)
    return MessageTemplate(template_file.read_text(encoding="utf-8"))


def render_message(ec: EventContext, template_dir: Path | None = None) -> dict[str, Any]:
    """イベントからchat.postMessageのペイロードを生成する

    Raises:
        TemplateNotFoundError: テンプレートが存在しない場合
        RenderError: テンプレートの展開結果が不正な場合
    """
    template = load_template(ec.name, ec.action, template_dir)
    try:
        rendered = template.substitute(TemplateValues(ec))
    except ValueError as e:
        msg = f"Invalid placeholder in template {ec.name}/{ec.action}: {e}"
        raise RenderError(msg) from e

    try:
        payload = json.loads(rendered)
    except json.JSONDecodeError as e:
        msg = f"Rendered message for {ec.qualified_action} is not valid JSON: {e}"
        raise RenderError(msg) from e

    if not isinstance(payload, dict):
        msg = f"Rendered message for {ec.qualified_action} must be a JSON object"
        raise RenderError(msg)
    return payload
