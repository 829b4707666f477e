"""メッセージ生成に関する例外"""


class HandlerError(Exception):
    """メッセージ生成・投稿処理のエラーの基底クラス"""


class TemplateNotFoundError(HandlerError):
    """イベントに対応するテンプレートが存在しない場合のエラー"""

    def __init__(self, event_name: str, action: str) -> None:
        super().__init__(f"No template for {event_name}.{action}")
        self.event_name = event_name
        self.action = action


class RenderError(HandlerError):
    """テンプレートの展開に失敗した場合のエラー"""
