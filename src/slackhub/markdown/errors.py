"""Markdown変換に関する例外"""

from slackhub.markdown.tokens import Token, TokenKind

UNCLOSED_CODE_BLOCK = "unclosed code block"
UNCLOSED_LINK_TEXT = "no closing brace for link text"
UNCLOSED_LINK_URL = "no closing brace for link URL"


class ConversionError(Exception):
    """Markdown変換エラーの基底クラス"""

    def __init__(self, message: str, kind: TokenKind, position: int) -> None:
        """初期化

        Args:
            message: エラーメッセージ
            kind: エラーの原因となったトークンの種別
            position: エラーの原因となったトークンの入力中の位置
        """
        super().__init__(f"{message} (position {position})")
        self.kind = kind
        self.position = position


class UnclosedCodeBlockError(ConversionError):
    """コードブロックが閉じられていない場合のエラー"""


class UnclosedLinkTextError(ConversionError):
    """リンクテキストの ] が見つからない場合のエラー"""


class UnclosedLinkURLError(ConversionError):
    """リンクURLの ) が見つからない場合のエラー"""


class UnexpectedTokenError(ConversionError):
    """パーサが処理できないトークンに遭遇した場合のエラー"""

    def __init__(self, token: Token) -> None:
        super().__init__(f"parse: unexpected {token}", token.kind, token.start)
        self.token = token


_SCAN_ERRORS: dict[str, type[ConversionError]] = {
    UNCLOSED_CODE_BLOCK: UnclosedCodeBlockError,
    UNCLOSED_LINK_TEXT: UnclosedLinkTextError,
    UNCLOSED_LINK_URL: UnclosedLinkURLError,
}


def error_from_token(token: Token) -> ConversionError:
    """スキャナのERRORトークンを対応する例外に変換する"""
    error_class = _SCAN_ERRORS.get(token.value)
    if error_class is None:
        return UnexpectedTokenError(token)
    return error_class(token.value, token.kind, token.start)
