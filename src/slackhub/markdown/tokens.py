"""スキャナが出力するトークン定義"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """トークン種別"""

    ERROR = auto()  # スキャンエラー（valueはエラーメッセージ）
    EOF = auto()
    EOL = auto()  # "\n", "\r", "\r\n"
    TEXT = auto()
    HEADER = auto()  # "# " ～ "###### "

    CODE_START = auto()
    CODE = auto()
    CODE_END = auto()
    CODE_LANG = auto()

    LINK_TEXT_START = auto()
    LINK_TEXT = auto()
    LINK_TEXT_END = auto()
    LINK_URL_START = auto()
    LINK_URL = auto()
    LINK_URL_END = auto()

    BLOCK_QUOTE = auto()
    BULLET = auto()
    STAR = auto()
    UNDERSCORE = auto()

    ESCAPE = auto()


# スキャンを終了させるトークン種別
TERMINAL_KINDS = frozenset({TokenKind.EOF, TokenKind.ERROR})


@dataclass(frozen=True)
class Token:
    """スキャナが出力するトークン"""

    kind: TokenKind
    start: int  # 入力文字列中の開始位置（診断用）
    value: str  # トークンが覆う部分文字列そのもの

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        if self.kind is TokenKind.ERROR:
            return self.value
        if len(self.value) > 10:
            return f"{self.value[:10]!r}..."
        return repr(self.value)
