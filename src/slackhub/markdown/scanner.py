"""GitHub Markdownをトークン列に分解するスキャナ

状態関数を順に呼び出すステートマシンとして実装する。
各状態関数はトークンを0個以上キューに積み、次の状態関数を返す（Noneで終了）。
パーサが next_token() を呼ぶたびに、トークンが得られるまで状態を進める。

出力されるトークンの value を順に連結すると入力文字列そのものになる
（終端の EOF / ERROR トークンを除く）。
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Callable, Iterator

from slackhub.markdown.errors import UNCLOSED_CODE_BLOCK, UNCLOSED_LINK_TEXT, UNCLOSED_LINK_URL
from slackhub.markdown.tokens import Token, TokenKind

StateFn = Callable[[], "StateFn | None"]

CODE_FENCE = "```"
BULLET = "- "
MAX_HEADER_LEVEL = 6

# プレーンテキストの区切りとなる文字
_TEXT_BOUNDARY = re.compile(r"[\r\n\[*_\\]")
_LINE_END = re.compile(r"[\r\n]")

_INLINE_MARKERS = {
    "*": TokenKind.STAR,
    "_": TokenKind.UNDERSCORE,
    "\\": TokenKind.ESCAPE,
}


class Scanner:
    """入力文字列から1トークンずつ取り出すスキャナ"""

    def __init__(self, text: str) -> None:
        self._input = text
        self._pos = 0  # 現在の読み取り位置
        self._start = 0  # 出力待ちトークンの開始位置
        self._tokens: deque[Token] = deque()
        self._state: StateFn | None = self._scan_line

    def __iter__(self) -> Iterator[Token]:
        """EOF または ERROR トークンまでを順に返す"""
        while True:
            token = self.next_token()
            yield token
            if token.is_terminal:
                return

    def next_token(self) -> Token:
        """次のトークンを返す。スキャン終了後は EOF を返し続ける。"""
        while not self._tokens:
            if self._state is None:
                return Token(TokenKind.EOF, self._pos, "")
            self._state = self._state()
        return self._tokens.popleft()

    # 低レベル操作

    def _at(self, prefix: str) -> bool:
        return self._input.startswith(prefix, self._pos)

    def _accept(self, valid: str) -> bool:
        """次の文字が valid に含まれていれば読み進める"""
        if self._pos < len(self._input) and self._input[self._pos] in valid:
            self._pos += 1
            return True
        return False

    def _accept_line_end(self) -> None:
        # "\r\n" は1つの改行として扱う
        if self._accept("\r"):
            self._accept("\n")
        else:
            self._accept("\n")

    def _emit(self, kind: TokenKind) -> None:
        self._tokens.append(Token(kind, self._start, self._input[self._start : self._pos]))
        self._start = self._pos

    def _emit_pending_text(self) -> None:
        if self._pos > self._start:
            self._emit(TokenKind.TEXT)

    def _error(self, message: str) -> None:
        """ERRORトークンを積んでスキャンを終了する"""
        self._tokens.append(Token(TokenKind.ERROR, self._start, message))

    # 状態関数

    def _scan_line(self) -> StateFn | None:
        if self._at("#"):
            return self._scan_header
        if self._at(CODE_FENCE):
            return self._scan_code_start
        if self._at(">"):
            return self._scan_block_quote
        if self._at(BULLET):
            return self._scan_bullet
        return self._scan_text

    def _scan_text(self) -> StateFn | None:
        boundary = _TEXT_BOUNDARY.search(self._input, self._pos)
        if boundary is None:
            self._pos = len(self._input)
            self._emit_pending_text()
            self._emit(TokenKind.EOF)
            return None

        self._pos = boundary.start()
        self._emit_pending_text()

        char = boundary.group()
        if char in "\r\n":
            return self._scan_line_end
        if char == "[":
            return self._scan_link_text_start
        return self._scan_inline_marker

    def _scan_inline_marker(self) -> StateFn | None:
        # 強調の単複（太字/斜体）やエスケープの解釈はパーサが行う
        kind = _INLINE_MARKERS[self._input[self._pos]]
        self._pos += 1
        self._emit(kind)
        return self._scan_text

    def _scan_line_end(self) -> StateFn | None:
        self._accept_line_end()
        self._emit(TokenKind.EOL)
        return self._scan_line

    def _scan_header(self) -> StateFn | None:
        level = 0
        while self._accept("#"):
            level += 1
        # 7個以上の # や空白なしの場合は見出しではなく、# を含めてテキストとして扱う
        if level <= MAX_HEADER_LEVEL and self._accept(" "):
            self._emit(TokenKind.HEADER)
        return self._scan_text

    def _scan_block_quote(self) -> StateFn | None:
        self._pos += len(">")
        self._emit(TokenKind.BLOCK_QUOTE)
        return self._scan_text

    def _scan_bullet(self) -> StateFn | None:
        self._pos += len(BULLET)
        self._emit(TokenKind.BULLET)
        return self._scan_text

    def _scan_code_start(self) -> StateFn | None:
        self._pos += len(CODE_FENCE)
        self._emit(TokenKind.CODE_START)

        line_end = _LINE_END.search(self._input, self._pos)
        if line_end is None:
            self._error(UNCLOSED_CODE_BLOCK)
            return None
        self._pos = line_end.start()
        self._emit(TokenKind.CODE_LANG)

        # 言語指定行の改行はEOLトークンにせず、コード本体の先頭に含める
        self._accept_line_end()
        return self._scan_code

    def _scan_code(self) -> StateFn | None:
        # 直前に読んだ改行から探すので、中身が空のコードブロックも閉じられる
        closing = self._input.find("\n" + CODE_FENCE, self._pos - 1)
        if closing == -1:
            self._error(UNCLOSED_CODE_BLOCK)
            return None
        self._pos = closing + 1
        self._emit(TokenKind.CODE)
        return self._scan_code_end

    def _scan_code_end(self) -> StateFn | None:
        self._pos += len(CODE_FENCE)
        self._emit(TokenKind.CODE_END)
        return self._scan_text

    def _scan_link_text_start(self) -> StateFn | None:
        self._pos += len("[")
        self._emit(TokenKind.LINK_TEXT_START)
        return self._scan_link_text

    def _scan_link_text(self) -> StateFn | None:
        end = self._input.find("]", self._pos)
        if end == -1:
            self._error(UNCLOSED_LINK_TEXT)
            return None
        self._pos = end
        self._emit(TokenKind.LINK_TEXT)
        return self._scan_link_text_end

    def _scan_link_text_end(self) -> StateFn | None:
        self._pos += len("]")
        self._emit(TokenKind.LINK_TEXT_END)
        return self._scan_link_url_start

    def _scan_link_url_start(self) -> StateFn | None:
        # [text] の直後に ( がなければ通常のテキストに戻る
        if self._accept("("):
            self._emit(TokenKind.LINK_URL_START)
            return self._scan_link_url
        return self._scan_text

    def _scan_link_url(self) -> StateFn | None:
        end = self._input.find(")", self._pos)
        if end == -1:
            self._error(UNCLOSED_LINK_URL)
            return None
        self._pos = end
        self._emit(TokenKind.LINK_URL)
        return self._scan_link_url_end

    def _scan_link_url_end(self) -> StateFn | None:
        self._pos += len(")")
        self._emit(TokenKind.LINK_URL_END)
        return self._scan_text
