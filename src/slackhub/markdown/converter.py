"""GitHub Markdown→Slack mrkdwn変換パーサ

Scanner のトークン列を最大2トークン先読みしながら消費し、
Slack mrkdwn 記法の文字列を組み立てる。

出力はJSON文字列フィールドにそのまま埋め込める1行の文字列で、
改行は2文字の "\\n"、タブは2文字の "\\t" にエスケープされる。
変換に失敗した場合は ConversionError を送出し、部分的な出力は返さない。
"""

import logging

from slackhub.markdown.errors import ConversionError, UnexpectedTokenError, error_from_token
from slackhub.markdown.scanner import Scanner
from slackhub.markdown.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Slack mrkdwn の記法
BOLD = "*"
ITALIC = "_"
BULLET = "• "
NEWLINE = "\\n"
TAB = "\\t"
BACKSLASH = "\\\\"

_MAX_LOOKAHEAD = 2

_EMPHASIS_KINDS = frozenset({TokenKind.STAR, TokenKind.UNDERSCORE})


def escape_line_breaks(text: str) -> str:
    """改行を "\\n" に置き換え、CRを取り除く"""
    return text.replace("\n", NEWLINE).replace("\r", "")


def escape_verbatim(text: str) -> str:
    """コード本体やリンクの文字列を、バックスラッシュも含めてJSON文字列向けにエスケープする"""
    return escape_line_breaks(text.replace("\\", BACKSLASH))


class Converter:
    """1回の変換呼び出しに対応するパーサ

    スキャナを専有し、変換が終わったら破棄する。
    """

    def __init__(self, text: str) -> None:
        self._scanner = Scanner(text)
        self._lookahead: list[Token] = []
        self._parts: list[str] = []

    def convert(self) -> str:
        """トークン列を最後まで変換した文字列を返す

        Raises:
            ConversionError: スキャンエラーまたは予期しないトークンに遭遇した場合
        """
        self._convert_document()
        return "".join(self._parts).replace("\t", TAB)

    # トークン操作

    def _next(self) -> Token:
        """次のトークンを消費して返す。ERRORトークンは例外に変換する。"""
        if self._lookahead:
            return self._lookahead.pop()
        token = self._scanner.next_token()
        if token.kind is TokenKind.ERROR:
            raise error_from_token(token)
        return token

    def _peek(self) -> Token:
        """次のトークンを消費せずに返す"""
        token = self._next()
        self._backup(token)
        return token

    def _backup(self, token: Token) -> None:
        """消費したトークンを押し戻す"""
        if len(self._lookahead) >= _MAX_LOOKAHEAD:
            msg = f"lookahead buffer is full, cannot back up {token}"
            raise RuntimeError(msg)
        self._lookahead.append(token)

    def _write(self, text: str) -> None:
        self._parts.append(text)

    # 構文ごとの変換

    def _convert_document(self) -> None:
        while True:
            token = self._next()
            kind = token.kind
            if kind is TokenKind.EOF:
                return
            if kind is TokenKind.EOL:
                self._write(NEWLINE)
            elif kind in (TokenKind.TEXT, TokenKind.CODE_START, TokenKind.CODE_END, TokenKind.BLOCK_QUOTE):
                # ">" は Slack でもそのまま引用記法になる
                self._write(token.value)
            elif kind is TokenKind.CODE_LANG:
                pass
            elif kind is TokenKind.CODE:
                self._write(escape_verbatim(token.value))
            elif kind is TokenKind.HEADER:
                self._convert_header()
            elif kind is TokenKind.LINK_TEXT_START:
                self._backup(token)
                self._convert_link()
            elif kind in _EMPHASIS_KINDS:
                self._convert_emphasis(token)
            elif kind is TokenKind.BULLET:
                self._write(BULLET)
            elif kind is TokenKind.ESCAPE:
                self._convert_escape()
            else:
                raise UnexpectedTokenError(token)

    def _convert_header(self) -> None:
        """見出し行を太字で囲む。見出し内の太字は取り除き、斜体は残す。"""
        self._write(BOLD)
        while True:
            token = self._next()
            kind = token.kind
            if kind is TokenKind.EOF:
                self._write(BOLD)
                self._backup(token)
                return
            if kind is TokenKind.EOL:
                self._write(BOLD)
                self._write(NEWLINE)
                return
            if kind is TokenKind.TEXT:
                self._write(token.value)
            elif kind is TokenKind.LINK_TEXT_START:
                self._backup(token)
                self._convert_link()
            elif kind in _EMPHASIS_KINDS:
                following = self._next()
                if following.kind is not kind:
                    self._write(ITALIC)
                    self._backup(following)
            elif kind is TokenKind.ESCAPE:
                # 見出し内のエスケープ記号は捨て、後続のトークンは通常どおり処理する
                self._peek()
            else:
                raise UnexpectedTokenError(token)

    def _convert_emphasis(self, marker: Token) -> None:
        """** と __ は太字、* と _ は斜体に変換する"""
        following = self._next()
        if following.kind is marker.kind:
            self._write(BOLD)
        else:
            self._write(ITALIC)
            self._backup(following)

    def _convert_link(self, *, literal: bool = False) -> None:
        """[text](url) を <url|text> に変換する

        途中で形が崩れた場合は、それまでに読んだ部分をそのまま出力する。
        literal=True の場合は完全な形でも元の記法のまま出力する。
        """
        self._next()  # [
        token = self._next()
        if token.kind is not TokenKind.LINK_TEXT:
            self._backup(token)
            self._write("[")
            return
        text = escape_verbatim(token.value)
        self._next()  # ]

        token = self._next()
        if token.kind is not TokenKind.LINK_URL_START:
            self._backup(token)
            self._write(f"[{text}]")
            return

        token = self._next()
        if token.kind is not TokenKind.LINK_URL:
            self._backup(token)
            self._write(f"[{text}](")
            return
        url = escape_verbatim(token.value)
        self._next()  # )

        if literal:
            self._write(f"[{text}]({url})")
        else:
            self._write(f"<{url}|{text}>")

    def _convert_escape(self) -> None:
        """バックスラッシュの直後の記号を、記法として解釈せずにそのまま出力する

        Slack mrkdwn にはエスケープ記法がないため、記号自体を出力する。
        バックスラッシュそのものを出力する場合はJSON文字列として有効な "\\\\" にする。
        """
        token = self._next()
        kind = token.kind
        if kind in _EMPHASIS_KINDS or kind is TokenKind.TEXT:
            self._write(token.value)
        elif kind is TokenKind.LINK_TEXT_START:
            self._backup(token)
            self._convert_link(literal=True)
        elif kind is TokenKind.ESCAPE:
            self._write(BACKSLASH)
        else:
            # 行末・入力末尾のバックスラッシュは文字として残す
            self._write(BACKSLASH)
            self._backup(token)


def convert(text: str) -> str:
    """GitHub MarkdownテキストをSlack mrkdwn記法に変換する。

    Args:
        text: Markdown形式のテキスト

    Returns:
        Slack mrkdwn形式に変換された、JSON文字列に埋め込める1行のテキスト

    Raises:
        ConversionError: 閉じられていないコードブロック・リンクや、予期しないトークンがある場合
    """
    try:
        return Converter(text).convert()
    except ConversionError as e:
        logger.debug("Markdown conversion failed: %s", e)
        raise
