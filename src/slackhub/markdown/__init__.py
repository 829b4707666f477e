"""GitHub Markdown→Slack mrkdwn変換モジュール"""

from slackhub.markdown.converter import Converter, convert
from slackhub.markdown.errors import (
    ConversionError,
    UnclosedCodeBlockError,
    UnclosedLinkTextError,
    UnclosedLinkURLError,
    UnexpectedTokenError,
)
from slackhub.markdown.scanner import Scanner
from slackhub.markdown.tokens import Token, TokenKind

__all__ = [
    "ConversionError",
    "Converter",
    "Scanner",
    "Token",
    "TokenKind",
    "UnclosedCodeBlockError",
    "UnclosedLinkTextError",
    "UnclosedLinkURLError",
    "UnexpectedTokenError",
    "convert",
]
