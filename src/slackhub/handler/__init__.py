"""メッセージ生成・投稿モジュール"""

from slackhub.handler.exceptions import HandlerError, RenderError, TemplateNotFoundError
from slackhub.handler.handler import Handler
from slackhub.handler.render import load_template, render_message

__all__ = [
    "Handler",
    "HandlerError",
    "RenderError",
    "TemplateNotFoundError",
    "load_template",
    "render_message",
]
