"""Tutor chat: reply parsing, rendering and the conversation session.

Public API:
- parse_reply / parse_blocks / extract_quiz
- render_html
- TutorSession
- ChatMessage, ChatHistory, QuizPayload
"""

from .messages import (
    ChatHistory,
    ChatMessage,
    ImageAttachment,
    PdfAttachment,
    QuizPayload,
)
from .parser import (
    BlockKind,
    ContentBlock,
    ParsedReply,
    extract_quiz,
    parse_blocks,
    parse_reply,
)
from .render import render_html
from .session import TutorSession

__all__ = [
    "BlockKind",
    "ChatHistory",
    "ChatMessage",
    "ContentBlock",
    "ImageAttachment",
    "ParsedReply",
    "PdfAttachment",
    "QuizPayload",
    "TutorSession",
    "extract_quiz",
    "parse_blocks",
    "parse_reply",
    "render_html",
]
