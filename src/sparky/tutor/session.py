from __future__ import annotations

from typing import Callable, Optional

from sparky import logger as logger_mod
from sparky import service
from sparky.llm.base import ChatSession
from sparky.llm.types import ChatConfig, Contents, Part

from .messages import (
    Attachment,
    ChatHistory,
    ChatMessage,
    ImageAttachment,
    PdfAttachment,
)
from .parser import extract_quiz
from .prompts import Result, build_greeting, build_system_instruction

log = logger_mod.get_logger()

BACKEND_UNAVAILABLE = "Sorry, the AI backend is not available right now."
SEND_FAILED = (
    "Sorry, I'm having a little trouble right now. Please try again in a moment."
)

ChatFactory = Callable[[ChatConfig], ChatSession]


class TutorSession:
    """One tutor conversation: history plus the provider chat handle.

    At most one message is in flight; send() returns None while busy.
    Provider errors never escape send(); they become a fallback bot message.
    """

    def __init__(
        self,
        *,
        role: str,
        chat: Optional[ChatSession],
        history: Optional[ChatHistory] = None,
    ) -> None:
        self.role = role
        self.history = history if history is not None else ChatHistory()
        self._chat = chat
        self._busy = False

    @classmethod
    def start(
        cls,
        role: str = "student",
        *,
        last_result: Optional[Result] = None,
        chat_factory: Optional[ChatFactory] = None,
    ) -> "TutorSession":
        chat_factory = chat_factory or service.create_chat
        history = ChatHistory()
        history.append(ChatMessage.bot(build_greeting(role, last_result)))

        chat: Optional[ChatSession] = None
        try:
            chat = chat_factory(
                ChatConfig(system_instruction=build_system_instruction(role, last_result))
            )
        except Exception as e:  # noqa: BLE001
            log.error(f"Failed to initialize chat backend: {e}")
            history.append(ChatMessage.bot(BACKEND_UNAVAILABLE))

        return cls(role=role, chat=chat, history=history)

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def ready(self) -> bool:
        return self._chat is not None

    @staticmethod
    def _payload(message: str, attachment: Optional[Attachment]) -> Contents:
        if isinstance(attachment, ImageAttachment):
            return [
                Part.from_text(message),
                Part.from_bytes(attachment.data, attachment.mime_type),
            ]
        if isinstance(attachment, PdfAttachment):
            return (
                f"{message}\n\n"
                f'(Context: I have uploaded a file named "{attachment.name}")'
            )
        return message

    async def send(
        self, text: str, attachment: Optional[Attachment] = None
    ) -> Optional[ChatMessage]:
        """Send one user message and append the reply (or a fallback) to history."""

        message = text.strip()
        if (not message and attachment is None) or self._busy or self._chat is None:
            return None

        self._busy = True
        try:
            self.history.append(ChatMessage.user(message, attachment))
            try:
                resp = await self._chat.send_message(self._payload(message, attachment))
                extraction = extract_quiz(resp.text)
                reply = ChatMessage.bot(extraction.text, quiz=extraction.quiz)
            except Exception as e:  # noqa: BLE001
                log.error(f"Error sending message to the AI provider: {e}")
                reply = ChatMessage.bot(SEND_FAILED)
            self.history.append(reply)
            return reply
        finally:
            self._busy = False
