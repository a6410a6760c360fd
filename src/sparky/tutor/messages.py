from __future__ import annotations

import base64
import datetime
from dataclasses import dataclass
from typing import Any, Iterator, Literal, Optional, Union

from sparky import logger as logger_mod

Sender = Literal["user", "bot"]

# Wire shape of an embedded quiz. correctAnswer membership in options is a
# prompt-level contract and is not checked.
QUIZ_PAYLOAD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "question": {"type": "string"},
        "options": {
            "type": "array",
            "items": {"type": "string"},
            "uniqueItems": True,
        },
        "correctAnswer": {"type": "string"},
        "explanation": {"type": "string"},
    },
    "required": ["question", "options", "correctAnswer", "explanation"],
}


@dataclass(frozen=True)
class QuizPayload:
    question: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizPayload":
        return cls(
            question=data["question"],
            options=tuple(data["options"]),
            correct_answer=data["correctAnswer"],
            explanation=data["explanation"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
        }

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


@dataclass(frozen=True)
class ImageAttachment:
    name: str
    mime_type: str
    data: bytes

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class PdfAttachment:
    name: str


Attachment = Union[ImageAttachment, PdfAttachment]


def now_timestamp() -> str:
    return logger_mod.format_timestamp(datetime.datetime.now())


@dataclass(frozen=True)
class ChatMessage:
    sender: Sender
    text: str
    timestamp: str
    attachment: Optional[Attachment] = None
    quiz: Optional[QuizPayload] = None

    @classmethod
    def user(
        cls, text: str, attachment: Optional[Attachment] = None
    ) -> "ChatMessage":
        return cls(
            sender="user", text=text, timestamp=now_timestamp(), attachment=attachment
        )

    @classmethod
    def bot(cls, text: str, quiz: Optional[QuizPayload] = None) -> "ChatMessage":
        return cls(sender="bot", text=text, timestamp=now_timestamp(), quiz=quiz)


class ChatHistory:
    """Append-only, ordered conversation log."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> ChatMessage:
        return self._messages[index]

    @property
    def last(self) -> Optional[ChatMessage]:
        return self._messages[-1] if self._messages else None
