from __future__ import annotations

from typing import Any, Optional

from sparky import logger as logger_mod
from sparky import service
from sparky.llm.errors import LLMError
from sparky.llm.registry import ProviderRegistry
from sparky.llm.types import Part

log = logger_mod.get_logger()

QUESTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "question": {"type": "string"},
        "options": {"type": "array", "items": {"type": "string"}},
        "correctAnswer": {"type": "string"},
        "explanation": {"type": "string"},
    },
    "required": ["question", "options", "correctAnswer", "explanation"],
}

QUIZ_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "questions": {"type": "array", "items": QUESTION_SCHEMA},
    },
    "required": ["questions"],
}

IQ_DIFFICULTIES = [
    "Beginner",
    "Easy",
    "Intermediate",
    "Advanced",
    "Hard",
    "Expert",
    "Genius",
    "Master",
    "Grandmaster",
    "Legendary",
]

IQ_QUESTION_COUNT = 15

_ANSWER_RULES = (
    "The 'correctAnswer' field must exactly match one of the strings in the "
    "'options' array.\n"
)


async def generate_quiz_questions(
    subject: str,
    topic: str,
    difficulty: str,
    total_questions: int,
    academic_level: str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> list[dict[str, Any]]:
    prompt = (
        f'Generate a quiz with {total_questions} multiple-choice questions about the topic "{topic}" '
        f'within the broader subject of "{subject}".\n'
        f'The questions should be appropriate for a student at the "{academic_level}" level.\n'
        f'The difficulty should be "{difficulty}".\n'
        "Each question must have 4 options.\n"
        f"{_ANSWER_RULES}"
        "Provide a brief explanation for the correct answer."
    )

    # Shape is checked here so a bare list of questions is still accepted.
    result = await service.generate_json_content(
        prompt, QUIZ_SCHEMA, validate=False, registry=registry
    )
    if isinstance(result, dict) and isinstance(result.get("questions"), list):
        return result["questions"]

    questions = result if isinstance(result, list) else []
    if questions:
        log.warning("AI response format was slightly off, but questions were extracted.")
        return questions
    raise LLMError("AI failed to return questions in the expected format.")


async def generate_quiz_questions_from_file(
    data: bytes,
    mime_type: str,
    question_count: int,
    academic_level: str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> list[dict[str, Any]]:
    """Build a quiz from an image of a textbook page."""

    prompt = (
        "Based on the content of the provided image of a textbook page, generate a quiz with "
        f"{question_count} multiple-choice questions.\n"
        "The questions should be relevant to the text and diagrams in the image.\n"
        f'The questions should be appropriate for a student at the "{academic_level}" level.\n'
        "Each question must have 4 options.\n"
        f"{_ANSWER_RULES}"
        "Provide a brief explanation for the correct answer."
    )
    parts = [Part.from_text(prompt), Part.from_bytes(data, mime_type)]

    result = await service.generate_json_content(
        parts, QUIZ_SCHEMA, validate=False, registry=registry
    )
    if isinstance(result, dict) and isinstance(result.get("questions"), list):
        return result["questions"]
    raise LLMError(
        "AI failed to return questions in the expected format from the file."
    )


async def generate_single_question(
    subject: str,
    topic: str,
    difficulty: str,
    academic_level: str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> dict[str, Any]:
    prompt = (
        f'Generate a single multiple-choice question about the topic "{topic}" '
        f'within the broader subject of "{subject}".\n'
        f'The question should be appropriate for a student at the "{academic_level}" level.\n'
        f'The difficulty should be "{difficulty}".\n'
        "The question must have 4 options.\n"
        f"{_ANSWER_RULES}"
        "Provide a brief explanation for the correct answer."
    )
    return await service.generate_json_content(
        prompt, QUESTION_SCHEMA, registry=registry
    )


async def generate_incorrect_answer_feedback(
    question: str,
    user_answer: str,
    correct_answer: str,
    *,
    registry: Optional[ProviderRegistry] = None,
) -> str:
    prompt = (
        "You are an expert and encouraging tutor. A student answered a multiple-choice "
        "question incorrectly. Explain clearly why their chosen answer is wrong and why the "
        "correct answer is right. Be concise and focus on clarifying the core concept.\n\n"
        f'Question: "{question}"\n'
        f'Student\'s incorrect answer: "{user_answer}"\n'
        f'Correct answer: "{correct_answer}"\n\n'
        "Your explanation should be 2-4 sentences long. Do not use markdown."
    )
    return await service.generate_text_content(prompt, registry=registry)


def iq_difficulty(level: int) -> str:
    return IQ_DIFFICULTIES[max(0, min(level, len(IQ_DIFFICULTIES) - 1))]


async def generate_iq_questions(
    level: int, *, registry: Optional[ProviderRegistry] = None
) -> list[dict[str, Any]]:
    difficulty = iq_difficulty(level)
    prompt = (
        f"Generate a set of {IQ_QUESTION_COUNT} IQ test-style questions. "
        f'The difficulty should be "{difficulty}" (corresponding to level {level}).\n'
        "Questions should cover logical reasoning, pattern recognition, spatial puzzles, "
        "and abstract thinking.\n"
        "Each question must be multiple-choice with 4 options.\n"
        f"{_ANSWER_RULES}"
        "Provide a brief, clear explanation for the correct answer."
    )

    result = await service.generate_json_content(prompt, QUIZ_SCHEMA, registry=registry)
    if isinstance(result, dict) and isinstance(result.get("questions"), list):
        return result["questions"]
    raise LLMError("AI failed to return IQ questions in the expected format.")
