from __future__ import annotations

from typing import Any, Mapping, Optional

from sparky import config

Result = Mapping[str, Any]

_FORMAT_RULES = (
    "Keep your answers concise. Format your responses using Markdown for headings (#, ##), "
    "lists, blockquotes (>), code blocks (```), bold (**text**), italic (*text*), and inline "
    "code (`code`). Use horizontal rules (---) to separate distinct sections."
)

_QUIZ_EXAMPLE = (
    '```json\n{"quiz": {"question": "What is the time complexity of a binary search?", '
    '"options": ["O(n)", "O(log n)", "O(1)"], "correctAnswer": "O(log n)", '
    '"explanation": "Binary search halves the search space with each step."}}\n```'
)

_QUIZ_SHAPE = (
    '```json\n{"quiz": {"question": "...", "options": ["..."], '
    '"correctAnswer": "...", "explanation": "..."}}\n```'
)

TEACHER_INSTRUCTION = (
    f"You are an expert AI teaching assistant named {config.TUTOR_NAME}. Your goal is to "
    "provide teachers with insightful, data-driven advice and pedagogical strategies. You can "
    "help with lesson planning, creating assessment questions, suggesting student engagement "
    "techniques, and analyzing class performance trends. Your tone should be professional, "
    "supportive, and knowledgeable. Format your responses using Markdown for clarity."
)

STUDENT_INSTRUCTION = (
    f"You are a friendly and helpful AI tutor named {config.TUTOR_NAME}. Your goal is to "
    "explain complex computer science topics in a simple and encouraging way. "
    f"{_FORMAT_RULES} To test the student's understanding, you can embed a multiple-choice "
    "question in your response by including a JSON object on its own line with the following "
    f"structure: {_QUIZ_EXAMPLE}. The `correctAnswer` must be one of the strings in the "
    "`options` array. Do not put any other text on the same line as this JSON block."
)


def weak_areas(last_result: Optional[Result]) -> list[str]:
    """Topics scored below the weak-area threshold in an assessment result."""

    if not last_result:
        return []
    breakdown = last_result.get("skillBreakdown") or {}
    return [
        topic
        for topic, data in breakdown.items()
        if float(data.get("percentage", 0)) < config.WEAK_AREA_THRESHOLD
    ]


def build_system_instruction(role: str, last_result: Optional[Result] = None) -> str:
    if role == "teacher":
        return TEACHER_INSTRUCTION

    topics = weak_areas(last_result)
    if not topics:
        return STUDENT_INSTRUCTION
    return (
        f"You are a friendly and helpful AI tutor named {config.TUTOR_NAME}. The student just "
        "completed an assessment and struggled with the following topics: "
        f"{', '.join(topics)}. Proactively offer to help with these specific topics. "
        f"{_FORMAT_RULES} To test understanding, you can embed a multiple-choice question by "
        f"including a JSON object on its own line with this structure: {_QUIZ_SHAPE}."
    )


def build_greeting(role: str, last_result: Optional[Result] = None) -> str:
    name = config.TUTOR_NAME
    if role == "teacher":
        return (
            f"Hello! I'm {name}, your AI teaching assistant. How can I support you and your "
            "classroom today? I can help with lesson plans, student engagement strategies, "
            "or analyzing performance data."
        )
    if last_result is None:
        return (
            f"Hi! I'm {name}, your AI Tutor. Ask me anything about computer science by "
            "voice or text!"
        )

    topics = weak_areas(last_result)
    if topics:
        return (
            f"Hi! I'm {name}. I noticed you had some trouble with {', '.join(topics)} on "
            "your last assessment. I'm here to help you with those topics, or anything else "
            "you'd like to ask!"
        )
    return (
        f"Hi! I'm {name}. Great job on your last assessment! I'm here if you have any "
        "questions about computer science. How can I help?"
    )
