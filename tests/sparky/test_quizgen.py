import asyncio
import json

import pytest

from sparky import quizgen
from sparky.llm.errors import LLMError

QUESTION = {
    "question": "What does LIFO stand for?",
    "options": ["Last In First Out", "Last In Final Out", "Least In First Out", "None"],
    "correctAnswer": "Last In First Out",
    "explanation": "Stacks pop the most recent item.",
}


def test_generate_quiz_questions(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"questions": [QUESTION, QUESTION]}))

    questions = asyncio.run(
        quizgen.generate_quiz_questions(
            "Computer Science", "Stacks", "easy", 2, "High School",
            registry=registry_for(provider),
        )
    )

    assert questions == [QUESTION, QUESTION]
    prompt = provider.requests[0].contents
    assert '"Stacks"' in prompt and '"High School"' in prompt
    assert provider.requests[0].response_schema is quizgen.QUIZ_SCHEMA


def test_generate_quiz_questions_accepts_bare_list(monkeypatch, make_provider, registry_for):
    warnings = []
    monkeypatch.setattr(quizgen.log, "warning", lambda m: warnings.append(m))
    provider = make_provider(text=json.dumps([QUESTION]))

    questions = asyncio.run(
        quizgen.generate_quiz_questions(
            "CS", "Stacks", "easy", 1, "College", registry=registry_for(provider)
        )
    )

    assert questions == [QUESTION]
    assert len(warnings) == 1


def test_generate_quiz_questions_without_questions_raises(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"items": []}))

    with pytest.raises(LLMError, match="expected format"):
        asyncio.run(
            quizgen.generate_quiz_questions(
                "CS", "Stacks", "easy", 1, "College", registry=registry_for(provider)
            )
        )


def test_generate_quiz_questions_from_file_sends_image(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"questions": [QUESTION]}))

    questions = asyncio.run(
        quizgen.generate_quiz_questions_from_file(
            b"\x89PNG", "image/png", 1, "Middle School", registry=registry_for(provider)
        )
    )

    assert questions == [QUESTION]
    text_part, image_part = provider.requests[0].contents
    assert "textbook page" in text_part.text
    assert image_part.inline_data.data == b"\x89PNG"
    assert image_part.inline_data.mime_type == "image/png"


def test_generate_quiz_questions_from_file_bad_shape(make_provider, registry_for):
    provider = make_provider(text=json.dumps([QUESTION]))

    with pytest.raises(LLMError, match="from the file"):
        asyncio.run(
            quizgen.generate_quiz_questions_from_file(
                b"x", "image/png", 1, "Middle School", registry=registry_for(provider)
            )
        )


def test_generate_single_question_is_validated(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"question": "only"}))

    with pytest.raises(LLMError):
        asyncio.run(
            quizgen.generate_single_question(
                "CS", "Queues", "hard", "College", registry=registry_for(provider)
            )
        )


def test_generate_single_question(make_provider, registry_for):
    provider = make_provider(text=json.dumps(QUESTION))

    question = asyncio.run(
        quizgen.generate_single_question(
            "CS", "Stacks", "hard", "College", registry=registry_for(provider)
        )
    )
    assert question == QUESTION


def test_generate_incorrect_answer_feedback(make_provider, registry_for):
    provider = make_provider(text="Because stacks are LIFO.")

    text = asyncio.run(
        quizgen.generate_incorrect_answer_feedback(
            "What is a stack?", "FIFO", "LIFO", registry=registry_for(provider)
        )
    )

    assert text == "Because stacks are LIFO."
    prompt = provider.requests[0].contents
    assert '"FIFO"' in prompt and '"LIFO"' in prompt
    assert provider.requests[0].response_mime_type is None


@pytest.mark.parametrize(
    "level,label", [(0, "Beginner"), (3, "Advanced"), (9, "Legendary"), (42, "Legendary")]
)
def test_iq_difficulty_ladder(level, label):
    assert quizgen.iq_difficulty(level) == label


def test_generate_iq_questions(make_provider, registry_for):
    provider = make_provider(text=json.dumps({"questions": [QUESTION]}))

    questions = asyncio.run(quizgen.generate_iq_questions(12, registry=registry_for(provider)))

    assert questions == [QUESTION]
    assert '"Legendary"' in provider.requests[0].contents
    assert "15 IQ" in provider.requests[0].contents
