from sparky.tutor import prompts

RESULT = {
    "skillBreakdown": {
        "Recursion": {"percentage": 50},
        "Sorting": {"percentage": 90},
        "Graphs": {"percentage": 74.9},
    }
}


def test_weak_areas_below_threshold():
    assert prompts.weak_areas(RESULT) == ["Recursion", "Graphs"]
    assert prompts.weak_areas(None) == []


def test_teacher_prompt_and_greeting():
    assert prompts.build_system_instruction("teacher", RESULT) == prompts.TEACHER_INSTRUCTION
    assert "teaching assistant" in prompts.build_greeting("teacher")


def test_student_without_result():
    assert prompts.build_system_instruction("student") == prompts.STUDENT_INSTRUCTION
    assert "Ask me anything" in prompts.build_greeting("student")
    assert '"quiz"' in prompts.STUDENT_INSTRUCTION


def test_student_with_weak_areas():
    instruction = prompts.build_system_instruction("student", RESULT)
    greeting = prompts.build_greeting("student", RESULT)

    assert "Recursion, Graphs" in instruction
    assert "Recursion, Graphs" in greeting


def test_student_with_strong_result():
    strong = {"skillBreakdown": {"Sorting": {"percentage": 100}}}

    assert prompts.build_system_instruction("student", strong) == prompts.STUDENT_INSTRUCTION
    assert "Great job" in prompts.build_greeting("student", strong)
