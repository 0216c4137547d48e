"""
Tests for interviewer and evaluation prompt construction.
"""
from interview_coach.db.models import MessageRole, SessionMessage
from interview_coach.services.prompts import (
    build_chat_messages,
    build_context,
    build_conversation_instruction,
    build_feedback_prompt,
    build_start_instruction,
    normalize_rubric_key,
)


def test_context_with_role_and_company():
    assert build_context("SWE", "Acme") == (
        "The candidate is interviewing for a SWE position. The interview is for Acme."
    )


def test_context_omits_unset_values():
    assert build_context(None, "Acme") == "The interview is for Acme."
    assert build_context("", None) == ""


def test_start_instruction_sections():
    instruction = build_start_instruction("You are Alex.", "SWE", None, "Tell me about yourself.")

    assert instruction == (
        "You are Alex.\n\n"
        "The candidate is interviewing for a SWE position.\n\n"
        'Start the interview by greeting the candidate and asking this question: "Tell me about yourself."'
    )


def test_start_instruction_without_context_has_no_blank_section():
    instruction = build_start_instruction("You are Alex.", None, None, "Q?")

    assert "\n\n\n\n" not in instruction
    assert instruction.split("\n\n")[0] == "You are Alex."
    assert len(instruction.split("\n\n")) == 2


def test_conversation_instruction_lists_questions():
    instruction = build_conversation_instruction("You are Jordan.", None, "Acme", ["Q1?", "Q2?"])

    assert instruction.endswith("Available questions to ask: Q1?, Q2?")
    assert "The interview is for Acme." in instruction


def test_chat_messages_follow_history_order():
    history = [
        SessionMessage(role=MessageRole.ASSISTANT, content="Hi, tell me about yourself."),
        SessionMessage(role=MessageRole.USER, content="I'm an engineer."),
    ]

    messages = build_chat_messages("system text", history)

    assert messages == [
        {"role": "system", "content": "system text"},
        {"role": "assistant", "content": "Hi, tell me about yourself."},
        {"role": "user", "content": "I'm an engineer."},
    ]


def test_normalize_rubric_key():
    assert normalize_rubric_key("Clear situation context") == "clear_situation_context"
    assert normalize_rubric_key("Problem-solving   approach") == "problem-solving_approach"


def test_normalize_rubric_key_keeps_edge_whitespace():
    assert normalize_rubric_key(" Structure ") == "_structure_"


def test_feedback_prompt_contents():
    prompt = build_feedback_prompt(["Technical accuracy", "Clear explanations"], ["Answer one", "Answer two"])

    assert "based on these criteria: Technical accuracy, Clear explanations." in prompt
    assert "Candidate responses:\nAnswer one\n\nAnswer two" in prompt
    assert '"technical_accuracy": <number 1-100>, "clear_explanations": <number 1-100>' in prompt
    assert '"overallScore": <number 1-100>' in prompt
