"""
Prompt builders for the interviewer dialogue and the post-session evaluation.
"""
import re
from typing import Dict, Iterable, List, Optional, Sequence

from interview_coach.db.models import MessageRole


def build_context(role: Optional[str], company: Optional[str]) -> str:
    """Role/company sentences; unset values contribute nothing."""
    parts = []
    if role:
        parts.append(f"The candidate is interviewing for a {role} position.")
    if company:
        parts.append(f"The interview is for {company}.")
    return " ".join(parts)


def _join_sections(*sections: str) -> str:
    return "\n\n".join(section for section in sections if section)


def build_start_instruction(
    persona_prompt: str,
    role: Optional[str],
    company: Optional[str],
    first_question: str,
) -> str:
    return _join_sections(
        persona_prompt,
        build_context(role, company),
        f'Start the interview by greeting the candidate and asking this question: "{first_question}"',
    )


def build_conversation_instruction(
    persona_prompt: str,
    role: Optional[str],
    company: Optional[str],
    questions: Sequence[str],
) -> str:
    return _join_sections(
        persona_prompt,
        build_context(role, company),
        f"Available questions to ask: {', '.join(questions)}",
    )


def build_chat_messages(system_instruction: str, history: Iterable = ()) -> List[Dict[str, str]]:
    """System instruction followed by the transcript in order."""
    messages = [{"role": "system", "content": system_instruction}]
    for message in history:
        messages.append({"role": MessageRole(message.role).value, "content": message.content})
    return messages


def normalize_rubric_key(item: str) -> str:
    """'Clear situation context' -> 'clear_situation_context'"""
    return re.sub(r"\s+", "_", item.lower())


def build_feedback_prompt(rubric_items: Sequence[str], user_responses: Sequence[str]) -> str:
    responses = "\n\n".join(user_responses)
    rubric_shape = ", ".join(f'"{normalize_rubric_key(item)}": <number 1-100>' for item in rubric_items)
    return (
        f"Evaluate this interview candidate based on these criteria: {', '.join(rubric_items)}.\n\n"
        f"Candidate responses:\n{responses}\n\n"
        "Provide feedback in this JSON format:\n"
        "{\n"
        '  "overallScore": <number 1-100>,\n'
        f'  "rubricScores": {{ {rubric_shape} }},\n'
        '  "strengths": ["<strength 1>", "<strength 2>"],\n'
        '  "improvements": ["<area 1>", "<area 2>"],\n'
        '  "summary": "<brief summary>"\n'
        "}"
    )


def build_feedback_messages(rubric_items: Sequence[str], user_responses: Sequence[str]) -> List[Dict[str, str]]:
    return [{"role": "user", "content": build_feedback_prompt(rubric_items, user_responses)}]
