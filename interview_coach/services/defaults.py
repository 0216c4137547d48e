"""
Built-in interview templates and interviewer personas.

Single source for the startup seeder, the orchestrators' fallbacks when a
session has no template/persona, and the /api/defaults endpoint the client uses
for fallback rendering.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TemplateDefaults:
    name: str
    category: str
    description: str
    rubric_items: List[str]
    default_questions: List[str]
    difficulty: str = "medium"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PersonaDefaults:
    name: str
    style: str
    description: str
    system_prompt: str
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_TEMPLATES = (
    TemplateDefaults(
        name="Behavioral Interview",
        category="behavioral",
        description="Practice answering questions about past experiences using the STAR method.",
        rubric_items=["Clear situation context", "Specific actions taken", "Measurable results", "Active listening"],
        default_questions=[
            "Tell me about yourself.",
            "Describe a challenging situation at work and how you handled it.",
            "Give an example of a time you showed leadership.",
            "Tell me about a time you failed and what you learned.",
        ],
        difficulty="medium",
    ),
    TemplateDefaults(
        name="Technical Interview",
        category="technical",
        description="Explain your technical skills, projects, and problem-solving approach.",
        rubric_items=["Technical accuracy", "Clear explanations", "Structured thinking", "Problem-solving approach"],
        default_questions=[
            "Walk me through a technical project you're proud of.",
            "How do you approach debugging a complex issue?",
            "Explain a technical concept to me as if I'm non-technical.",
            "What technologies are you most excited about learning?",
        ],
        difficulty="hard",
    ),
    TemplateDefaults(
        name="General Interview",
        category="behavioral",
        description="A mix of common interview questions to help you prepare broadly.",
        rubric_items=["Communication clarity", "Confidence", "Relevance of answers", "Enthusiasm"],
        default_questions=[
            "Why are you interested in this role?",
            "What are your greatest strengths?",
            "Where do you see yourself in 5 years?",
            "Do you have any questions for me?",
        ],
        difficulty="easy",
    ),
)

DEFAULT_PERSONAS = (
    PersonaDefaults(
        name="Alex",
        style="friendly",
        description="A supportive interviewer who helps you feel comfortable and provides encouragement.",
        system_prompt=(
            "You are Alex, a friendly and supportive interviewer. Your goal is to help the candidate feel "
            "comfortable while still conducting a professional interview. Be encouraging, ask follow-up "
            "questions when appropriate, and provide a positive interview experience. Keep responses "
            "conversational and under 150 words."
        ),
    ),
    PersonaDefaults(
        name="Jordan",
        style="professional",
        description="A balanced, straightforward interviewer focused on evaluating qualifications.",
        system_prompt=(
            "You are Jordan, a professional and balanced interviewer. Your goal is to fairly evaluate the "
            "candidate's qualifications through thoughtful questions. Be direct but respectful, ask "
            "clarifying questions, and maintain a neutral tone. Keep responses concise and under 150 words."
        ),
    ),
    PersonaDefaults(
        name="Morgan",
        style="challenging",
        description="A rigorous interviewer who asks follow-up questions and pushes you to be specific.",
        system_prompt=(
            "You are Morgan, a challenging interviewer who pushes candidates to give their best. Ask probing "
            "follow-up questions, request specific examples, and challenge vague answers. Be professional "
            "but demanding. Keep responses focused and under 150 words."
        ),
    ),
)

DEFAULT_TEMPLATE = DEFAULT_TEMPLATES[0]
DEFAULT_PERSONA = DEFAULT_PERSONAS[0]

# Rubric used for evaluation when a session has no template
DEFAULT_RUBRIC = ("Communication clarity", "Structure", "Relevance")


def defaults_payload() -> Dict[str, Any]:
    return {
        "templates": [t.to_dict() for t in DEFAULT_TEMPLATES],
        "personas": [p.to_dict() for p in DEFAULT_PERSONAS],
        "rubric": list(DEFAULT_RUBRIC),
    }
