"""
Model router for selecting the model and token limit per feature.
"""
from interview_coach.core import config

# Feature -> (model, max tokens)
MODEL_ROUTING = {
    "interview": (config.INTERVIEW_MODEL, config.INTERVIEW_MAX_TOKENS),
    "feedback": (config.FEEDBACK_MODEL, config.FEEDBACK_MAX_TOKENS),
}

DEFAULT_ROUTE = ("gpt-4o", 512)


def get_model_for_feature(feature: str) -> str:
    """Model identifier used for a feature ("interview" or "feedback")."""
    return MODEL_ROUTING.get(feature, DEFAULT_ROUTE)[0]


def get_max_tokens_for_feature(feature: str) -> int:
    return MODEL_ROUTING.get(feature, DEFAULT_ROUTE)[1]


def is_model_available() -> bool:
    """Check if the completion service is configured."""
    return bool(config.OPENAI_API_KEY)
