"""
Evaluation orchestrator: closes a session and scores the candidate's answers.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from interview_coach.core.errors import NotFoundError, UpstreamFailureError
from interview_coach.db.models import MessageRole, PracticeSession, SessionFeedback, SessionStatus
from interview_coach.llm import LLMProvider, ProviderFactory
from interview_coach.llm.router import get_model_for_feature, get_max_tokens_for_feature
from interview_coach.services import storage
from interview_coach.services.defaults import DEFAULT_RUBRIC
from interview_coach.services.prompts import build_feedback_messages

logger = logging.getLogger(__name__)

FEATURE = "feedback"


def parse_feedback_json(text: Optional[str]) -> Dict[str, Any]:
    """Best-effort parse of the model's JSON; anything unusable becomes {}."""
    if not text:
        return {}
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Feedback JSON could not be parsed, storing empty feedback: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Feedback JSON was {type(data).__name__}, expected object")
        return {}
    return data


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(round(value))
    if isinstance(value, str):
        try:
            return int(round(float(value)))
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(item) for item in value]


def feedback_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map parsed model output onto SessionFeedback columns; bad fields become None."""
    rubric_scores = data.get("rubricScores")
    if isinstance(rubric_scores, dict):
        rubric_scores = {str(key): _as_int(score) for key, score in rubric_scores.items()}
    else:
        rubric_scores = None
    summary = data.get("summary")
    return {
        "overall_score": _as_int(data.get("overallScore")),
        "rubric_scores": rubric_scores,
        "strengths": _as_str_list(data.get("strengths")),
        "improvements": _as_str_list(data.get("improvements")),
        "summary": summary if isinstance(summary, str) else None,
    }


def resolve_rubric(db: Session, session: PracticeSession) -> List[str]:
    template = storage.get_template(db, session.template_id) if session.template_id else None
    if template and template.rubric_items:
        return list(template.rubric_items)
    return list(DEFAULT_RUBRIC)


def evaluate_responses(provider: LLMProvider, rubric_items: List[str], user_responses: List[str]) -> Dict[str, Any]:
    """
    One non-streaming JSON-mode call.
    
    Raises:
        UpstreamFailureError: the completion service call failed
    """
    try:
        response = provider.chat(
            messages=build_feedback_messages(rubric_items, user_responses),
            model=get_model_for_feature(FEATURE),
            max_tokens=get_max_tokens_for_feature(FEATURE),
            json_mode=True,
        )
    except Exception as e:
        logger.error(f"Feedback generation failed: {e}", exc_info=True)
        raise UpstreamFailureError("Failed to end session") from e
    return parse_feedback_json(response.content)


def end_session(
    db: Session,
    get_provider: ProviderFactory,
    session_id: int,
    user_id: str,
) -> Tuple[PracticeSession, Optional[SessionFeedback]]:
    """
    Complete the session and, when the candidate said anything, store feedback.
    
    Re-ending a completed session keeps its completion time, and feedback is
    only generated while none exists.
    
    Raises:
        NotFoundError: session absent or owned by someone else
        UpstreamFailureError: completion service unconfigured or the evaluation call
            failed (session stays completed)
    """
    session = storage.get_session(db, session_id, user_id=user_id)
    if not session:
        raise NotFoundError("Session not found")

    if SessionStatus(session.status) is not SessionStatus.COMPLETED:
        session = storage.update_session(
            db,
            session_id,
            status=SessionStatus.COMPLETED,
            completed_at=storage.utcnow(),
        )
        logger.info(f"Session completed: session_id={session_id}, user_id={user_id}")

    feedback = storage.get_session_feedback(db, session_id)
    if feedback is None:
        messages = storage.get_session_messages(db, session_id)
        user_responses = [m.content for m in messages if MessageRole(m.role) is MessageRole.USER]

        if user_responses:
            rubric_items = resolve_rubric(db, session)
            data = evaluate_responses(get_provider(), rubric_items, user_responses)
            feedback = storage.create_session_feedback(db, session_id, **feedback_fields(data))
            logger.info(
                f"Feedback stored: session_id={session_id}, overall_score={feedback.overall_score}, "
                f"responses={len(user_responses)}"
            )
        else:
            logger.info(f"Session ended without candidate responses, skipping evaluation: session_id={session_id}")

    return session, feedback
