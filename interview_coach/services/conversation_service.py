"""
Conversation orchestrator: opens an interview and relays each interviewer reply.

Both operations return an opened StreamRelay; the route turns its frames into
a text/event-stream response. The relay persists the assistant reply when the
upstream stream is exhausted.
"""
import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from interview_coach.core.errors import NotFoundError, ValidationError
from interview_coach.db.models import MessageRole, PracticeSession, SessionStatus
from interview_coach.llm import LLMProvider, ProviderFactory
from interview_coach.llm.router import get_model_for_feature, get_max_tokens_for_feature
from interview_coach.services import storage
from interview_coach.services.defaults import DEFAULT_PERSONA, DEFAULT_TEMPLATE
from interview_coach.services.prompts import (
    build_chat_messages,
    build_conversation_instruction,
    build_start_instruction,
)
from interview_coach.services.stream_relay import StreamRelay

logger = logging.getLogger(__name__)

FEATURE = "interview"


def _load_session(db: Session, session_id: int, user_id: str) -> PracticeSession:
    session = storage.get_session(db, session_id, user_id=user_id)
    if not session:
        raise NotFoundError("Session not found")
    return session


def resolve_persona(db: Session, session: PracticeSession):
    persona = storage.get_persona(db, session.persona_id) if session.persona_id else None
    return persona or DEFAULT_PERSONA


def resolve_template(db: Session, session: PracticeSession):
    template = storage.get_template(db, session.template_id) if session.template_id else None
    if template is None or not template.default_questions:
        return DEFAULT_TEMPLATE
    return template


def _relay(db: Session, provider: LLMProvider, session_id: int, messages, error_message: str) -> StreamRelay:
    model = get_model_for_feature(FEATURE)
    max_tokens = get_max_tokens_for_feature(FEATURE)

    def persist(text: str) -> None:
        storage.create_session_message(db, session_id, MessageRole.ASSISTANT, text)
        logger.info(f"Assistant reply stored: session_id={session_id}, chars={len(text)}")

    relay = StreamRelay(
        open_stream=lambda: provider.stream(messages=messages, model=model, max_tokens=max_tokens),
        on_complete=persist,
        error_message=error_message,
    )
    return relay.open()


def start_session(
    db: Session,
    get_provider: ProviderFactory,
    session_id: int,
    user_id: str,
    rng: Optional[random.Random] = None,
) -> StreamRelay:
    """
    Move the session to in_progress and stream the interviewer's greeting.
    
    Raises:
        NotFoundError: session absent or owned by someone else
        ValidationError: session already completed
        UpstreamFailureError: completion service unconfigured or failed before the first token
    """
    session = _load_session(db, session_id, user_id)
    status = SessionStatus(session.status)

    if status is SessionStatus.COMPLETED:
        raise ValidationError("Session already completed")

    provider = get_provider()

    if status is SessionStatus.SETUP:
        storage.update_session(
            db,
            session_id,
            status=SessionStatus.IN_PROGRESS,
            started_at=storage.utcnow(),
        )
        logger.info(f"Session started: session_id={session_id}, user_id={user_id}")

    persona = resolve_persona(db, session)
    template = resolve_template(db, session)
    first_question = (rng or random).choice(list(template.default_questions))

    instruction = build_start_instruction(
        persona.system_prompt,
        session.role,
        session.company,
        first_question,
    )
    return _relay(
        db,
        provider,
        session_id,
        build_chat_messages(instruction),
        error_message="Failed to start session",
    )


def post_message(
    db: Session,
    get_provider: ProviderFactory,
    session_id: int,
    user_id: str,
    content: Optional[str],
) -> StreamRelay:
    """
    Store the candidate's message and stream the interviewer's reply.
    
    Raises:
        ValidationError: content missing or blank (nothing is stored)
        NotFoundError: session absent or owned by someone else
        UpstreamFailureError: completion service unconfigured or failed before the first token
    """
    if not isinstance(content, str) or not content.strip():
        raise ValidationError.for_fields(
            "Message content is required",
            {"content": ["Message content is required"]},
        )

    session = _load_session(db, session_id, user_id)

    provider = get_provider()
    storage.create_session_message(db, session_id, MessageRole.USER, content)

    # History is re-read after the append; concurrent posts on one session may interleave
    history = storage.get_session_messages(db, session_id)
    persona = resolve_persona(db, session)
    template = resolve_template(db, session)

    instruction = build_conversation_instruction(
        persona.system_prompt,
        session.role,
        session.company,
        list(template.default_questions),
    )
    return _relay(
        db,
        provider,
        session_id,
        build_chat_messages(instruction, history),
        error_message="Failed to send message",
    )
