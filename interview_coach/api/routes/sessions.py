"""
Practice session endpoints.

Creation, listing, detail and deletion are plain JSON; start and messages
stream the interviewer's reply as text/event-stream frames.
"""
import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import get_current_user_id, get_db
from interview_coach.core.errors import NotFoundError
from interview_coach.llm import ProviderFactory, get_provider_factory
from interview_coach.schemas.session import (
    FeedbackResponse,
    MessageCreate,
    MessageResponse,
    SessionCreate,
    SessionResponse,
)
from interview_coach.services import conversation_service, evaluation_service, storage
from interview_coach.services.stream_relay import SSE_HEADERS, StreamRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def _session_payload(session, feedback=None, messages=None) -> Dict[str, Any]:
    """Session fields plus optional messages; feedback key only when it exists."""
    payload = _dump(SessionResponse.model_validate(session))
    if messages is not None:
        payload["messages"] = [_dump(MessageResponse.model_validate(m)) for m in messages]
    if feedback is not None:
        payload["feedback"] = _dump(FeedbackResponse.model_validate(feedback))
    return payload


def _event_stream(relay: StreamRelay) -> StreamingResponse:
    return StreamingResponse(relay.stream(), media_type="text/event-stream", headers=SSE_HEADERS)


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionResponse])
def list_sessions(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Sessions owned by the authenticated user, newest first."""
    return storage.get_sessions(db, user_id)


@router.get("/{session_id}", status_code=status.HTTP_200_OK)
def get_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Session with its ordered transcript and feedback, if any."""
    session = storage.get_session(db, session_id, user_id=user_id)
    if not session:
        raise NotFoundError("Session not found")
    messages = storage.get_session_messages(db, session_id)
    feedback = storage.get_session_feedback(db, session_id)
    return _session_payload(session, feedback=feedback, messages=messages)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SessionResponse)
def create_session(
    session_data: SessionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Create a session in `setup` status.
    
    Referenced template and persona must exist.
    """
    if session_data.template_id is not None and not storage.get_template(db, session_data.template_id):
        raise NotFoundError("Template not found")
    if session_data.persona_id is not None and not storage.get_persona(db, session_data.persona_id):
        raise NotFoundError("Persona not found")

    session = storage.create_session(
        db,
        user_id=user_id,
        template_id=session_data.template_id,
        persona_id=session_data.persona_id,
        role=session_data.role,
        company=session_data.company,
    )
    logger.info(f"Session created: session_id={session.id}, user_id={user_id}, template_id={session.template_id}")
    return session


@router.post("/{session_id}/start")
def start_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    get_provider: ProviderFactory = Depends(get_provider_factory),
):
    relay = conversation_service.start_session(db, get_provider, session_id, user_id)
    return _event_stream(relay)


@router.post("/{session_id}/messages")
def post_message(
    session_id: int,
    message: MessageCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    get_provider: ProviderFactory = Depends(get_provider_factory),
):
    relay = conversation_service.post_message(db, get_provider, session_id, user_id, message.content)
    return _event_stream(relay)


@router.post("/{session_id}/end", status_code=status.HTTP_200_OK)
def end_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    get_provider: ProviderFactory = Depends(get_provider_factory),
):
    """Complete the session; the response carries `feedback` only when one was produced."""
    session, feedback = evaluation_service.end_session(db, get_provider, session_id, user_id)
    return _session_payload(session, feedback=feedback)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete a session with its messages and feedback; unknown ids are a no-op."""
    storage.delete_session(db, session_id, user_id=user_id)
    logger.info(f"Session deleted: session_id={session_id}, user_id={user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
