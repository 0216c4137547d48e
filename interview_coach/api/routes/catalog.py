"""
Read-only catalog endpoints: templates, personas and built-in defaults.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from interview_coach.core.auth_dependency import get_db
from interview_coach.schemas.catalog import DefaultsResponse, PersonaResponse, TemplateResponse
from interview_coach.services import storage
from interview_coach.services.defaults import defaults_payload

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/templates", status_code=status.HTTP_200_OK, response_model=List[TemplateResponse])
def list_templates(db: Session = Depends(get_db)):
    return storage.get_templates(db)


@router.get("/personas", status_code=status.HTTP_200_OK, response_model=List[PersonaResponse])
def list_personas(db: Session = Depends(get_db)):
    return storage.get_personas(db)


@router.get("/defaults", status_code=status.HTTP_200_OK, response_model=DefaultsResponse)
def get_defaults():
    """Built-in templates and personas, for client-side fallback rendering."""
    return defaults_payload()
