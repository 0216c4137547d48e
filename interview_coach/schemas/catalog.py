"""
Pydantic schemas for templates, personas and built-in defaults.
"""
from typing import List, Optional
from pydantic import Field

from interview_coach.schemas.common import CamelModel


class TemplateResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    category: str = Field(..., description="behavioral, technical, sales or presentation")
    rubric_items: List[str] = Field(default_factory=list)
    default_questions: List[str] = Field(default_factory=list)
    difficulty: Optional[str] = Field("medium", description="easy, medium or hard")


class PersonaResponse(CamelModel):
    id: int
    name: str
    style: str = Field(..., description="friendly, professional or challenging")
    description: Optional[str] = None
    system_prompt: str
    avatar_url: Optional[str] = None


class DefaultTemplate(CamelModel):
    name: str
    category: str
    description: str
    rubric_items: List[str]
    default_questions: List[str]
    difficulty: str


class DefaultPersona(CamelModel):
    name: str
    style: str
    description: str
    system_prompt: str
    avatar_url: Optional[str] = None


class DefaultsResponse(CamelModel):
    templates: List[DefaultTemplate]
    personas: List[DefaultPersona]
    rubric: List[str]
