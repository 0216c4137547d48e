from sqlalchemy import Column, Integer, String, Text
from interview_coach.db.base import Base


class InterviewerPersona(Base):
    __tablename__ = "interviewer_personas"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    style = Column(String, nullable=False)  # friendly / professional / challenging
    description = Column(Text, nullable=True)
    system_prompt = Column(Text, nullable=False)
    avatar_url = Column(String, nullable=True)
