from sqlalchemy import Column, Integer, String, Text, JSON
from interview_coach.db.base import Base


class PracticeTemplate(Base):
    """A reusable interview scenario: category, rubric and default questions."""
    __tablename__ = "practice_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False)  # behavioral / technical / sales / presentation
    rubric_items = Column(JSON, nullable=False, default=list)
    default_questions = Column(JSON, nullable=False, default=list)
    difficulty = Column(String, default="medium")  # easy / medium / hard

    def __repr__(self):
        return f"<PracticeTemplate(id={self.id}, name='{self.name}')>"
