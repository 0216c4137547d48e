from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models are registered through interview_coach.db.models; import that package
# before calling Base.metadata.create_all
