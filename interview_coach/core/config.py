import os

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./interview_coach.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# Session cookie signing
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "interview_coach_session")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")
INTERVIEW_MODEL = os.getenv("INTERVIEW_MODEL", "gpt-4o")
FEEDBACK_MODEL = os.getenv("FEEDBACK_MODEL", "gpt-4o")
INTERVIEW_MAX_TOKENS = int(os.getenv("INTERVIEW_MAX_TOKENS", "512"))
FEEDBACK_MAX_TOKENS = int(os.getenv("FEEDBACK_MAX_TOKENS", "1024"))

# Google Sign-In
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
APP_URL = os.getenv("APP_URL", "http://localhost:5000")

# Web
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5000,http://localhost:3000").split(",")
    if origin.strip()
]
LOGIN_PATH = os.getenv("LOGIN_PATH", "/login")
CLIENT_DIST_DIR = os.getenv("CLIENT_DIST_DIR")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

API_VERSION = "1.0.0"
