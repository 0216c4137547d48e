import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from interview_coach.core import config
from interview_coach.core.errors import InterviewCoachError
from interview_coach.core.logging_config import setup_logging
from interview_coach.api.routes import auth, catalog, health, preferences, sessions, stats
from interview_coach.api.routes.google_auth import GoogleAuthConfig, create_google_auth_router
from interview_coach.api.routes.pages import create_pages_router
from interview_coach.db.init_db import init_db
from interview_coach.db.seed import initialize_defaults
from interview_coach.db.session import SessionLocal
from interview_coach.services import user_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    init_db()
    db = SessionLocal()
    try:
        initialize_defaults(db)
    finally:
        db.close()
    logger.info("Interview Coach API started")
    yield


# ============================================
# FASTAPI APP INIT
# ============================================

app = FastAPI(title="Interview Coach API", version=config.API_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SECRET_KEY,
    session_cookie=config.SESSION_COOKIE_NAME,
    max_age=config.SESSION_MAX_AGE,
    same_site="lax",
    https_only=config.APP_URL.startswith("https://"),
)


# ============================================
# ERROR HANDLERS
# ============================================

@app.exception_handler(InterviewCoachError)
async def interview_coach_error_handler(request: Request, exc: InterviewCoachError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field_errors.setdefault(".".join(loc) or "body", []).append(error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "details": {"fieldErrors": field_errors}},
    )


# ============================================
# REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(sessions.router)
app.include_router(stats.router)
app.include_router(preferences.router)


def _remember_google_user(profile: dict) -> None:
    db = SessionLocal()
    try:
        user_service.upsert_google_user(db, profile)
    finally:
        db.close()


if config.GOOGLE_CLIENT_ID and config.GOOGLE_CLIENT_SECRET:
    google_config = GoogleAuthConfig(
        client_id=config.GOOGLE_CLIENT_ID,
        client_secret=config.GOOGLE_CLIENT_SECRET,
        redirect_uri=f"{config.APP_URL}/api/google-auth/google/callback",
        success_redirect="/",
        failure_redirect="/",
        on_user_authenticated=_remember_google_user,
    )
    app.include_router(create_google_auth_router(google_config), prefix="/api/google-auth")
    logger.info("Google Sign-In enabled")


if config.CLIENT_DIST_DIR:
    assets_dir = Path(config.CLIENT_DIST_DIR) / "assets"
    if assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=str(assets_dir)), name="assets")
    app.include_router(create_pages_router(config.CLIENT_DIST_DIR, config.LOGIN_PATH))
