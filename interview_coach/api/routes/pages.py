"""
Serves the built single-page client when CLIENT_DIST_DIR is configured.

Public pages (landing, login) are always served; every other page requires an
identity and redirects to the login path without one.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, RedirectResponse

from interview_coach.core.auth_dependency import resolve_identity
from interview_coach.core.errors import NotFoundError

logger = logging.getLogger(__name__)

PUBLIC_PAGES = {"", "login", "signup"}


def create_pages_router(dist_dir: str, login_path: str = "/login") -> APIRouter:
    router = APIRouter(tags=["Pages"])
    index_file = Path(dist_dir) / "index.html"

    @router.get("/{page_path:path}", include_in_schema=False)
    def serve_page(page_path: str, request: Request):
        page = page_path.strip("/")
        if page == "api" or page.startswith("api/"):
            raise NotFoundError("Not found")
        if page not in PUBLIC_PAGES and resolve_identity(request) is None:
            return RedirectResponse(login_path, status_code=status.HTTP_302_FOUND)
        return FileResponse(index_file)

    return router
