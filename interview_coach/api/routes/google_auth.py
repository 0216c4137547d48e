"""
Google Sign-In sub-router (OAuth 2.0 authorization-code flow).

Mounted under /api/google-auth when GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET
are configured.
"""
import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from jose import jwt, JWTError

from interview_coach.core.auth_dependency import SESSION_GOOGLE_KEY, SESSION_OAUTH_STATE_KEY
from interview_coach.core.logging_config import sanitize_log_data
from interview_coach.schemas.auth import GoogleSessionResponse, GoogleUserProfile

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
TOKEN_EXCHANGE_TIMEOUT = 20.0


@dataclass
class GoogleAuthConfig:
    client_id: str
    client_secret: str
    redirect_uri: str
    success_redirect: str = "/"
    failure_redirect: str = "/login"
    scopes: List[str] = field(default_factory=lambda: ["openid", "email", "profile"])
    on_user_authenticated: Optional[Callable[[Dict[str, Any]], None]] = None


class TokenExchangeError(Exception):
    pass


def generate_state() -> str:
    """32 random bytes as hex, for CSRF protection of the callback."""
    return secrets.token_hex(32)


def build_authorization_url(config: GoogleAuthConfig, state: str) -> str:
    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": " ".join(config.scopes),
        "state": state,
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def exchange_code_for_tokens(config: GoogleAuthConfig, code: str) -> Dict[str, Any]:
    """
    Trade an authorization code for Google's token response.
    
    Raises:
        TokenExchangeError: Google rejected the code or could not be reached
    """
    try:
        with httpx.Client(timeout=TOKEN_EXCHANGE_TIMEOUT) as client:
            response = client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": config.client_id,
                    "client_secret": config.client_secret,
                    "redirect_uri": config.redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
    except httpx.HTTPError as e:
        raise TokenExchangeError(f"Token endpoint unreachable: {e}") from e

    if response.status_code != 200:
        raise TokenExchangeError(f"Token exchange failed: {response.status_code} {response.text}")
    return response.json()


def decode_id_token(id_token: str) -> Dict[str, Any]:
    """
    Read the claims of an id_token received directly from Google's token endpoint.
    
    The token came over TLS from Google in exchange for our client secret, so
    the payload is read without signature verification.
    """
    try:
        return jwt.get_unverified_claims(id_token)
    except JWTError as e:
        raise TokenExchangeError(f"Invalid id_token: {e}") from e


def profile_from_claims(claims: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": claims["sub"],
        "email": claims.get("email"),
        "name": claims.get("name"),
        "picture": claims.get("picture"),
        "given_name": claims.get("given_name"),
        "family_name": claims.get("family_name"),
        "email_verified": claims.get("email_verified"),
    }


def create_google_auth_router(config: GoogleAuthConfig) -> APIRouter:
    router = APIRouter(tags=["Google Auth"])

    @router.get("/google")
    def google_login(request: Request):
        state = generate_state()
        request.session[SESSION_OAUTH_STATE_KEY] = state
        return RedirectResponse(build_authorization_url(config, state), status_code=status.HTTP_302_FOUND)

    @router.get("/google/callback")
    def google_callback(
        request: Request,
        code: Optional[str] = None,
        state: Optional[str] = None,
        error: Optional[str] = None,
    ):
        failure = RedirectResponse(config.failure_redirect, status_code=status.HTTP_302_FOUND)
        logger.debug(f"OAuth callback received: {sanitize_log_data(dict(request.query_params))}")

        if error:
            logger.error(f"Google OAuth error: {error}")
            return failure
        if not code:
            logger.error("No authorization code received")
            return failure
        expected_state = request.session.pop(SESSION_OAUTH_STATE_KEY, None)
        if not expected_state or state != expected_state:
            logger.error("OAuth state mismatch")
            return failure

        try:
            tokens = exchange_code_for_tokens(config, code)
            logger.debug(f"Token exchange response: {sanitize_log_data(tokens)}")
            profile = profile_from_claims(decode_id_token(tokens["id_token"]))
        except (TokenExchangeError, KeyError) as e:
            logger.error(f"OAuth callback error: {e}")
            return failure

        if config.on_user_authenticated:
            try:
                config.on_user_authenticated(profile)
            except Exception as e:
                logger.error(f"Post-authentication hook failed: {e}", exc_info=True)
                return failure

        request.session[SESSION_GOOGLE_KEY] = profile
        logger.info(f"Google user authenticated: sub={profile['id']}")

        return RedirectResponse(config.success_redirect, status_code=status.HTTP_302_FOUND)

    @router.get("/session", response_model=GoogleSessionResponse)
    def google_session(request: Request):
        google_user = request.session.get(SESSION_GOOGLE_KEY)
        if google_user:
            return GoogleSessionResponse(is_authenticated=True, user=GoogleUserProfile(**google_user))
        return GoogleSessionResponse(is_authenticated=False, user=None)

    @router.post("/logout")
    def google_logout(request: Request):
        request.session.clear()
        return JSONResponse({"success": True})

    @router.get("/logout")
    def google_logout_redirect(request: Request):
        request.session.clear()
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)

    return router
