"""
FastAPI auth router: login, callback, /me, logout.

Builds an APIRouter around a provider strategy (e.g. DoctapeStrategy) and
keeps the verified user in the Starlette session.
"""

import logging

import httpx
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from doctape_auth.profile import Profile
from doctape_auth.protocol import OAuthProvider

logger = logging.getLogger(__name__)


def create_auth_router(provider: OAuthProvider, prefix: str = "/auth/doctape"):
    """
    Create an APIRouter with {prefix}, {prefix}/callback, /me, and /logout endpoints.

    The user returned by the provider's verify callback is stored in the
    Starlette session, so it must be JSON-serializable; a Profile is stored
    as Profile.to_dict(). Errors raised by verify are not handled here.
    """
    router = APIRouter()
    login_name = f"{provider.name}_login"
    callback_name = f"{provider.name}_callback"

    @router.get(prefix, name=login_name)
    async def login(request: Request):
        """Redirect the user to the provider's authorization page."""
        return await provider.login_redirect(request, str(request.url_for(callback_name)))

    @router.get(f"{prefix}/callback", name=callback_name)
    async def auth_callback(request: Request):
        """Handle OAuth callback: exchange code, fetch profile, verify, store user, redirect to /me."""
        try:
            token, profile = await provider.handle_callback(request)
        except OAuthError as e:
            logger.warning("%s authorization failed: %s", provider.name, e)
            return JSONResponse({"error": str(e)}, status_code=400)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("%s profile fetch failed: %r", provider.name, e)
            return JSONResponse({"error": "profile fetch failed"}, status_code=502)

        user = await provider.verify_user(token, profile)
        if not user:
            return JSONResponse({"error": "authentication rejected"}, status_code=401)

        if isinstance(user, Profile):
            user = user.to_dict()
        request.session["user"] = user
        request.session["provider"] = provider.name
        return RedirectResponse(url="/me")

    @router.get("/me")
    async def me(request: Request):
        """Return current user; redirect to the login route if not authenticated."""
        if "user" not in request.session:
            return RedirectResponse(url=str(request.url_for(login_name)))
        return {
            "user": request.session["user"],
            "provider": request.session.get("provider"),
        }

    @router.get("/logout")
    async def logout(request: Request):
        """Clear session and redirect to home."""
        request.session.clear()
        return RedirectResponse(url="/")

    return router
