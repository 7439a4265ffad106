"""
FastAPI app: doctape OAuth login + session-based user.

Decisions:
- .env is loaded before building the strategy so DOCTAPE_* and SESSION_SECRET
  are available when options are read.
- verify() accepts any doctape account and keeps only the normalized profile
  fields in the session; replace it with a lookup in your user store.
- Session secret from SESSION_SECRET env; default "change-me" is for dev only.
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from doctape_auth import DoctapeStrategy, Profile, create_auth_router, options_from_env

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")


def verify(access_token: str, refresh_token: str, profile: Profile):
    """Accept every doctape account that reports a username."""
    if not profile.username:
        return False
    return profile.to_dict()


strategy = DoctapeStrategy(options_from_env(), verify)

app = FastAPI()
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)
app.include_router(create_auth_router(strategy))


@app.get("/")
async def home(request: Request):
    user = request.session.get("user")
    return {"logged_in": bool(user), "user": user}
