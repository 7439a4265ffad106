from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from doctape_auth import DoctapeOptions, DoctapeStrategy, Profile, create_auth_router


def accept_all(access_token: str, refresh_token: str | None, profile: Profile):
    return profile.to_dict()


@pytest.fixture
def options() -> DoctapeOptions:
    return DoctapeOptions(
        client_id="abc",
        client_secret="shhh-its-a-secret",
        callback_url="https://www.example.net/auth/doctape/callback",
    )


@pytest.fixture
def strategy(options: DoctapeOptions) -> DoctapeStrategy:
    return DoctapeStrategy(options, accept_all)


@pytest.fixture
def app(strategy: DoctapeStrategy) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    app.include_router(create_auth_router(strategy))
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
