"""
dominion.api.deps — FastAPI dependency injection
=================================================

Engine and config singletons, and the bearer-token guard for the sync
admin routes.  Tokens are HS256 JWTs minted by the platform's auth
service; a caller may trigger syncs if the token marks it as an admin or
carries the ``content:sync`` scope.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Annotated

import jwt
from fastapi import Depends, Header, HTTPException, status
from jwt.exceptions import InvalidTokenError
from sqlalchemy import Engine

from dominion.config import DominionConfig, load_config
from dominion.database.engine import create_db_engine

JWT_ALGORITHM = "HS256"
SYNC_SCOPE = "content:sync"

_MIN_SECRET_LENGTH = 32
_WEAK_SECRETS = frozenset({
    "dominion-dev-secret-change-me",
    "change-me",
    "changeme",
    "secret",
    "password",
    "dev",
})


# ---------------------------------------------------------------------------
# Signing secret
# ---------------------------------------------------------------------------
def _secret_problem(secret: str) -> str | None:
    if not secret:
        return "environment variable is not set"
    if secret.lower() in _WEAK_SECRETS:
        return f"is set to a known weak default ('{secret}')"
    if len(secret) < _MIN_SECRET_LENGTH:
        return (
            f"is too short ({len(secret)} chars); "
            f"at least {_MIN_SECRET_LENGTH} are required"
        )
    return None


def _load_jwt_secret() -> str:
    """Read JWT_SECRET and refuse to start the API with a guessable one."""
    secret = os.getenv("JWT_SECRET", "").strip()
    problem = _secret_problem(secret)
    if problem:
        raise RuntimeError(
            f"JWT_SECRET {problem}. Generate one with: "
            "python -c \"import secrets; print(secrets.token_urlsafe(64))\""
        )
    return secret


JWT_SECRET: str = _load_jwt_secret()


# ---------------------------------------------------------------------------
# Singletons
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> DominionConfig:
    return load_config()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
def _may_sync(claims: dict) -> bool:
    if claims.get("is_admin"):
        return True
    scopes = claims.get("scope", "")
    if isinstance(scopes, str):
        scopes = scopes.split()
    return SYNC_SCOPE in scopes


def get_current_admin(
    authorization: Annotated[str | None, Header()] = None,
) -> dict:
    """Decode the bearer token; 401 if absent or invalid, 403 if not allowed to sync."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Missing token")
    try:
        claims = jwt.decode(token.strip(), JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token")
    if not _may_sync(claims):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Not allowed to manage content sync")
    return claims


AdminDep = Annotated[dict, Depends(get_current_admin)]
EngineDep = Annotated[Engine, Depends(get_engine)]
ConfigDep = Annotated[DominionConfig, Depends(get_config)]
