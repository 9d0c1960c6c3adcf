"""
Bearer token validation for reader and admin routes.

Tokens are HS256 JWTs issued by the auth service: `sub` identifies the reader,
`role` decides admin access. The role is checked here, server side; the client's
own gating is a convenience only.
"""
import logging
import time

import jwt
from fastapi import Header

from ishaazi.config import settings
from ishaazi.core.errors import (
    MSG_ADMIN_REQUIRED,
    STATUS_FORBIDDEN,
    AuthorizationError,
)

logger = logging.getLogger(__name__)


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT.
    Raises AuthorizationError (401) when it is invalid or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])
    except jwt.PyJWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise AuthorizationError("Invalid token")
    if not payload.get("sub"):
        raise AuthorizationError("Token without subject")
    return payload


def parse_authorization_header(authorization_header: str | None) -> dict:
    """
    Take the header `Authorization: Bearer <token>`, validate it and return the payload.
    Raises AuthorizationError (401) if missing or invalid.
    """
    if not authorization_header:
        raise AuthorizationError("Missing Authorization header")
    if not authorization_header.startswith("Bearer "):
        raise AuthorizationError("Invalid Authorization header format")
    token = authorization_header.removeprefix("Bearer ").strip()
    return decode_token(token)


def is_admin(payload: dict) -> bool:
    return payload.get("role") in settings.admin_role_set


def get_current_user(authorization: str | None = Header(None)) -> dict:
    """Dependency: any authenticated reader."""
    return parse_authorization_header(authorization)


def get_optional_user(authorization: str | None = Header(None)) -> dict | None:
    """Dependency: payload when a valid token is sent, else None (public routes)."""
    if not authorization:
        return None
    try:
        return parse_authorization_header(authorization)
    except AuthorizationError:
        return None


def require_admin(authorization: str | None = Header(None)) -> dict:
    """Dependency: authenticated caller whose role is in ADMIN_ROLES (403 otherwise)."""
    payload = parse_authorization_header(authorization)
    if not is_admin(payload):
        logger.info("Admin route refused for sub=%s role=%s", payload.get("sub"), payload.get("role"))
        raise AuthorizationError(MSG_ADMIN_REQUIRED, status_code=STATUS_FORBIDDEN)
    return payload


def create_token(subject: str, role: str | None = None, expires_in_seconds: int | None = None) -> str:
    """Issue a token (local development and tests; production tokens come from the auth service)."""
    claims: dict = {"sub": subject, "iat": int(time.time())}
    if role:
        claims["role"] = role
    if expires_in_seconds:
        claims["exp"] = int(time.time()) + expires_in_seconds
    token = jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_alg)
    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return token
