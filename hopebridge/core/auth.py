"""Caller identity boundary.

Token issuance and verification live outside this service; here a bearer
token is only mapped to a role through an injected resolver.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import hashlib
from typing import Protocol

from fastapi import Depends
from fastapi import Request

from hopebridge.core.errors import AppError
from hopebridge.core.errors import ErrorCode

MANAGER_ROLES = frozenset({"admin", "manager"})


@dataclass(frozen=True)
class CallerIdentity:
    """Resolved caller. ``subject`` is a stable, non-secret handle used for task assignment."""

    subject: str
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES


class IdentityResolver(Protocol):
    def resolve(self, token: str) -> CallerIdentity | None: ...


def token_subject(token: str) -> str:
    """Derive the public subject handle for a bearer token."""
    return hashlib.sha256(token.encode()).hexdigest()[:16]


class StaticTokenResolver:
    """Resolve callers from a fixed token to role table."""

    def __init__(self, tokens: Mapping[str, str]) -> None:
        self._tokens = dict(tokens)

    def resolve(self, token: str) -> CallerIdentity | None:
        role = self._tokens.get(token)
        if role is None:
            return None
        return CallerIdentity(subject=token_subject(token), role=role)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_caller(request: Request) -> CallerIdentity | None:
    """Resolve the calling identity, or ``None`` for anonymous requests."""
    token = _bearer_token(request)
    if token is None:
        return None
    resolver: IdentityResolver = request.app.state.identity_resolver
    return resolver.resolve(token)


def ensure_authenticated(caller: CallerIdentity | None) -> CallerIdentity:
    if caller is None:
        raise AppError(ErrorCode.UNAUTHORIZED, "You must be logged in to access this resource.")
    return caller


def ensure_manager_access(caller: CallerIdentity | None) -> CallerIdentity:
    """Require an authenticated caller with a manager role."""
    caller = ensure_authenticated(caller)
    if not caller.is_manager:
        raise AppError(
            ErrorCode.UNAUTHORIZED,
            "You do not have permission to access this resource.",
            {"role": caller.role},
            http_status=403,
        )
    return caller


def require_caller(caller: CallerIdentity | None = Depends(get_caller)) -> CallerIdentity:
    """Dependency form of :func:`ensure_authenticated`."""
    return ensure_authenticated(caller)


def require_manager(caller: CallerIdentity | None = Depends(get_caller)) -> CallerIdentity:
    """Dependency form of :func:`ensure_manager_access`."""
    return ensure_manager_access(caller)
