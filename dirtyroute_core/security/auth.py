"""Auth Gate - Authorization check run between match and handler.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hmac
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Optional

if TYPE_CHECKING:
    from dirtyroute_core.gateway.request import Request
    from dirtyroute_core.routing.action import Action

logger = logging.getLogger(__name__)


@dataclass
class AuthToken:
    """Outcome of an auth gate.

    ``status_code == 0`` with no ``error`` means "allowed, continue".
    Any other status is a denial; ``handle_error`` tells the router
    whether to report the denial or quietly try the next action.
    """

    status_code: int = 0
    handle_error: bool = True
    error: Optional[str] = None

    @property
    def allowed(self) -> bool:
        """Check if dispatch may continue to the handler."""
        return self.status_code == 0 and self.error is None


AuthHandler = Callable[["Action", "Request"], AuthToken]


def default_auth_handler(action: "Action", request: "Request") -> AuthToken:
    """Allow every action, private or not."""
    return AuthToken(status_code=0, handle_error=True)


class AuthStatus(Enum):
    """Authentication status."""

    SUCCESS = auto()
    FAILED = auto()
    MISSING = auto()


@dataclass
class AuthResult:
    """Result of authentication attempt."""

    status: AuthStatus
    identity: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        """Check if authentication succeeded."""
        return self.status == AuthStatus.SUCCESS


class AuthProvider(ABC):
    """Abstract authentication provider."""

    @abstractmethod
    def authenticate(self, request: "Request") -> AuthResult:
        """Authenticate a request.

        Args:
            request: Incoming request

        Returns:
            AuthResult with authentication status
        """
        pass

    @abstractmethod
    def get_credentials(self, request: "Request") -> Optional[str]:
        """Extract credentials from request."""
        pass

    def _lookup(self, table: Dict[str, str], secret: str) -> Optional[str]:
        """Constant-time search of a secret -> identity table."""
        found = None
        for known, identity in table.items():
            if hmac.compare_digest(known.encode(), secret.encode()):
                found = identity
        return found


class APIKeyAuth(AuthProvider):
    """API key read from a header or query parameter."""

    def __init__(
        self,
        keys: Optional[Dict[str, str]] = None,
        header_name: str = "X-API-Key",
        query_param: str = "api_key",
    ):
        self._keys = dict(keys or {})  # key -> identity
        self._header_name = header_name
        self._query_param = query_param

    def add_key(self, key: str, identity: str) -> "APIKeyAuth":
        """Add an API key."""
        self._keys[key] = identity
        return self

    def generate_key(self, identity: str) -> str:
        """Generate a new API key."""
        key = secrets.token_urlsafe(32)
        self._keys[key] = identity
        return key

    def revoke_key(self, key: str) -> bool:
        """Revoke an API key."""
        return self._keys.pop(key, None) is not None

    def authenticate(self, request: "Request") -> AuthResult:
        key = self.get_credentials(request)
        if not key:
            return AuthResult(status=AuthStatus.MISSING, error="no api key provided")

        identity = self._lookup(self._keys, key)
        if identity is None:
            return AuthResult(status=AuthStatus.FAILED, error="invalid api key")
        return AuthResult(status=AuthStatus.SUCCESS, identity=identity)

    def get_credentials(self, request: "Request") -> Optional[str]:
        key = request.get_header(self._header_name)
        if key:
            return key
        return request.query.get(self._query_param)


class BearerTokenAuth(AuthProvider):
    """Bearer token read from the Authorization header."""

    def __init__(self, tokens: Optional[Dict[str, str]] = None):
        self._tokens = dict(tokens or {})  # token -> identity

    def add_token(self, token: str, identity: str) -> "BearerTokenAuth":
        """Add a bearer token."""
        self._tokens[token] = identity
        return self

    def generate_token(self, identity: str) -> str:
        """Generate a new bearer token."""
        token = secrets.token_urlsafe(32)
        self._tokens[token] = identity
        return token

    def authenticate(self, request: "Request") -> AuthResult:
        token = self.get_credentials(request)
        if not token:
            return AuthResult(status=AuthStatus.MISSING, error="no bearer token provided")

        identity = self._lookup(self._tokens, token)
        if identity is None:
            return AuthResult(status=AuthStatus.FAILED, error="invalid token")
        return AuthResult(status=AuthStatus.SUCCESS, identity=identity)

    def get_credentials(self, request: "Request") -> Optional[str]:
        header = request.get_header("Authorization")
        if header.startswith("Bearer "):
            return header[7:]
        return None


class PrivateActionGate:
    """Auth gate guarding actions flagged ``private``.

    Public actions always pass. Private actions pass only when the
    provider authenticates the request; the identity is stored on the
    request context under ``"identity"``.

    With ``handle_error=False`` a denial is silent and the router keeps
    scanning, so a public action registered after a private one with
    the same pattern serves unauthenticated callers.

    Usage:
        router.auth_handler = PrivateActionGate(APIKeyAuth({"k1": "alice"}))
    """

    def __init__(
        self,
        provider: AuthProvider,
        status_code: int = 401,
        handle_error: bool = True,
    ):
        self.provider = provider
        self.status_code = status_code
        self.handle_error = handle_error

    def __call__(self, action: "Action", request: "Request") -> AuthToken:
        if not action.private:
            return AuthToken()

        result = self.provider.authenticate(request)
        if result.is_authenticated:
            request.context["identity"] = result.identity
            return AuthToken()

        logger.info(f"Denied {action.name}: {result.error}")
        return AuthToken(
            status_code=self.status_code,
            handle_error=self.handle_error,
            error=result.error or "access denied",
        )


__all__ = [
    "AuthToken",
    "AuthHandler",
    "default_auth_handler",
    "AuthStatus",
    "AuthResult",
    "AuthProvider",
    "APIKeyAuth",
    "BearerTokenAuth",
    "PrivateActionGate",
]
