"""Security module - Auth gates and authentication providers."""

from dirtyroute_core.security.auth import (
    AuthToken,
    AuthHandler,
    default_auth_handler,
    AuthProvider,
    AuthResult,
    AuthStatus,
    APIKeyAuth,
    BearerTokenAuth,
    PrivateActionGate,
)

__all__ = [
    "AuthToken",
    "AuthHandler",
    "default_auth_handler",
    "AuthProvider",
    "AuthResult",
    "AuthStatus",
    "APIKeyAuth",
    "BearerTokenAuth",
    "PrivateActionGate",
]
