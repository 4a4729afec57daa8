from typing import Mapping, Protocol

from fastapi import Request

from app.core.config import get_auth_identity_header
from app.core.errors import AuthenticationError


class AuthProvider(Protocol):
    def get_current_identity(self) -> str: ...


class StaticAuthProvider:
    """Always resolves to the same identity."""

    def __init__(self, identity: str) -> None:
        self._identity = identity

    def get_current_identity(self) -> str:
        return self._identity


class HeaderAuthProvider:
    """Resolve the caller from a header populated by the fronting auth proxy."""

    def __init__(self, headers: Mapping[str, str], header_name: str | None = None) -> None:
        self._headers = headers
        self._header_name = header_name or get_auth_identity_header()

    def get_current_identity(self) -> str:
        identity = (self._headers.get(self._header_name) or "").strip()
        if not identity:
            raise AuthenticationError(f"Missing identity header {self._header_name}")
        return identity


def get_auth_provider(request: Request) -> AuthProvider:
    return HeaderAuthProvider(request.headers)
