"""Caller authentication for the HTTP API.

Issuing tokens and checking passwords belong to the authentication service.
This module only turns an ``Authorization: Bearer <token>`` header into a
``Caller`` through whichever ``TokenResolver`` the application was built with.
"""

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request

from storefront.utils.config import get_api_tokens
from storefront.utils.logging import add_context


@dataclass(frozen=True)
class Caller:
    user_id: str
    is_admin: bool = False


TokenResolver = Callable[[str], Caller | None]


class StaticTokenResolver:
    """Resolves tokens from a fixed table.

    The table can be parsed from ``token:user_id[:admin]`` entries separated
    by commas, which is how ``STOREFRONT_API_TOKENS`` is written.
    """

    def __init__(self, tokens: dict[str, Caller] | None = None) -> None:
        self.tokens = dict(tokens or {})

    @classmethod
    def from_string(cls, raw: str) -> "StaticTokenResolver":
        tokens = {}
        for entry in raw.split(","):
            entry = entry.strip()
            if not entry:
                continue
            parts = entry.split(":")
            if len(parts) < 2 or not parts[0] or not parts[1]:
                raise ValueError(f"Malformed token entry: {entry!r}")
            tokens[parts[0]] = Caller(user_id=parts[1], is_admin=len(parts) > 2 and parts[2] == "admin")
        return cls(tokens)

    @classmethod
    def from_env(cls) -> "StaticTokenResolver":
        return cls.from_string(get_api_tokens())

    def __call__(self, token: str) -> Caller | None:
        return self.tokens.get(token)


def get_caller(request: Request, authorization: str | None = Header(default=None)) -> Caller:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="No token provided")

    caller = request.app.state.token_resolver(token.strip())
    if caller is None:
        raise HTTPException(status_code=403, detail="Invalid or expired token")

    add_context(user_id=caller.user_id)
    return caller


def require_admin(caller: Caller = Depends(get_caller)) -> Caller:
    if not caller.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return caller
