"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import ApiError
from .security import TokenError, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """Valida o token bearer antes do handler; devolve as claims do token."""
    if credentials is None or not credentials.credentials:
        raise ApiError(
            "Token de autenticação não informado",
            401,
            "warning",
            category="AUTENTICACAO",
            action="VALIDACAO DE TOKEN",
            headers=_CHALLENGE,
        )
    try:
        claims = decode_access_token(credentials.credentials)
    except TokenError:
        raise ApiError(
            "Token de autenticação inválido ou expirado",
            401,
            "warning",
            category="AUTENTICACAO",
            action="VALIDACAO DE TOKEN",
            headers=_CHALLENGE,
        )
    request.state.user_id = claims["sub"]
    return claims
