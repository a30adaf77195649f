"""User endpoints. Registration, login and recovery are public; the rest require a token."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.core.dependencies import require_auth
from api.core.errors import send_error_message
from api.core.rate_limiter import rate_limit_ip
from api.db.models import User
from api.schemas.users import LoginRequest, RecoveryRequest, UserCreate, UserResponse, UserUpdate
from api.services.user_service import (
    InvalidCredentialsError,
    RecoveryEmailError,
    UserExistsError,
    UserService,
)

router = APIRouter(prefix="/users", tags=["users"])

CATEGORY = "USUARIOS"
NOT_FOUND = "Usuário não encontrado"
EMAIL_IN_USE = "E-mail já cadastrado"
authenticated = [Depends(require_auth)]


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService nao configurado")
    return svc


def _user_body(user: User) -> dict:
    return UserResponse.model_validate(user).to_wire()


@router.post("/")
def create_user(request: Request, payload: UserCreate):
    action = "CADASTRO DE USUARIO"
    try:
        user = _get_user_service(request).create_user(payload)
    except UserExistsError:
        return send_error_message(request, None, CATEGORY, action, 409, "warning", EMAIL_IN_USE)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao gerar o cadastro do usuário, tente novamente mais tarde",
        )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=_user_body(user))


@router.post("/login")
def authenticate_user(request: Request, payload: LoginRequest):
    rate_limit_ip(request, "login")
    action = "AUTENTICACAO DE USUARIO"
    try:
        result = _get_user_service(request).authenticate(payload.email, payload.password)
    except InvalidCredentialsError:
        return send_error_message(request, None, CATEGORY, action, 401, "warning", "E-mail ou senha inválidos")
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao autenticar o usuário, tente novamente mais tarde",
        )
    return {"token": result.token, "user": _user_body(result.user)}


@router.post("/recovery")
def recover_user_password(request: Request, payload: RecoveryRequest):
    rate_limit_ip(request, "recovery")
    action = "RECUPERACAO DE SENHA"
    try:
        found = _get_user_service(request).recover_password(payload.email)
    except (RecoveryEmailError, SQLAlchemyError) as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao recuperar a senha do usuário, tente novamente mais tarde",
        )
    if not found:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return {"message": "Uma nova senha foi enviada para o e-mail cadastrado"}


@router.get("/", dependencies=authenticated)
def search_users(request: Request, name: Optional[str] = None, email: Optional[str] = None):
    try:
        users = _get_user_service(request).search_users(name=name, email=email)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "PESQUISA DE USUARIOS", 500, "error",
            "Falha ao pesquisar usuários, tente novamente mais tarde",
        )
    return [_user_body(user) for user in users]


@router.get("/tasks/count", dependencies=authenticated)
def count_users(request: Request):
    try:
        total = _get_user_service(request).count_users()
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, "CONTAGEM DE USUARIOS", 500, "error",
            "Falha ao obter os indicadores de usuários, tente novamente mais tarde",
        )
    return {"totalUsers": total}


@router.get("/{user_id}", dependencies=authenticated)
def find_user_by_id(request: Request, user_id: int):
    action = "PESQUISA DE USUARIO POR ID"
    try:
        user = _get_user_service(request).find_user(user_id)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao pesquisar o usuário, tente novamente mais tarde",
        )
    if user is None:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return _user_body(user)


@router.put("/{user_id}", dependencies=authenticated)
def update_user(request: Request, user_id: int, payload: UserUpdate):
    action = "ALTERAÇÃO DE USUARIO"
    try:
        user = _get_user_service(request).update_user(user_id, payload)
    except UserExistsError:
        return send_error_message(request, None, CATEGORY, action, 409, "warning", EMAIL_IN_USE)
    except SQLAlchemyError as exc:
        return send_error_message(
            request, exc, CATEGORY, action, 500, "error",
            "Falha ao alterar o cadastro do usuário, tente novamente mais tarde",
        )
    if user is None:
        return send_error_message(request, None, CATEGORY, action, 404, "warning", NOT_FOUND)
    return _user_body(user)
