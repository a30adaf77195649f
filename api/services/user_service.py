"""
User and authentication use cases (registration, profile update, login,
password recovery).
"""

from __future__ import annotations

from dataclasses import dataclass
import html
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from api.core.mailer import send_email
from api.core.security import create_access_token, generate_password, hash_password, verify_password
from api.core.utils import format_database_datetime
from api.db.models import User
from api.db.session import transaction
from api.repositories.user_repository import UserRepository
from api.schemas.users import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserError(Exception):
    """Base class for user workflow errors."""


class UserExistsError(UserError):
    pass


class InvalidCredentialsError(UserError):
    pass


class RecoveryEmailError(UserError):
    pass


@dataclass
class LoginResult:
    token: str
    user: User


class UserService:
    def __init__(self, repository: Optional[UserRepository] = None) -> None:
        self.repository = repository or UserRepository()

    def _email_owner(self, email: str) -> Optional[User]:
        return self.repository.find_user_by_parameters([{"field": "email", "value": email}])

    # -------------------------------------- cadastro --------------------------------------
    def create_user(self, data: UserCreate) -> User:
        email = data.email.strip().lower()
        if self._email_owner(email):
            raise UserExistsError("E-mail já cadastrado")
        now = format_database_datetime()
        fields = {
            "name": data.name.strip(),
            "email": email,
            "password": hash_password(data.password),
            "created_at": now,
            "updated_at": now,
        }
        try:
            with transaction() as session:
                user = self.repository.create_user(fields, session)
                session.commit()
        except IntegrityError as exc:
            raise UserExistsError("E-mail já cadastrado") from exc
        return user

    def update_user(self, user_id: int, data: UserUpdate) -> Optional[User]:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in fields:
            fields["email"] = fields["email"].strip().lower()
            owner = self._email_owner(fields["email"])
            if owner and owner.user_id != user_id:
                raise UserExistsError("E-mail já cadastrado")
        if "password" in fields:
            fields["password"] = hash_password(fields["password"])
        fields["updated_at"] = format_database_datetime()
        try:
            with transaction() as session:
                user = self.repository.update_user(user_id, fields, session)
                if user is not None:
                    session.commit()
        except IntegrityError as exc:
            raise UserExistsError("E-mail já cadastrado") from exc
        return user

    # -------------------------------------- consultas --------------------------------------
    def search_users(self, name: Optional[str] = None, email: Optional[str] = None) -> list[User]:
        return self.repository.search_users(name=name, email=(email or "").strip().lower() or None)

    def find_user(self, user_id: int) -> Optional[User]:
        return self.repository.find_user_by_id(user_id)

    def count_users(self) -> int:
        return self.repository.count_users()

    # -------------------------------------- login --------------------------------------
    def authenticate(self, email: str, password: str) -> LoginResult:
        user = self._email_owner((email or "").strip().lower())
        if not user or not verify_password(password, user.password):
            raise InvalidCredentialsError("Credenciais inválidas")
        return LoginResult(token=create_access_token(user.user_id), user=user)

    # -------------------------------------- recuperacao de senha --------------------------------------
    def recover_password(self, email: str) -> bool:
        """
        Gera uma nova senha e envia por e-mail. Retorna False quando o e-mail
        nao pertence a nenhum usuario; a troca so e gravada se o envio der certo.

        O envio acontece antes de abrir a transacao: nenhuma escrita fica
        bloqueada esperando o servidor SMTP.
        """
        user = self._email_owner((email or "").strip().lower())
        if not user:
            return False
        new_password = generate_password()
        sent = send_email(
            "Recuperação de senha - Taskboard",
            user.email,
            self._recovery_email_html(user.name or "", new_password),
            f"Sua nova senha de acesso é: {new_password}",
        )
        if not sent:
            raise RecoveryEmailError(f"Falha ao enviar e-mail de recuperação para {user.email}")
        fields = {"password": hash_password(new_password), "updated_at": format_database_datetime()}
        with transaction() as session:
            self.repository.update_user(user.user_id, fields, session)
            session.commit()
        logger.info("Senha do usuario %s redefinida via recuperacao", user.user_id)
        return True

    def _recovery_email_html(self, name: str, password: str) -> str:
        return f"""
        <p>Olá {html.escape(name)}!</p>
        <p>Recebemos um pedido de recuperação de senha. Use a senha abaixo para entrar e altere-a em seguida:</p>
        <p style="font-size:18px;font-weight:bold;">{password}</p>
        <p>Se não foi você, entre em contato com o suporte.</p>
        """
