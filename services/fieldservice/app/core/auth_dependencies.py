from typing import Callable
from uuid import UUID

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import JWT_ALGORITHM, SECRET_KEY
from app.models.tenant import Tenant
from app.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/users/login")

ROLES = ("admin", "supervisor", "technician")

# tenants nesses status não operam, exceto pelo administrador da plataforma
TENANT_STATUS_BLOQUEADOS = ("pending", "suspended")


class TokenPayload(BaseModel):
    sub: UUID
    tenant_id: UUID
    user_type: str
    is_master_admin: bool = False


def _credenciais_invalidas(detail: str = "Credenciais inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_token(
    request: Request,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> TokenPayload:
    """
    Valida o JWT e confere no banco que o usuário e o tenant ainda podem operar.

    Perfil e flag de master admin vêm do banco, não do token, para que
    rebaixamentos valham antes do token expirar.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise _credenciais_invalidas()

    user = db.query(User).filter(User.id == token_data.sub).first()

    # garante que o tenant do token bate com o tenant do usuário
    if not user or user.tenant_id != token_data.tenant_id:
        raise _credenciais_invalidas("Usuário não encontrado ou tenant inválido")
    if user.status != "active":
        raise _credenciais_invalidas("Usuário inativo")

    tenant = db.query(Tenant).filter(Tenant.id == user.tenant_id).first()
    if tenant is None:
        raise _credenciais_invalidas("Usuário não encontrado ou tenant inválido")
    if tenant.status in TENANT_STATUS_BLOQUEADOS and not user.is_master_admin:
        raise _credenciais_invalidas("Tenant inativo")

    # o middleware de log lê o tenant do request.state ao fechar a requisição
    request.state.tenant_id = str(user.tenant_id)
    request.state.user_id = str(user.id)
    structlog.contextvars.bind_contextvars(tenant_id=str(user.tenant_id), user_id=str(user.id))

    return TokenPayload(
        sub=user.id,
        tenant_id=user.tenant_id,
        user_type=user.user_type,
        is_master_admin=user.is_master_admin,
    )


def require_roles(*roles: str) -> Callable[..., TokenPayload]:
    """Dependency que libera apenas os perfis informados."""

    def _guard(current_token: TokenPayload = Depends(get_current_token)) -> TokenPayload:
        if current_token.user_type not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permissão insuficiente para esta operação",
            )
        return current_token

    return _guard


def require_master_admin(current_token: TokenPayload = Depends(get_current_token)) -> TokenPayload:
    if not current_token.is_master_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito ao administrador da plataforma",
        )
    return current_token


any_role = require_roles(*ROLES)
admin_only = require_roles("admin")
admin_or_supervisor = require_roles("admin", "supervisor")
