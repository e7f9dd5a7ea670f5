from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, get_current_token
from app.core.database import get_db
from app.core.security import criar_token_jwt
from app.crud import tenants as tenants_crud
from app.crud.users import users as crud
from app.schemas.user_schema import TokenOut, UserCreate, UserOut, UserUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/users", tags=["Users"])

_BLOQUEIOS_TENANT = {
    "pending": "Conta aguardando ativação",
    "suspended": "Conta suspensa",
}


@router.post("/login", response_model=TokenOut)
def login(
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = crud.authenticate(db, email, password)
    if not user:
        raise HTTPException(status_code=401, detail="Email ou senha inválidos")

    if user.status != "active":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Usuário inativo")

    tenant = tenants_crud.buscar_tenant(db, user.tenant_id)
    if tenant is None:
        raise HTTPException(status_code=401, detail="Email ou senha inválidos")
    if tenant.status in _BLOQUEIOS_TENANT and not user.is_master_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=_BLOQUEIOS_TENANT[tenant.status])

    token = criar_token_jwt(
        user_id=user.id,
        tenant_id=user.tenant_id,
        user_type=user.user_type,
        is_master_admin=user.is_master_admin,
    )
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserOut)
def get_me(
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, current_token.sub), "Usuário não encontrado")


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ensure_unique_email(db, payload.email)

    data = payload.model_dump(exclude={"password"})
    data["created_by"] = current_token.sub
    try:
        return crud.create_with_password(db, current_token.tenant_id, data, payload.password)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Erro ao criar usuário")


@router.get("/", response_model=Page[UserOut])
def list_users(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    user_type: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"status": status_filter, "user_type": user_type},
    )
    return Page[UserOut].from_result(result)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    # só admin consulta outros usuários
    if user_id != current_token.sub and current_token.user_type != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você só pode acessar os dados do seu próprio usuário.",
        )
    return validators.ou_404(crud.get(db, current_token.tenant_id, user_id), "Usuário não encontrado")


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    is_admin = current_token.user_type == "admin"
    if user_id != current_token.sub and not is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você só pode atualizar os dados do seu próprio usuário.",
        )

    data = payload.model_dump(exclude_unset=True, exclude={"password"})
    # perfil e status só mudam pelas mãos de um admin
    if not is_admin and ({"user_type", "status"} & data.keys()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas administradores podem alterar perfil ou status.",
        )

    if payload.email:
        validators.ensure_unique_email(db, payload.email, user_id=user_id)

    data["updated_by"] = current_token.sub
    try:
        user = crud.update_with_password(db, current_token.tenant_id, user_id, data, payload.password)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Erro ao atualizar usuário")
    return validators.ou_404(user, "Usuário não encontrado")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    if user_id == current_token.sub:
        raise HTTPException(status_code=400, detail="Não é possível excluir o próprio usuário")

    try:
        deleted = crud.delete(db, current_token.tenant_id, user_id)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Usuário vinculado a outros registros")
    validators.ou_404(deleted, "Usuário não encontrado")
    return None
