import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- IMPORTAÇÃO DOS MODELOS ---
# Precisam estar importados antes do create_all
from src.models.base import utc_now
from src.models.todo import Todo
from src.models.user import User, UserRole
# Mesma tabela de papéis usada pelo cliente
from src.services import role_policy

# --- IMPORTAÇÕES DO BACKEND ---
from backend.database import async_session, get_session, init_db
from backend.security import hash_password, issue_token, parse_bearer, verify_password

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("Backend")


class LoginRequest(SQLModel):
    email: str
    password: str

class ChangeRoleRequest(SQLModel):
    email: str
    newRole: str

class TodoCreate(SQLModel):
    title: str


async def seed_admin_if_empty():
    """
    SEED: Cria um superAdmin padrão se não houver usuários.
    Essencial para o primeiro acesso ao painel.
    """
    async with async_session() as session:
        result = await session.exec(select(User))
        if result.first():
            return
        admin = User(
            name=os.getenv("ADMIN_NAME", "Super Admin"),
            email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
            password_hash=hash_password(os.getenv("ADMIN_PASSWORD", "admin123")),
            role=UserRole.SUPER_ADMIN.value,
        )
        session.add(admin)
        await session.commit()
        logger.info(f"--- SEED: superAdmin criado: {admin.email} ---")

@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    await seed_admin_if_empty()
    yield

app = FastAPI(title="Login API - Users & Roles", lifespan=lifespan)


# --- Formato de erro: sempre {"message": ...} ---

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request.", "errors": jsonable_encoder(exc.errors())},
    )


# --- Dependências de autenticação ---

async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> User:
    token = parse_bearer(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated. Missing bearer token.")

    result = await session.exec(select(User).where(User.token == token))
    user = result.first()
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")
    return user

async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not role_policy.is_admin_role(user.role):
        raise HTTPException(status_code=403, detail="Access denied. Administrative privileges required.")
    return user


@app.get("/")
async def root():
    return {
        "status": "online",
        "roles": role_policy.AVAILABLE_ROLES,
        "time": datetime.now(timezone.utc).isoformat()
    }

# --- AUTH ---

@app.post("/api/auth/login")
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_session)):
    result = await session.exec(select(User).where(User.email == payload.email))
    user = result.first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    user.token = issue_token()
    user.updated_at = utc_now()
    session.add(user)
    await session.commit()

    return {"token": user.token, **user.to_api()}

@app.get("/api/auth/users")
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=100, ge=1, le=100),
    actor: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    total = (await session.exec(select(func.count()).select_from(User))).one()
    statement = (
        select(User)
        .order_by(User.created_at, User.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    users = (await session.exec(statement)).all()
    return {
        "users": [user.to_api() for user in users],
        "page": page,
        "limit": limit,
        "total": total,
    }

@app.put("/api/auth/changeRole")
async def change_role(
    payload: ChangeRoleRequest,
    actor: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    if payload.newRole not in role_policy.ROLE_LEVELS:
        raise HTTPException(status_code=400, detail=f"Invalid role: {payload.newRole}")

    result = await session.exec(select(User).where(User.email == payload.email))
    target = result.first()
    if not target:
        raise HTTPException(status_code=404, detail="User not found.")

    is_self = target.id == actor.id
    if not role_policy.can_change_role(actor.role, target.role, payload.newRole, is_self):
        raise HTTPException(status_code=403, detail="You do not have permission to change this user's role.")

    target.role = payload.newRole
    target.updated_at = utc_now()
    session.add(target)
    await session.commit()

    return {"message": f"Role for {target.email} updated to {payload.newRole}."}

@app.delete("/api/auth/users/{user_id}")
async def delete_user(
    user_id: str,
    actor: User = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    target = await session.get(User, user_id)
    if not target:
        raise HTTPException(status_code=404, detail="User not found.")

    is_self = target.id == actor.id
    if not role_policy.can_delete(actor.role, target.role, is_self):
        raise HTTPException(status_code=403, detail="You do not have permission to delete this user.")

    # Remove os todos do usuário junto
    todos = (await session.exec(select(Todo).where(Todo.user_id == target.id))).all()
    for todo in todos:
        await session.delete(todo)

    email = target.email
    await session.delete(target)
    await session.commit()

    return {"message": f"User {email} deleted successfully."}

# --- TODOS ---

@app.get("/api/todos/user/{user_id}")
async def list_user_todos(
    user_id: str,
    actor: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    if actor.id != user_id and not role_policy.is_admin_role(actor.role):
        raise HTTPException(status_code=403, detail="You can only view your own todos.")

    if not await session.get(User, user_id):
        raise HTTPException(status_code=404, detail="User not found.")

    statement = select(Todo).where(Todo.user_id == user_id).order_by(Todo.created_at, Todo.id)
    todos = (await session.exec(statement)).all()
    return {"todos": [todo.to_api() for todo in todos]}

@app.post("/api/todos", status_code=201)
async def create_todo(
    payload: TodoCreate,
    actor: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    todo = Todo(user_id=actor.id, title=payload.title)
    session.add(todo)
    await session.commit()
    return todo.to_api()
