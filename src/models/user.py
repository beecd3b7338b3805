from typing import Any, Dict, Optional
from enum import Enum
from sqlmodel import Field, SQLModel
from .base import AuditModel

class UserRole(str, Enum):
    """
    Papéis em ordem hierárquica crescente (ver ROLE_LEVELS em role_policy).
    """
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPER_ADMIN = "superAdmin"
    MANAGER = "manager"

class User(AuditModel, table=True):
    """Registro persistido pelo backend."""
    __tablename__ = "users"

    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str  # Nunca armazenar senha em texto plano!

    role: str = Field(default=UserRole.USER.value)

    # Token de sessão opaco emitido no login
    token: Optional[str] = Field(default=None, index=True)

    def to_api(self) -> Dict[str, Any]:
        return {"_id": self.id, "name": self.name, "email": self.email, "role": self.role}

class UserRecord(SQLModel):
    """
    Linha do roster no cliente. Só é construída a partir do payload do servidor;
    o papel fica como texto para tolerar valores fora da enumeração.
    """
    id: str
    name: Optional[str] = None
    email: str = ""
    role: str = ""

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "UserRecord":
        raw_id = payload.get("_id", payload.get("id"))
        return cls(
            id=str(raw_id),
            name=payload.get("name"),
            email=payload.get("email") or "",
            role=payload.get("role") or "",
        )
