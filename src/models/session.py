from typing import Optional
from sqlmodel import SQLModel

class AuthSession(SQLModel):
    """
    Sessão do operador logado. Passada explicitamente para o dashboard,
    inclusive o e-mail usado para detectar "este usuário sou eu".
    """
    auth_token: str
    role: str
    email: str
    name: Optional[str] = None
