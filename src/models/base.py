import uuid
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel

# Função auxiliar para timestamps UTC
def utc_now():
    return datetime.now(timezone.utc)

class AuditModel(SQLModel):
    """
    Classe Base para as tabelas do backend.
    Implementa UUID e Metadados de Auditoria.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
