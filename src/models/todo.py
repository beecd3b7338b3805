from typing import Any, Dict
from sqlmodel import Field, SQLModel
from .base import AuditModel

class Todo(AuditModel, table=True):
    __tablename__ = "todos"

    user_id: str = Field(index=True)
    title: str
    completed: bool = Field(default=False)

    def to_api(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "completed": self.completed,
        }

class TodoRecord(SQLModel):
    id: str
    user_id: str = ""
    title: str = ""
    completed: bool = False

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "TodoRecord":
        return cls(
            id=str(payload.get("_id", payload.get("id"))),
            user_id=str(payload.get("userId") or ""),
            title=payload.get("title") or "",
            completed=bool(payload.get("completed", False)),
        )
