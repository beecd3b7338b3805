from contextlib import closing
from typing import Optional

from src.data.db_context import create_connection

class KVStore:
    """Gerencia persistência de metadados simples (Chave-Valor)"""

    def __init__(self):
        self._init_table()

    def _init_table(self):
        with closing(create_connection()) as conn, conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sys_meta (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)

    def get(self, key: str) -> Optional[str]:
        with closing(create_connection()) as conn:
            row = conn.execute("SELECT value FROM sys_meta WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set(self, key: str, value: Optional[str]):
        if value is None:
            self.delete(key)
            return
        with closing(create_connection()) as conn, conn:
            conn.execute(
                "INSERT OR REPLACE INTO sys_meta (key, value) VALUES (?, ?)",
                (key, value),
            )

    def delete(self, key: str):
        with closing(create_connection()) as conn, conn:
            conn.execute("DELETE FROM sys_meta WHERE key = ?", (key,))
