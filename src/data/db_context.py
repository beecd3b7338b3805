import os
import sqlite3

from src.config import LOCAL_DB_PATH

def get_db_path() -> str:
    """
    Caminho do banco local do cliente. Lido a cada chamada para que
    LOCAL_DB_PATH possa ser trocado em tempo de execução (ex.: testes).
    """
    return os.getenv("LOCAL_DB_PATH", LOCAL_DB_PATH)

def create_connection() -> sqlite3.Connection:
    db_path = get_db_path()
    conn = sqlite3.connect(db_path, timeout=10.0, check_same_thread=False)

    # Handlers do Flet rodam em threads; WAL evita travar leitura durante escrita
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")

    return conn
