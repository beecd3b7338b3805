import os
from typing import Optional
from dotenv import load_dotenv

# Carrega as variáveis do arquivo .env (se existir)
load_dotenv()

# URL base da API de autenticação/usuários
BACKEND_API_URL = os.getenv("BACKEND_API_URL", "http://localhost:5000").rstrip("/")


def _read_timeout() -> Optional[float]:
    """Sem HTTP_TIMEOUT definido, deixamos o transporte decidir (timeout=None)."""
    raw = os.getenv("HTTP_TIMEOUT")
    if not raw:
        return None
    return float(raw)


HTTP_TIMEOUT = _read_timeout()

# Banco local usado apenas para guardar a sessão do operador
LOCAL_DB_PATH = os.getenv("LOCAL_DB_PATH", "admin_panel.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Paginação fixa da listagem de usuários
ROSTER_PAGE = 1
ROSTER_LIMIT = 100
