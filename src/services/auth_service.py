import logging
from typing import Callable, Optional

from src.data.kv_store import KVStore
from src.models.session import AuthSession
from src.services.api_client import ApiClient, ServerRejected, TransportFailure

logger = logging.getLogger("AuthService")

# Chaves do KVStore usadas para lembrar a sessão entre execuções
SESSION_KEYS = {
    "auth_token": "auth_token",
    "role": "user_role",
    "email": "user_email",
    "name": "user_name",
}

class AuthService:
    _current_session: Optional[AuthSession] = None

    def __init__(self, client_factory: Callable[[], ApiClient] = ApiClient):
        self.client_factory = client_factory
        self.kv_store = KVStore()
        self.last_error: Optional[str] = None

    def authenticate(self, email: str, password: str) -> bool:
        """Faz login no backend e guarda a sessão em memória e no KVStore"""
        self.last_error = None
        try:
            with self.client_factory() as client:
                data = client.login(email, password)
        except ServerRejected as e:
            self.last_error = e.message or "Invalid email or password."
            return False
        except TransportFailure as e:
            logger.error(f"Login failed: {e}")
            self.last_error = "Network error or server is unreachable. Ensure your backend is running."
            return False

        token = data.get("token")
        if not token:
            self.last_error = "Login response did not include a token."
            return False

        session = AuthSession(
            auth_token=token,
            role=data.get("role") or "",
            email=data.get("email") or email,
            name=data.get("name"),
        )
        self._store(session)
        AuthService._current_session = session
        return True

    def get_current_session(self) -> Optional[AuthSession]:
        if AuthService._current_session is None:
            AuthService._current_session = self._restore()
        return AuthService._current_session

    def logout(self):
        AuthService._current_session = None
        for key in SESSION_KEYS.values():
            self.kv_store.delete(key)

    def _store(self, session: AuthSession):
        for attr, key in SESSION_KEYS.items():
            self.kv_store.set(key, getattr(session, attr))

    def _restore(self) -> Optional[AuthSession]:
        token = self.kv_store.get(SESSION_KEYS["auth_token"])
        if not token:
            return None
        return AuthSession(
            auth_token=token,
            role=self.kv_store.get(SESSION_KEYS["role"]) or "",
            email=self.kv_store.get(SESSION_KEYS["email"]) or "",
            name=self.kv_store.get(SESSION_KEYS["name"]),
        )
