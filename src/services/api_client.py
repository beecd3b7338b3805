import logging

import httpx
from pydantic import ValidationError
from typing import Any, Dict, List, Optional, Type

from src.config import BACKEND_API_URL, HTTP_TIMEOUT, ROSTER_LIMIT, ROSTER_PAGE
from src.models.todo import TodoRecord
from src.models.user import UserRecord

logger = logging.getLogger("ApiClient")


class ApiError(Exception):
    """Base para falhas de chamada à API."""


class ServerRejected(ApiError):
    """Resposta não-2xx. `message` vem do corpo quando disponível."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code
        self.message = message


class TransportFailure(ApiError):
    """A requisição falhou antes de termos uma resposta utilizável."""


class ApiClient:
    def __init__(
        self,
        auth_token: Optional[str] = None,
        base_url: str = BACKEND_API_URL,
        timeout: Optional[float] = HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self.client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.debug(f"{method} {path} falhou: {e}")
            raise TransportFailure(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            if response.is_success:
                logger.debug(f"{method} {path}: corpo não é JSON")
                raise TransportFailure(f"Invalid JSON from {method} {path}") from e
            data = None

        if not isinstance(data, dict):
            data = {}

        if response.is_success:
            return data

        message = data.get("message")
        raise ServerRejected(response.status_code, message if isinstance(message, str) else None)

    def _records(self, data: Dict[str, Any], key: str, model: Type) -> List[Any]:
        """Lista do corpo 2xx convertida em registros; formato inesperado conta como falha de transporte."""
        items = data.get(key) or []
        if not isinstance(items, list):
            logger.debug(f"Campo '{key}' não é lista: {type(items).__name__}")
            raise TransportFailure(f"Invalid {key} payload: expected a list")
        try:
            return [model.from_api(item) for item in items]
        except (AttributeError, TypeError, ValidationError) as e:
            logger.debug(f"Item inválido em '{key}': {e}")
            raise TransportFailure(f"Invalid {key} payload: {e}") from e

    # --- Autenticação ---

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/login", json={"email": email, "password": password})

    # --- Usuários ---

    def list_users(self, page: int = ROSTER_PAGE, limit: int = ROSTER_LIMIT) -> List[UserRecord]:
        data = self._request("GET", "/api/auth/users", params={"page": page, "limit": limit})
        return self._records(data, "users", UserRecord)

    def change_role(self, email: str, new_role: str) -> Optional[str]:
        data = self._request("PUT", "/api/auth/changeRole", json={"email": email, "newRole": new_role})
        return data.get("message")

    def delete_user(self, user_id: str) -> Optional[str]:
        data = self._request("DELETE", f"/api/auth/users/{user_id}")
        return data.get("message")

    # --- Todos ---

    def list_todos(self, user_id: str) -> List[TodoRecord]:
        data = self._request("GET", f"/api/todos/user/{user_id}")
        return self._records(data, "todos", TodoRecord)
