import os
import tempfile

# Precisa acontecer antes de importar src.config / backend.database
_TMP_DIR = tempfile.mkdtemp(prefix="admin-dashboard-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'backend.db')}")
os.environ.setdefault("PASSWORD_SALT", "test-salt")
os.environ["LOCAL_DB_PATH"] = os.path.join(_TMP_DIR, "client.db")

import httpx
import pytest

from src.services.api_client import ApiClient

BASE_URL = "http://testserver"


def make_users():
    return [
        {"_id": "u1", "name": "Ana", "email": "ana@example.com", "role": "admin"},
        {"_id": "u2", "name": "Bruno", "email": "bruno@example.com", "role": "moderator"},
        {"_id": "u3", "name": "Carla", "email": "carla@example.com", "role": "user"},
        {"_id": "u4", "name": "Davi", "email": "davi@example.com", "role": "superAdmin"},
    ]


class FakeBackend:
    """Handler para httpx.MockTransport que imita a API de usuários."""

    def __init__(self, users=None):
        self.users = users if users is not None else make_users()
        self.requests = []
        self.offline = False
        self.overrides = {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)

        key = (request.method, request.url.path)
        if key in self.overrides:
            return self.overrides[key]

        if key == ("GET", "/api/auth/users"):
            return httpx.Response(200, json={"users": self.users})
        if key == ("PUT", "/api/auth/changeRole"):
            return httpx.Response(200, json={"message": "Role updated by server."})
        if request.method == "DELETE" and request.url.path.startswith("/api/auth/users/"):
            return httpx.Response(200, json={"message": "User removed by server."})
        if request.method == "GET" and request.url.path.startswith("/api/todos/user/"):
            return httpx.Response(200, json={"todos": []})
        return httpx.Response(404, json={"message": "Not found"})

    def calls(self, method=None, path=None):
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def client_factory(fake_backend):
    def factory(auth_token=None):
        return ApiClient(auth_token, base_url=BASE_URL, transport=httpx.MockTransport(fake_backend.handle))
    return factory
