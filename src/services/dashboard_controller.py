"""
Estado e ações do painel de administração, sem dependência de Flet.

O widget apenas desenha a partir deste controller e repassa os eventos;
toda chamada de rede acontece aqui.
"""
import logging
from enum import Enum
from typing import Callable, List, Optional

from src.models.user import UserRecord
from src.services import role_policy
from src.services.api_client import ApiClient, ServerRejected, TransportFailure

logger = logging.getLogger("AdminDashboard")

# Pergunta sim/não: recebe o texto e um callback com a resposta
ConfirmPrompt = Callable[[str, Callable[[bool], None]], None]


class Admission(str, Enum):
    LOGIN_REQUIRED = "login_required"
    ACCESS_DENIED = "access_denied"
    ADMITTED = "admitted"


LOGIN_REQUIRED_TEXT = "Please log in to access the Admin Dashboard."
ACCESS_DENIED_TEXT = (
    "Access Denied: You must be an administrator, super administrator, "
    "or manager to view this page."
)
INSUFFICIENT_PRIVILEGES_TEXT = "You do not have sufficient administrative privileges to view this dashboard."

FETCH_FAILED_TEXT = "Failed to fetch users. Ensure you have permission."
FETCH_NETWORK_TEXT = "Network error or server is unreachable while fetching users. Ensure your backend is running."
CHANGE_ROLE_FAILED_TEXT = "Failed to change role. Check your permissions."
CHANGE_ROLE_NETWORK_TEXT = "Network error or server is unreachable while changing role."
DELETE_FAILED_TEXT = "Failed to delete user. Check your permissions."
DELETE_NETWORK_TEXT = "Network error or server is unreachable while deleting user."


class AdminDashboardController:
    def __init__(
        self,
        confirm: ConfirmPrompt,
        client_factory: Callable[[str], ApiClient] = ApiClient,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.confirm = confirm
        self.client_factory = client_factory
        self.on_change = on_change

        # Entradas externas (sessão do operador)
        self.auth_token: Optional[str] = None
        self.current_user_role: Optional[str] = None
        self.current_user_email: Optional[str] = None

        # Estado da tela
        self.users: List[UserRecord] = []
        self.loading = False
        self.error = ""
        self.message = ""
        self.viewing_user_id: Optional[str] = None
        self.viewing_user_email: Optional[str] = None

        self._client: Optional[ApiClient] = None

    # --- Sessão / Portão de acesso ---

    @property
    def admission(self) -> Admission:
        if not self.auth_token:
            return Admission.LOGIN_REQUIRED
        if not role_policy.is_admin_role(self.current_user_role):
            return Admission.ACCESS_DENIED
        return Admission.ADMITTED

    def set_session(self, auth_token: Optional[str], current_user_role: Optional[str],
                    current_user_email: Optional[str] = None, force: bool = False):
        """
        Atualiza as entradas externas. Só reavalia o portão (e recarrega a
        lista) quando o token ou o papel mudam, ou na montagem (force=True).
        """
        changed = (auth_token, current_user_role) != (self.auth_token, self.current_user_role)
        self.current_user_email = current_user_email
        if not changed and not force:
            return

        if auth_token != self.auth_token:
            self._reset_client()
        self.auth_token = auth_token
        self.current_user_role = current_user_role
        self.evaluate_gate()

    def evaluate_gate(self):
        """Equivalente ao efeito de montagem: busca a lista se o operador for admin."""
        admission = self.admission
        if admission == Admission.ADMITTED:
            self.fetch_users()
        elif admission == Admission.ACCESS_DENIED and self.current_user_role:
            self.error = INSUFFICIENT_PRIVILEGES_TEXT
            self._notify()
        else:
            self._notify()

    def close(self):
        self._reset_client()

    # --- Operações ---

    def fetch_users(self):
        self._begin()
        try:
            self.users = self._api().list_users()
        except ServerRejected as e:
            self.error = e.message or FETCH_FAILED_TEXT
        except TransportFailure as e:
            logger.error(f"Error fetching users: {e}")
            self.error = FETCH_NETWORK_TEXT
        finally:
            self._end()

    def change_role(self, user_id: str, email: str, new_role: str):
        self._begin()
        try:
            server_message = self._api().change_role(email, new_role)
        except ServerRejected as e:
            self.error = e.message or CHANGE_ROLE_FAILED_TEXT
        except TransportFailure as e:
            logger.error(f"Error changing role: {e}")
            self.error = CHANGE_ROLE_NETWORK_TEXT
        else:
            self.message = server_message or f"Role for {email} updated to {new_role}."
            self.users = [
                user.model_copy(update={"role": new_role}) if user.id == user_id else user
                for user in self.users
            ]
        finally:
            self._end()

    def delete_user(self, user_id: str, email: str):
        prompt = f"Are you sure you want to delete user: {email}? This action cannot be undone."

        def on_answer(confirmed: bool):
            if confirmed:
                self._perform_delete(user_id, email)

        self.confirm(prompt, on_answer)

    def _perform_delete(self, user_id: str, email: str):
        self._begin()
        try:
            server_message = self._api().delete_user(user_id)
        except ServerRejected as e:
            self.error = e.message or DELETE_FAILED_TEXT
        except TransportFailure as e:
            logger.error(f"Error deleting user: {e}")
            self.error = DELETE_NETWORK_TEXT
        else:
            self.message = server_message or f"User {email} deleted successfully."
            self.users = [user for user in self.users if user.id != user_id]
        finally:
            self._end()

    def view_user_todos(self, user_id: str, email: str):
        self.viewing_user_id = user_id
        self.viewing_user_email = email
        self._notify()

    def back_to_users(self):
        self.viewing_user_id = None
        self.viewing_user_email = None
        # A lista pode ter mudado enquanto o operador via os todos
        self.fetch_users()

    # --- Consultas para a renderização ---

    @property
    def is_viewing_todos(self) -> bool:
        return bool(self.viewing_user_id)

    def is_current_user(self, user: UserRecord) -> bool:
        return bool(self.current_user_email) and user.email == self.current_user_email

    def row_permissions(self, user: UserRecord) -> role_policy.RowPermissions:
        return role_policy.row_permissions(
            self.current_user_role,
            user.role,
            is_self=self.is_current_user(user),
            loading=self.loading,
        )

    # --- Internos ---

    def _api(self) -> ApiClient:
        if self._client is None:
            self._client = self.client_factory(self.auth_token)
        return self._client

    def _reset_client(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def _begin(self):
        self.loading = True
        self.error = ""
        self.message = ""
        self._notify()

    def _end(self):
        self.loading = False
        self._notify()

    def _notify(self):
        if self.on_change:
            self.on_change()
