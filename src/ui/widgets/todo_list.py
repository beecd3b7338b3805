import flet as ft
import logging
from typing import Callable, List, Optional

from src.models.todo import TodoRecord
from src.services.api_client import ApiClient, ServerRejected, TransportFailure

logger = logging.getLogger("TodoList")

class TodoList(ft.Column):
    """Lista somente-leitura dos todos de um usuário escolhido no painel."""

    def __init__(
        self,
        page: Optional[ft.Page],
        auth_token: str,
        current_user_role: str,
        viewing_user_id: str,
        viewing_user_email: Optional[str] = None,
        client_factory: Callable[[str], ApiClient] = ApiClient,
    ):
        super().__init__()
        self.page_ref = page
        self.auth_token = auth_token
        self.current_user_role = current_user_role
        self.viewing_user_id = viewing_user_id
        self.viewing_user_email = viewing_user_email
        self.client_factory = client_factory

        self.todos: List[TodoRecord] = []
        self.expand = True

        self.list_view = ft.ListView(expand=True, spacing=10, padding=10)
        self.lbl_status = ft.Text("Loading todos...", italic=True, color=ft.Colors.GREY_500)

        self.controls = [
            self.lbl_status,
            self.list_view,
        ]

    def did_mount(self):
        self.load_todos()
        self.update()

    def load_todos(self):
        self.lbl_status.value = "Loading todos..."
        self.lbl_status.color = ft.Colors.GREY_500
        self.lbl_status.visible = True
        try:
            with self.client_factory(self.auth_token) as client:
                self.todos = client.list_todos(self.viewing_user_id)
        except ServerRejected as e:
            self.show_error(e.message or "Failed to fetch todos.")
            return
        except TransportFailure as e:
            logger.error(f"Error fetching todos: {e}")
            self.show_error("Network error or server is unreachable while fetching todos.")
            return
        self.render_list()

    def show_error(self, text: str):
        self.todos = []
        self.list_view.controls.clear()
        self.lbl_status.value = text
        self.lbl_status.color = ft.Colors.RED_600
        self.lbl_status.visible = True

    def render_list(self):
        self.list_view.controls.clear()

        if not self.todos:
            self.lbl_status.value = "No todos for this user."
            self.lbl_status.visible = True
            return

        self.lbl_status.visible = False
        for todo in self.todos:
            self.list_view.controls.append(
                ft.Card(
                    content=ft.ListTile(
                        leading=ft.Icon(
                            ft.Icons.CHECK_CIRCLE if todo.completed else ft.Icons.RADIO_BUTTON_UNCHECKED,
                            color=ft.Colors.GREEN if todo.completed else ft.Colors.GREY,
                        ),
                        title=ft.Text(todo.title, weight="bold"),
                        subtitle=ft.Text("Completed" if todo.completed else "Pending", size=12),
                    )
                )
            )
