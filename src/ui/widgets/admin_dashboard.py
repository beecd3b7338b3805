import flet as ft
from typing import Callable, Optional

from src.models.session import AuthSession
from src.models.user import UserRecord
from src.services.api_client import ApiClient
from src.services.dashboard_controller import (
    ACCESS_DENIED_TEXT,
    LOGIN_REQUIRED_TEXT,
    Admission,
    AdminDashboardController,
)
from src.services.role_policy import AVAILABLE_ROLES
from src.ui.widgets.todo_list import TodoList

# (auth_token, current_user_role, user_id, user_email) -> controle da sub-tela
TodoViewFactory = Callable[[str, str, str, str], ft.Control]


class AdminDashboard(ft.Column):
    def __init__(
        self,
        page: Optional[ft.Page],
        session: Optional[AuthSession],
        client_factory: Callable[[str], ApiClient] = ApiClient,
        todo_view_factory: Optional[TodoViewFactory] = None,
    ):
        super().__init__()
        self.page_ref = page
        self.session = session
        self.client_factory = client_factory
        self.todo_view_factory = todo_view_factory or self._default_todo_view
        self.dlg_confirm = None
        self.attached = False

        self.controller = AdminDashboardController(
            confirm=self.ask_confirmation,
            client_factory=client_factory,
            on_change=self.render,
        )

        self.expand = True
        self.scroll = ft.ScrollMode.AUTO
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER

    def did_mount(self):
        self.attached = True
        self.set_session(self.session, force=True)

    def will_unmount(self):
        self.attached = False
        self.controller.close()

    def set_session(self, session: Optional[AuthSession], force: bool = False):
        """Troca de operador (login/logout) sem recriar o widget"""
        self.session = session
        if session:
            self.controller.set_session(session.auth_token, session.role, session.email, force=force)
        else:
            self.controller.set_session(None, None, None, force=force)

    # --- Renderização ---

    def render(self):
        admission = self.controller.admission
        if admission == Admission.LOGIN_REQUIRED:
            self.controls = [self._notice(LOGIN_REQUIRED_TEXT)]
        elif admission == Admission.ACCESS_DENIED:
            self.controls = [self._notice(ACCESS_DENIED_TEXT)]
        elif self.controller.is_viewing_todos:
            self.controls = self.build_todo_view()
        else:
            self.controls = self.build_roster_view()

        if self.attached:
            self.update()

    def _notice(self, text: str) -> ft.Control:
        return ft.Container(
            content=ft.Text(text, color=ft.Colors.RED_500, text_align=ft.TextAlign.CENTER),
            padding=24,
            alignment=ft.alignment.center,
        )

    def build_todo_view(self):
        c = self.controller
        return [
            ft.Row([
                ft.ElevatedButton(
                    "← Back to Users",
                    icon=ft.Icons.ARROW_BACK,
                    on_click=lambda e: self.controller.back_to_users(),
                ),
            ]),
            ft.Text(
                f"Todos for {c.viewing_user_email or 'Selected User'}",
                size=24,
                weight="bold",
                color=ft.Colors.BLUE_900,
            ),
            self.todo_view_factory(
                c.auth_token,
                c.current_user_role,
                c.viewing_user_id,
                c.viewing_user_email,
            ),
        ]

    def build_roster_view(self):
        c = self.controller
        controls = [
            ft.Text("Admin Dashboard", size=30, weight="bold", color=ft.Colors.BLUE_900),
            ft.Divider(),
        ]

        if c.error:
            controls.append(ft.Text(c.error, color=ft.Colors.RED_600))
        if c.message:
            controls.append(ft.Text(c.message, color=ft.Colors.GREEN_700))
        if c.loading:
            controls.append(ft.Text("Loading users...", color=ft.Colors.BLUE_600))

        if not c.users and not c.loading and not c.error:
            controls.append(ft.Text("No users to display.", italic=True, color=ft.Colors.GREY_700))

        if c.users:
            controls.append(
                ft.Row(
                    [
                        ft.DataTable(
                            columns=[
                                ft.DataColumn(ft.Text("Name")),
                                ft.DataColumn(ft.Text("Email")),
                                ft.DataColumn(ft.Text("Current Role")),
                                ft.DataColumn(ft.Text("Change Role To")),
                                ft.DataColumn(ft.Text("Actions")),
                            ],
                            rows=[self.build_user_row(user) for user in c.users],
                        )
                    ],
                    scroll=ft.ScrollMode.AUTO,
                )
            )
        return controls

    def build_user_row(self, user: UserRecord) -> ft.DataRow:
        perms = self.controller.row_permissions(user)

        dd_role = ft.Dropdown(
            value=user.role,
            options=[
                ft.dropdown.Option(key=role, text=role, disabled=perms.option_disabled(role))
                for role in AVAILABLE_ROLES
            ],
            disabled=perms.dropdown_disabled,
            width=160,
            on_change=lambda e, u=user: self.on_role_selected(u, e.control.value),
        )

        actions = ft.Row([
            ft.ElevatedButton(
                "View Todos",
                icon=ft.Icons.CHECKLIST,
                on_click=lambda _, u=user: self.controller.view_user_todos(u.id, u.email),
            ),
            ft.ElevatedButton(
                "Delete",
                icon=ft.Icons.DELETE,
                color=ft.Colors.WHITE,
                bgcolor=ft.Colors.RED_500,
                disabled=perms.delete_disabled,
                on_click=lambda _, u=user: self.controller.delete_user(u.id, u.email),
            ),
        ], spacing=8)

        return ft.DataRow(cells=[
            ft.DataCell(ft.Text(user.name or "")),
            ft.DataCell(ft.Text(user.email)),
            ft.DataCell(ft.Text(user.role[:1].upper() + user.role[1:])),
            ft.DataCell(dd_role),
            ft.DataCell(actions),
        ])

    def on_role_selected(self, user: UserRecord, new_role: Optional[str]):
        if not new_role or new_role == user.role:
            return
        self.controller.change_role(user.id, user.email, new_role)

    # --- Confirmação ---

    def ask_confirmation(self, prompt: str, answer: Callable[[bool], None]):
        def reply(confirmed: bool):
            if self.dlg_confirm:
                self.page_ref.close(self.dlg_confirm)
            self.dlg_confirm = None
            answer(confirmed)

        self.dlg_confirm = ft.AlertDialog(
            modal=True,
            title=ft.Text("Delete User"),
            content=ft.Text(prompt),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: reply(False)),
                ft.TextButton("Delete", on_click=lambda e: reply(True), style=ft.ButtonStyle(color=ft.Colors.RED)),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page_ref.open(self.dlg_confirm)

    def _default_todo_view(self, auth_token, current_user_role, user_id, user_email) -> ft.Control:
        return TodoList(
            self.page_ref,
            auth_token=auth_token,
            current_user_role=current_user_role,
            viewing_user_id=user_id,
            viewing_user_email=user_email,
            client_factory=self.client_factory,
        )
