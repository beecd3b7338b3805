import flet as ft
import httpx

from src.models.session import AuthSession
from src.services.dashboard_controller import ACCESS_DENIED_TEXT, LOGIN_REQUIRED_TEXT
from src.ui.widgets.admin_dashboard import AdminDashboard
from src.ui.widgets.todo_list import TodoList


def session_for(role, email="ana@example.com"):
    return AuthSession(auth_token="tok", role=role, email=email, name="Ana")


def mount(client_factory, session, **kwargs):
    # Sem página: apenas monta os controles a partir do controller
    dashboard = AdminDashboard(None, session, client_factory=client_factory, **kwargs)
    dashboard.set_session(session, force=True)
    return dashboard


def find_table(dashboard):
    for control in dashboard.controls:
        if isinstance(control, ft.Row) and control.controls and isinstance(control.controls[0], ft.DataTable):
            return control.controls[0]
    return None


def texts(dashboard):
    return [c.value for c in dashboard.controls if isinstance(c, ft.Text)]


def row_for(table, email):
    for row in table.rows:
        if row.cells[1].content.value == email:
            return row
    raise AssertionError(f"no row for {email}")


def test_login_notice_without_session(client_factory, fake_backend):
    dashboard = mount(client_factory, None)

    assert dashboard.controls[0].content.value == LOGIN_REQUIRED_TEXT
    assert fake_backend.requests == []


def test_access_denied_for_moderator(client_factory):
    dashboard = mount(client_factory, session_for("moderator"))

    assert dashboard.controls[0].content.value == ACCESS_DENIED_TEXT


def test_roster_table_for_admin(client_factory):
    dashboard = mount(client_factory, session_for("admin"))

    table = find_table(dashboard)
    assert table is not None
    assert len(table.rows) == 4
    assert "Admin Dashboard" in texts(dashboard)

    moderator = row_for(table, "bruno@example.com")
    dropdown = moderator.cells[3].content
    delete_button = moderator.cells[4].content.controls[1]

    assert moderator.cells[2].content.value == "Moderator"
    assert dropdown.value == "moderator"
    assert not dropdown.disabled
    assert not delete_button.disabled
    assert [o.key for o in dropdown.options if not o.disabled] == ["user", "moderator", "admin"]


def test_own_row_and_super_admin_row_are_locked(client_factory):
    dashboard = mount(client_factory, session_for("admin"))
    table = find_table(dashboard)

    mine = row_for(table, "ana@example.com")
    assert mine.cells[3].content.disabled
    assert mine.cells[4].content.controls[1].disabled

    top = row_for(table, "davi@example.com")
    assert top.cells[3].content.disabled
    assert top.cells[4].content.controls[1].disabled
    assert all(o.disabled for o in top.cells[3].content.options)


def test_empty_roster_message(client_factory, fake_backend):
    fake_backend.users = []
    dashboard = mount(client_factory, session_for("manager"))

    assert find_table(dashboard) is None
    assert "No users to display." in texts(dashboard)


def test_error_banner(client_factory, fake_backend):
    fake_backend.offline = True
    dashboard = mount(client_factory, session_for("admin"))

    assert find_table(dashboard) is None
    assert dashboard.controller.error in texts(dashboard)
    assert "No users to display." not in texts(dashboard)


def test_selecting_same_role_does_not_call_backend(client_factory, fake_backend):
    dashboard = mount(client_factory, session_for("admin"))
    user = dashboard.controller.users[1]

    dashboard.on_role_selected(user, "moderator")
    assert fake_backend.calls("PUT") == []

    dashboard.on_role_selected(user, "user")
    assert len(fake_backend.calls("PUT")) == 1
    assert dashboard.controller.users[1].role == "user"


def test_todo_view_replaces_roster(client_factory):
    built = []

    def todo_view(token, role, user_id, email):
        built.append((token, role, user_id, email))
        return ft.Text("todos here")

    dashboard = mount(client_factory, session_for("admin"), todo_view_factory=todo_view)
    dashboard.controller.view_user_todos("u3", "carla@example.com")

    assert built == [("tok", "admin", "u3", "carla@example.com")]
    assert find_table(dashboard) is None
    assert "Todos for carla@example.com" in texts(dashboard)


def test_todo_list_renders_items(client_factory, fake_backend):
    fake_backend.overrides[("GET", "/api/todos/user/u3")] = httpx.Response(200, json={"todos": [
        {"_id": "t1", "userId": "u3", "title": "Buy milk", "completed": False},
        {"_id": "t2", "userId": "u3", "title": "Ship release", "completed": True},
    ]})
    todo_list = TodoList(None, "tok", "admin", "u3", "carla@example.com", client_factory=client_factory)

    todo_list.load_todos()

    assert len(todo_list.list_view.controls) == 2
    assert not todo_list.lbl_status.visible
    assert fake_backend.requests[0].headers["Authorization"] == "Bearer tok"


def test_todo_list_empty_and_error(client_factory, fake_backend):
    todo_list = TodoList(None, "tok", "admin", "u3", client_factory=client_factory)
    todo_list.load_todos()
    assert todo_list.lbl_status.value == "No todos for this user."

    fake_backend.offline = True
    todo_list.load_todos()
    assert "unreachable" in todo_list.lbl_status.value
    assert todo_list.list_view.controls == []


class StubPage:
    """Página mínima: só registra os diálogos abertos e fechados."""

    def __init__(self):
        self.opened = []
        self.closed = []

    def open(self, control):
        self.opened.append(control)

    def close(self, control):
        self.closed.append(control)


def open_delete_dialog(client_factory, page):
    dashboard = AdminDashboard(page, session_for("admin"), client_factory=client_factory)
    dashboard.set_session(dashboard.session, force=True)
    dashboard.controller.delete_user("u3", "carla@example.com")
    return dashboard, page.opened[-1]


def test_delete_dialog_cancel_sends_nothing(client_factory, fake_backend):
    page = StubPage()
    dashboard, dialog = open_delete_dialog(client_factory, page)

    assert isinstance(dialog, ft.AlertDialog)
    assert "carla@example.com" in dialog.content.value

    cancel = dialog.actions[0]
    cancel.on_click(None)

    assert page.closed == [dialog]
    assert dashboard.dlg_confirm is None
    assert fake_backend.calls("DELETE") == []
    assert len(dashboard.controller.users) == 4


def test_delete_dialog_confirm_sends_one_request(client_factory, fake_backend):
    page = StubPage()
    dashboard, dialog = open_delete_dialog(client_factory, page)

    confirm = dialog.actions[1]
    confirm.on_click(None)

    assert page.closed == [dialog]
    assert len(fake_backend.calls("DELETE", "/api/auth/users/u3")) == 1
    assert [u.id for u in dashboard.controller.users] == ["u1", "u2", "u4"]
