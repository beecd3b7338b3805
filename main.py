import logging
import flet as ft
from src.config import LOG_LEVEL
from src.services.auth_service import AuthService
from src.ui.pages.login_page import LoginPage
from src.ui.widgets.admin_dashboard import AdminDashboard

logging.basicConfig(level=LOG_LEVEL)

def main(page: ft.Page):
    page.title = "Admin Dashboard"
    page.theme_mode = ft.ThemeMode.LIGHT

    auth = AuthService()

    def route_change(route):
        page.views.clear()

        if page.route == "/login":
            page.views.append(
                ft.View(
                    "/login",
                    [LoginPage(page, on_login_success=lambda: page.go("/"), auth_service=auth)],
                    vertical_alignment=ft.MainAxisAlignment.CENTER,
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER
                )
            )

        elif page.route == "/":
            session = auth.get_current_session()
            if not session:
                page.go("/login")
                return

            # A sessão (inclusive o e-mail) vai explícita para o painel
            dashboard = AdminDashboard(page, session=session)

            page.views.append(
                ft.View(
                    "/",
                    [
                        ft.AppBar(
                            title=ft.Text(f"Hello, {session.name or session.email}"),
                            bgcolor=ft.Colors.BLUE_700,
                            color=ft.Colors.WHITE,
                            actions=[
                                ft.IconButton(ft.Icons.LOGOUT, tooltip="Log out", on_click=logout_click)
                            ]
                        ),
                        ft.Container(content=dashboard, padding=10, expand=True),
                    ]
                )
            )

        page.update()

    def view_pop(view):
        page.views.pop()
        top_view = page.views[-1]
        page.go(top_view.route)

    def logout_click(e):
        auth.logout()
        page.go("/login")

    page.on_route_change = route_change
    page.on_view_pop = view_pop
    # Sessão salva no KVStore entra direto no painel
    page.go("/" if auth.get_current_session() else "/login")

if __name__ == "__main__":
    ft.app(target=main)
