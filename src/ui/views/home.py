from collections.abc import Callable

import flet as ft

from src.ui.state import AppState


class HomeView(ft.Column): # type: ignore
    def __init__(self, state: AppState, on_logout: Callable[[], None]) -> None:
        super().__init__()
        session = state.current_session
        who = (session.email or session.uid) if session else "nobody"

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text(f"Signed in as {who}", style="headlineSmall"),
            ft.OutlinedButton("Sign Out", on_click=lambda _: on_logout()),
        ]
