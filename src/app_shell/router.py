import logging
from collections.abc import Callable
from typing import NamedTuple

import flet as ft

from src.ui.state import AppState

logger = logging.getLogger(__name__)


class RouteConfig(NamedTuple):
    builder: Callable[[ft.Page], ft.View]
    protected: bool


class Router:
    """Page router. Also serves as the sign-in controller's navigation port."""

    def __init__(self, page: ft.Page, state: AppState, login_route: str = "/login"):
        self.page = page
        self.state = state
        self.login_route = login_route
        self.routes: dict[str, RouteConfig] = {}

    def register(
        self,
        route: str,
        builder: Callable[[ft.Page], ft.View],
        protected: bool = True
    ) -> None:
        self.routes[route] = RouteConfig(builder, protected)

    def navigate(self, path: str) -> None:
        self.page.go(path)

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or "/"  # Default empty route to "/"
        logger.info(f"Navigate to: {route}")

        self.page.views.clear()

        config = self.routes.get(route)
        if not config:
            logger.warning(f"No route found for: {route}")
            self.page.views.append(
                ft.View(
                    "/404",
                    [ft.AppBar(title=ft.Text("404")), ft.Text(f"Page not found: {route}")]
                )
            )
            self.page.update()
            return

        # Auth Guard
        if config.protected and not self.state.is_signed_in:
            logger.info(f"Access denied to {route}. Redirecting to {self.login_route}.")
            self.page.go(self.login_route)
            return

        self.page.views.append(config.builder(self.page))
        self.page.update()

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        # Each route change rebuilds a single-view stack; nothing to go back to
        if len(self.page.views) < 2:
            return
        self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)
