import logging
import os

import flet as ft

from src.app_shell.config import validate_ops_rules
from src.app_shell.router import Router
from src.core.ports.identity import ProviderSession
from src.rules.loader import load_rules, resolve_rules_path
from src.ui.context import ServiceContext
from src.ui.state import AppState
from src.ui.views.home import HomeView
from src.ui.views.login import LoginView

# Logging setup
logging.basicConfig(
    level=os.environ.get("SIGNIN_LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(page: ft.Page) -> None:
    page.title = "Sign In"

    page.theme_mode = ft.ThemeMode.DARK

    # 1. Load Rules
    rules_path = resolve_rules_path()
    if not rules_path.exists():
        error_msg = f"Error: {rules_path} not found. Please create it."
        logger.error(error_msg)
        page.add(ft.Text(error_msg, color="red", size=20))
        return

    rules = load_rules(rules_path)
    logger.info("Rules loaded successfully")

    # 2. Validate Production Config
    validate_ops_rules(rules)

    # 3. Context + App State
    ctx = ServiceContext.create(rules)
    state = AppState()

    router = Router(page, state, login_route=rules.routes.login)

    def set_session(session: ProviderSession) -> None:
        state.current_session = session

    def handle_logout() -> None:
        state.logout()
        page.go(rules.routes.login)

    # --- Builders ---

    def home_builder(_: ft.Page) -> ft.View:
        return ft.View(rules.routes.home, [HomeView(state, on_logout=handle_logout)])

    def login_builder(_: ft.Page) -> ft.View:
        # A fresh controller per mount; its state dies with the view
        controller = ctx.new_login_controller(router, on_session=set_session)
        return ft.View(rules.routes.login, [LoginView(page, controller)])

    router.register(rules.routes.home, home_builder, protected=True)
    router.register(rules.routes.login, login_builder, protected=False)

    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop

    page.go(page.route or rules.routes.login)


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
