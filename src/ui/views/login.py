import flet as ft

from src.services.login import LoginController


class LoginView(ft.Column): # type: ignore
    """Sign-in form plus the password reset dialog, rendered from controller state."""

    def __init__(self, page: ft.Page, controller: LoginController) -> None:
        super().__init__()
        self._page = page
        self.controller = controller
        self._mounted = False

        self.email = ft.TextField(
            label="Email", width=300, hint_text="you@example.com",
            on_change=self.email_change,
        )
        self.password = ft.TextField(
            label="Password", width=300, password=True, can_reveal_password=True,
            on_change=self.password_change, on_submit=self.login_click,
        )
        self.status_text = ft.Text(color="blue", visible=False)
        self.error_text = ft.Text(color="red", visible=False)
        self.forgot_button = ft.TextButton("Forgot Password?", on_click=self.forgot_click)
        self.login_button = ft.ElevatedButton("Sign In", width=300, on_click=self.login_click)

        # Reset dialog
        self.reset_email = ft.TextField(
            label="Email", width=300, hint_text="you@example.com",
            on_change=self.reset_email_change, on_submit=self.reset_click,
        )
        self.reset_error = ft.Text(color="red", visible=False)
        self.reset_success = ft.Text(color="green", visible=False)
        self.reset_cancel = ft.TextButton("Cancel", on_click=self.cancel_click)
        self.reset_send = ft.ElevatedButton("Send Reset Link", on_click=self.reset_click)
        self.reset_dialog = ft.AlertDialog(
            modal=False,
            title=ft.Text("Reset Password"),
            content=ft.Column(
                tight=True,
                controls=[
                    ft.Text(
                        "Enter the email address associated with your account, and "
                        "we'll send you a link to reset your password."
                    ),
                    self.reset_success,
                    self.reset_error,
                    self.reset_email,
                ],
            ),
            actions=[self.reset_cancel, self.reset_send],
            on_dismiss=self.dialog_dismiss,
        )

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text("Welcome Back", style="headlineMedium"),
            ft.Text("Please sign in to continue"),
            self.status_text,
            self.error_text,
            self.email,
            self.password,
            self.forgot_button,
            self.login_button,
        ]

        self.controller.add_listener(self.refresh)
        self.refresh()

    # --- Lifecycle ---

    def did_mount(self) -> None:
        self._mounted = True
        self._page.run_task(self.controller.initialize)

    def will_unmount(self) -> None:
        self._mounted = False

    # --- Rendering ---

    def refresh(self) -> None:
        c = self.controller
        state = c.sign_in_state
        modal = c.modal

        self.status_text.value = c.status_message
        self.status_text.visible = c.status_message is not None
        self.error_text.value = state.error
        self.error_text.visible = state.error is not None

        disabled = c.form_disabled
        self.email.disabled = disabled
        self.password.disabled = disabled
        self.forgot_button.disabled = disabled
        self.login_button.disabled = disabled
        self.login_button.text = "Signing In..." if state.loading else "Sign In"

        self.reset_email.value = modal.email
        self.reset_email.visible = modal.input_visible
        self.reset_email.disabled = modal.loading
        self.reset_error.value = modal.error
        self.reset_error.visible = modal.error is not None
        self.reset_success.value = modal.success
        self.reset_success.visible = modal.success is not None
        self.reset_cancel.disabled = modal.loading
        self.reset_send.visible = modal.input_visible
        self.reset_send.disabled = modal.loading
        self.reset_send.text = "Sending..." if modal.loading else "Send Reset Link"

        if self._mounted:
            self._page.update()

    # --- Handlers ---

    def email_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_email(self.email.value or "")

    def password_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_password(self.password.value or "")

    async def login_click(self, e: ft.ControlEvent) -> None:
        await self.controller.sign_in()

    def forgot_click(self, e: ft.ControlEvent) -> None:
        self.controller.open_modal()
        if self.controller.modal.open:
            self._page.open(self.reset_dialog)

    def reset_email_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_reset_email(self.reset_email.value or "")

    async def reset_click(self, e: ft.ControlEvent) -> None:
        await self.controller.request_reset()

    def cancel_click(self, e: ft.ControlEvent) -> None:
        self._page.close(self.reset_dialog)
        self.controller.close_modal()

    def dialog_dismiss(self, e: ft.ControlEvent) -> None:
        # Clicking outside the dialog
        if self.controller.modal.open:
            self.controller.close_modal()
