"""
Unit tests for LoginController.

Covers the readiness gate, credential sign-in, the reset dialog and the
interleavings between them.
"""

import asyncio

import pytest

from src.components.auth import CredentialForm
from src.components.bootstrap import BootstrapKind
from src.components.password_reset import RESET_SENT_MESSAGE
from src.core.ports.identity import PersistenceMode, ProviderError, ProviderSession
from src.domain.auth_errors import AuthErrorKind
from src.domain.readiness import SessionReadiness
from src.services.login import INITIALIZING_MESSAGE, LoginController

ACCOUNT_EMAIL = "a@b.com"
ACCOUNT_PASSWORD = "correct-horse"


class GatedProvider:
    """Provider whose sign-in and reset calls block until released."""

    def __init__(self) -> None:
        self.sign_in_release = asyncio.Event()
        self.reset_release = asyncio.Event()
        self.sign_in_error: ProviderError | None = None
        self.reset_error: ProviderError | None = None
        self.sign_in_calls = 0
        self.reset_calls = 0

    async def set_persistence(self, mode: PersistenceMode) -> None:
        return None

    async def sign_in_anonymously(self) -> ProviderSession:
        return ProviderSession(uid="anon", is_anonymous=True)

    async def sign_in_with_custom_token(self, token: str) -> ProviderSession:
        return ProviderSession(uid="token", is_anonymous=False)

    async def sign_in_with_email_and_password(
        self, email: str, password: str
    ) -> ProviderSession:
        self.sign_in_calls += 1
        await self.sign_in_release.wait()
        if self.sign_in_error:
            raise self.sign_in_error
        return ProviderSession(uid="user", is_anonymous=False, email=email)

    async def send_password_reset_email(self, email: str) -> None:
        self.reset_calls += 1
        await self.reset_release.wait()
        if self.reset_error:
            raise self.reset_error


async def ready_controller(provider, router, **kwargs) -> LoginController:
    controller = LoginController(provider, router, **kwargs)
    await controller.initialize()
    return controller


async def settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


# --- Bootstrap / readiness ---


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_anonymous_bootstrap_makes_ready_without_error(self, provider, router):
        controller = LoginController(provider, router)
        assert controller.readiness is SessionReadiness.NOT_READY
        assert controller.status_message == INITIALIZING_MESSAGE

        outcome = await controller.initialize()

        assert outcome.kind is BootstrapKind.SIGNED_IN_ANONYMOUSLY
        assert controller.readiness is SessionReadiness.READY
        assert controller.sign_in_state.error is None
        assert controller.status_message is None
        assert controller.session is not None
        assert controller.session.is_anonymous

    @pytest.mark.asyncio
    async def test_initialize_runs_once(self, provider, router):
        controller = LoginController(provider, router)

        first, second = await asyncio.gather(controller.initialize(), controller.initialize())
        third = await controller.initialize()

        assert first is second
        assert second is third
        assert provider.call_count("sign_in_anonymously") == 1
        assert provider.call_count("set_persistence") == 1
        assert controller.gate.transitions == 1

    @pytest.mark.asyncio
    async def test_token_bootstrap(self, provider, router):
        controller = LoginController(provider, router, bootstrap_token="minted")

        outcome = await controller.initialize()

        assert outcome.kind is BootstrapKind.SIGNED_IN_VIA_TOKEN
        assert provider.call_count("sign_in_with_custom_token") == 1
        assert provider.call_count("sign_in_anonymously") == 0

    @pytest.mark.asyncio
    async def test_no_provider_ready_with_error(self, router):
        controller = LoginController(None, router)

        outcome = await controller.initialize()

        assert outcome.kind is BootstrapKind.FAILED_FATAL
        assert controller.is_ready
        assert controller.sign_in_state.error == "Authentication service is not initialized."
        assert controller.sign_in_state.error_kind is AuthErrorKind.PROVIDER_UNAVAILABLE
        assert controller.status_message is None

    @pytest.mark.asyncio
    async def test_bootstrap_failure_is_advisory(self, provider, router):
        provider.fail_with("sign_in_anonymously", "auth/internal-error", "down")
        controller = LoginController(provider, router)

        await controller.initialize()

        assert controller.is_ready
        assert controller.sign_in_state.error == "Authentication initialization failed: down"

        # Interactive sign-in still works and clears the advisory message
        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))
        assert controller.sign_in_state.error is None
        assert router.paths == ["/"]

    @pytest.mark.asyncio
    async def test_session_callback_receives_bootstrap_session(self, provider, router):
        seen: list[ProviderSession] = []
        controller = LoginController(provider, router, on_session=seen.append)

        await controller.initialize()

        assert len(seen) == 1
        assert seen[0].is_anonymous


# --- Credential sign-in ---


class TestSignIn:
    @pytest.mark.asyncio
    async def test_not_ready_never_calls_provider(self, provider, router):
        controller = LoginController(provider, router)

        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))

        assert controller.sign_in_state.error == (
            "Authentication service is not ready. Please wait."
        )
        assert controller.sign_in_state.error_kind is AuthErrorKind.NOT_READY
        assert provider.call_count("sign_in_with_email_and_password") == 0
        assert controller.sign_in_state.loading is False

    @pytest.mark.asyncio
    async def test_empty_password_scenario(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.set_password("")

        await controller.sign_in()

        assert controller.sign_in_state.error == "Email and password are required."
        assert provider.call_count("sign_in_with_email_and_password") == 0
        assert router.paths == []

    @pytest.mark.asyncio
    async def test_wrong_password_scenario(self, provider, router):
        controller = await ready_controller(provider, router)

        await controller.sign_in(CredentialForm("a@b.com", "not-it"))

        assert controller.sign_in_state.error == "Invalid email or password."
        assert controller.sign_in_state.error_kind is AuthErrorKind.AUTH_FAILURE
        assert controller.sign_in_state.loading is False
        assert router.paths == []

    @pytest.mark.asyncio
    async def test_success_navigates_once(self, provider, router):
        seen: list[ProviderSession] = []
        controller = await ready_controller(provider, router, on_session=seen.append)

        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))

        assert router.paths == ["/"]
        assert controller.sign_in_state.loading is False
        assert controller.sign_in_state.error is None
        assert controller.session is not None
        assert controller.session.email == ACCOUNT_EMAIL
        assert seen[-1].email == ACCOUNT_EMAIL

    @pytest.mark.asyncio
    async def test_custom_home_path(self, provider, router):
        controller = await ready_controller(provider, router, home_path="/app")

        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))

        assert router.paths == ["/app"]

    @pytest.mark.asyncio
    async def test_new_attempt_clears_previous_error(self, provider, router):
        controller = await ready_controller(provider, router)
        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, "bad"))
        assert controller.sign_in_state.error is not None

        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))

        assert controller.sign_in_state.error is None

    @pytest.mark.asyncio
    async def test_lockout_after_repeated_failures(self, provider, router):
        controller = await ready_controller(provider, router)

        for _ in range(provider.max_failed_attempts):
            await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, "bad"))
        await controller.sign_in(CredentialForm(ACCOUNT_EMAIL, ACCOUNT_PASSWORD))

        assert controller.sign_in_state.error == "Too many login attempts. Try again later."
        assert router.paths == []

    @pytest.mark.asyncio
    async def test_second_submit_while_loading_is_noop(self, router):
        provider = GatedProvider()
        controller = await ready_controller(provider, router)

        first = asyncio.ensure_future(controller.sign_in(CredentialForm("a@b.com", "pw")))
        await settle()
        assert controller.sign_in_state.loading is True
        assert controller.form_disabled is True

        await controller.sign_in(CredentialForm("other@b.com", "pw2"))
        assert provider.sign_in_calls == 1
        assert controller.sign_in_state.error is None

        provider.sign_in_release.set()
        await first
        assert router.paths == ["/"]
        assert controller.sign_in_state.loading is False

    @pytest.mark.asyncio
    async def test_form_read_only_while_in_flight(self, router):
        provider = GatedProvider()
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.set_password("pw")

        task = asyncio.ensure_future(controller.sign_in())
        await settle()
        controller.set_email("changed@b.com")
        controller.set_password("changed")
        assert controller.form == CredentialForm("a@b.com", "pw")

        provider.sign_in_release.set()
        await task
        controller.set_email("changed@b.com")
        assert controller.form.email == "changed@b.com"

    @pytest.mark.asyncio
    async def test_loading_cleared_on_failure(self, router):
        provider = GatedProvider()
        provider.sign_in_error = ProviderError("auth/network-request-failed", "offline")
        controller = await ready_controller(provider, router)

        task = asyncio.ensure_future(controller.sign_in(CredentialForm("a@b.com", "pw")))
        await settle()
        assert controller.sign_in_state.loading is True

        provider.sign_in_release.set()
        await task

        assert controller.sign_in_state.loading is False
        assert controller.sign_in_state.error == "offline"
        assert controller.sign_in_state.error_kind is AuthErrorKind.NETWORK_OR_UNKNOWN


# --- Reset dialog ---


class TestResetModal:
    @pytest.mark.asyncio
    async def test_open_seeds_email(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")

        controller.open_modal()

        assert controller.modal.open is True
        assert controller.modal.email == "a@b.com"
        assert controller.modal.error is None
        assert controller.modal.success is None

    @pytest.mark.asyncio
    async def test_open_ignored_while_not_ready(self, provider, router):
        controller = LoginController(provider, router)

        controller.open_modal()

        assert controller.modal.open is False

    @pytest.mark.asyncio
    async def test_success_scenario(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.open_modal()

        await controller.request_reset()

        assert controller.modal.success == RESET_SENT_MESSAGE
        assert controller.modal.error is None
        assert controller.modal.email == ""
        assert controller.modal.input_visible is False
        assert controller.modal.loading is False
        assert provider.get_last_reset().recipient == "a@b.com"

    @pytest.mark.asyncio
    async def test_success_is_terminal(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.open_modal()
        await controller.request_reset()

        await controller.request_reset("a@b.com")

        assert provider.call_count("send_password_reset_email") == 1

    @pytest.mark.asyncio
    async def test_close_then_reopen_is_clean(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.open_modal()
        await controller.request_reset()

        controller.close_modal()
        assert controller.modal.open is False
        assert controller.modal.success is None
        assert controller.modal.error is None
        assert controller.modal.loading is False

        controller.open_modal()
        assert controller.modal.success is None
        assert controller.modal.error is None
        assert controller.modal.input_visible is True

    @pytest.mark.asyncio
    async def test_unknown_account(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.open_modal()

        await controller.request_reset("nobody@b.com")

        assert controller.modal.error == "No account found with that email address."
        assert controller.modal.success is None

    @pytest.mark.asyncio
    async def test_other_code_surfaces_raw_message(self, provider, router):
        provider.fail_with("send_password_reset_email", "auth/too-many-requests", "Slow down.")
        controller = await ready_controller(provider, router)
        controller.open_modal()

        await controller.request_reset("a@b.com")

        assert controller.modal.error == "Slow down."

    @pytest.mark.asyncio
    async def test_empty_email(self, provider, router):
        controller = await ready_controller(provider, router)
        controller.open_modal()

        await controller.request_reset()

        assert controller.modal.error == "Please enter your email address."
        assert controller.modal.error_kind is AuthErrorKind.VALIDATION
        assert provider.call_count("send_password_reset_email") == 0

    @pytest.mark.asyncio
    async def test_request_ignored_when_closed(self, provider, router):
        controller = await ready_controller(provider, router)

        await controller.request_reset("a@b.com")

        assert provider.call_count("send_password_reset_email") == 0

    @pytest.mark.asyncio
    async def test_second_request_while_loading_is_noop(self, router):
        provider = GatedProvider()
        controller = await ready_controller(provider, router)
        controller.open_modal()

        first = asyncio.ensure_future(controller.request_reset("a@b.com"))
        await settle()
        await controller.request_reset("a@b.com")
        assert provider.reset_calls == 1

        provider.reset_release.set()
        await first
        assert controller.modal.success == RESET_SENT_MESSAGE

    @pytest.mark.asyncio
    async def test_late_resolution_after_close_is_inert(self, router):
        provider = GatedProvider()
        controller = await ready_controller(provider, router)
        controller.open_modal()

        task = asyncio.ensure_future(controller.request_reset("a@b.com"))
        await settle()
        assert controller.modal.loading is True

        controller.close_modal()
        assert controller.modal.loading is False

        provider.reset_release.set()
        await task

        assert controller.modal.open is False
        assert controller.modal.success is None
        assert controller.modal.error is None
        assert controller.modal.loading is False

    @pytest.mark.asyncio
    async def test_late_failure_does_not_leak_into_reopened_dialog(self, router):
        provider = GatedProvider()
        provider.reset_error = ProviderError("auth/user-not-found")
        controller = await ready_controller(provider, router)
        controller.open_modal()

        task = asyncio.ensure_future(controller.request_reset("a@b.com"))
        await settle()
        controller.close_modal()
        controller.open_modal()

        provider.reset_release.set()
        await task

        assert controller.modal.open is True
        assert controller.modal.error is None
        assert controller.modal.loading is False


# --- Interleaving ---


class TestIndependentFlows:
    @pytest.mark.asyncio
    async def test_sign_in_and_reset_in_flight_together(self, router):
        provider = GatedProvider()
        provider.sign_in_error = ProviderError("auth/wrong-password")
        controller = await ready_controller(provider, router)
        controller.set_email("a@b.com")
        controller.open_modal()

        reset = asyncio.ensure_future(controller.request_reset())
        await settle()
        sign_in = asyncio.ensure_future(controller.sign_in(CredentialForm("a@b.com", "pw")))
        await settle()
        assert controller.modal.loading is True
        assert controller.sign_in_state.loading is True

        provider.reset_release.set()
        await reset
        assert controller.modal.success == RESET_SENT_MESSAGE
        assert controller.sign_in_state.loading is True
        assert controller.sign_in_state.error is None

        provider.sign_in_release.set()
        await sign_in
        assert controller.sign_in_state.error == "Invalid email or password."
        assert controller.modal.error is None
        assert controller.modal.success == RESET_SENT_MESSAGE

    @pytest.mark.asyncio
    async def test_listeners_notified(self, provider, router):
        controller = LoginController(provider, router)
        calls: list[bool] = []
        controller.add_listener(lambda: calls.append(controller.is_ready))

        await controller.initialize()

        assert calls[-1] is True
