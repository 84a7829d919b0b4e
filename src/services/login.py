import asyncio
import logging
from collections.abc import Callable

from src.components.auth import (
    CredentialForm,
    CredentialSignInState,
    check_preconditions,
    run_sign_in,
)
from src.components.bootstrap import BootstrapInput, BootstrapOutcome, run_bootstrap
from src.components.password_reset import (
    ResetInput,
    ResetModalState,
    run_password_reset,
)
from src.components.password_reset import check_preconditions as check_reset_preconditions
from src.core.ports.identity import IdentityProviderPort, PersistenceMode, ProviderSession
from src.core.ports.navigation import NavigationPort
from src.domain.auth_errors import AuthErrorKind
from src.domain.readiness import ReadinessGate, SessionReadiness

logger = logging.getLogger(__name__)

INITIALIZING_MESSAGE = "Initializing Authentication Service..."


class LoginController:
    """
    State owner for the sign-in page.

    Holds the readiness gate, the credential form and its sign-in state,
    and the password reset dialog. Each operation gates itself on its own
    loading flag; the two may be in flight together since they write
    disjoint fields.
    """

    def __init__(
        self,
        provider: IdentityProviderPort | None,
        router: NavigationPort,
        bootstrap_token: str | None = None,
        persistence: PersistenceMode = PersistenceMode.SESSION,
        home_path: str = "/",
        on_session: Callable[[ProviderSession], None] | None = None,
    ):
        self.provider = provider
        self.router = router
        self.bootstrap_token = bootstrap_token
        self.persistence = persistence
        self.home_path = home_path
        self.on_session = on_session

        self.gate = ReadinessGate()
        self.form = CredentialForm()
        self.sign_in_state = CredentialSignInState()
        self.modal = ResetModalState()

        self.outcome: BootstrapOutcome | None = None
        self.session: ProviderSession | None = None

        self._bootstrap_task: asyncio.Task[BootstrapOutcome] | None = None
        self._modal_session = 0
        self._listeners: list[Callable[[], None]] = []

    # --- Observation ---

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    @property
    def readiness(self) -> SessionReadiness:
        return self.gate.state

    @property
    def is_ready(self) -> bool:
        return self.gate.is_ready

    @property
    def form_disabled(self) -> bool:
        return self.sign_in_state.loading or not self.gate.is_ready

    @property
    def status_message(self) -> str | None:
        if not self.gate.is_ready and not self.sign_in_state.error:
            return INITIALIZING_MESSAGE
        return None

    # --- Bootstrap ---

    async def initialize(self) -> BootstrapOutcome:
        """Run the silent bootstrap once; later calls get the same outcome."""
        if self._bootstrap_task is None:
            self._bootstrap_task = asyncio.ensure_future(self._bootstrap())
        return await self._bootstrap_task

    async def _bootstrap(self) -> BootstrapOutcome:
        outcome = await run_bootstrap(
            BootstrapInput(token=self.bootstrap_token, persistence=self.persistence),
            self.provider,
            self.gate,
        )
        self.outcome = outcome
        if outcome.session is not None:
            self._store_session(outcome.session)
        if outcome.error:
            self.sign_in_state.error = outcome.error
            self.sign_in_state.error_kind = (
                AuthErrorKind.PROVIDER_UNAVAILABLE
                if self.provider is None
                else AuthErrorKind.NETWORK_OR_UNKNOWN
            )
        logger.info(f"Bootstrap finished: {outcome.kind.value}")
        self._notify()
        return outcome

    def _store_session(self, session: ProviderSession) -> None:
        self.session = session
        if self.on_session is not None:
            self.on_session(session)

    # --- Credential sign-in ---

    def set_email(self, value: str) -> None:
        if self.sign_in_state.loading:
            return
        self.form = CredentialForm(email=value, password=self.form.password)

    def set_password(self, value: str) -> None:
        if self.sign_in_state.loading:
            return
        self.form = CredentialForm(email=self.form.email, password=value)

    async def sign_in(self, form: CredentialForm | None = None) -> None:
        state = self.sign_in_state
        if state.loading:
            logger.debug("Sign-in already in flight; ignoring submit")
            return

        if form is not None:
            self.form = form
        form = self.form

        state.error = None
        state.error_kind = None

        rejected = check_preconditions(
            form, ready=self.gate.is_ready, provider_available=self.provider is not None
        )
        if rejected:
            state.error = rejected.error
            state.error_kind = rejected.kind
            self._notify()
            return

        state.loading = True
        self._notify()
        try:
            result = await run_sign_in(
                form,
                self.provider,
                self.router,
                ready=self.gate.is_ready,
                home_path=self.home_path,
                on_success=self._store_session,
            )
            if not result.success:
                state.error = result.error
                state.error_kind = result.kind
        finally:
            state.loading = False
            self._notify()

    # --- Password reset dialog ---

    def open_modal(self) -> None:
        if self.form_disabled:
            return
        self._modal_session += 1
        self.modal.email = self.form.email
        self.modal.clear_messages()
        self.modal.open = True
        self._notify()

    def close_modal(self) -> None:
        # Any request still in flight belongs to the old session and is dropped
        self._modal_session += 1
        self.modal.open = False
        self.modal.clear_messages()
        self.modal.loading = False
        self._notify()

    def set_reset_email(self, value: str) -> None:
        if self.modal.loading or self.modal.success is not None:
            return
        self.modal.email = value

    async def request_reset(self, email: str | None = None) -> None:
        modal = self.modal
        if not modal.open or modal.loading or modal.success is not None:
            return

        if email is not None:
            modal.email = email

        modal.clear_messages()

        reset_input = ResetInput(email=modal.email)
        rejected = check_reset_preconditions(
            reset_input, provider_available=self.provider is not None
        )
        if rejected:
            modal.error = rejected.error
            modal.error_kind = rejected.kind
            self._notify()
            return

        session_id = self._modal_session
        modal.loading = True
        self._notify()
        try:
            result = await run_password_reset(reset_input, self.provider)
            if session_id != self._modal_session:
                logger.debug("Reset dialog closed before the request finished; dropping result")
                return
            if result.success:
                modal.success = result.message
                modal.email = ""
            else:
                modal.error = result.error
                modal.error_kind = result.kind
        finally:
            if session_id == self._modal_session:
                modal.loading = False
            self._notify()
