import logging
from collections.abc import Callable

from src.core.ports.identity import ProviderError, ProviderSession
from src.domain.auth_errors import (
    AuthErrorKind,
    ErrorClassification,
    classify_error,
    kind_for,
    sign_in_message,
)

from .models import CredentialForm, SignInOutput
from .ports import RouterPort, SignInProviderPort

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Authentication service is not ready. Please wait."
MISSING_FIELDS_MESSAGE = "Email and password are required."


def check_preconditions(
    form: CredentialForm, *, ready: bool, provider_available: bool
) -> SignInOutput | None:
    """Return the rejection for the first failed precondition, or None."""
    if not ready or not provider_available:
        return SignInOutput(error=NOT_READY_MESSAGE, kind=AuthErrorKind.NOT_READY)

    if not form.email or not form.password:
        return SignInOutput(error=MISSING_FIELDS_MESSAGE, kind=AuthErrorKind.VALIDATION)

    return None


def _failed(failure: ErrorClassification) -> SignInOutput:
    return SignInOutput(
        attempted=True,
        error=sign_in_message(failure.code, failure.raw_message),
        kind=kind_for(failure.category),
    )


async def run_sign_in(
    form: CredentialForm,
    provider: SignInProviderPort | None,
    router: RouterPort,
    *,
    ready: bool,
    home_path: str = "/",
    on_success: Callable[[ProviderSession], None] | None = None,
) -> SignInOutput:
    rejected = check_preconditions(form, ready=ready, provider_available=provider is not None)
    if rejected:
        return rejected
    assert provider is not None

    try:
        session = await provider.sign_in_with_email_and_password(form.email, form.password)
    except ProviderError as e:
        logger.warning(f"Sign-in failed: {e.code}")
        return _failed(classify_error(e.code, e.message))
    except Exception as e:
        logger.exception("Unexpected sign-in error")
        return _failed(classify_error(None, str(e)))

    if on_success is not None:
        on_success(session)
    router.navigate(home_path)
    return SignInOutput(session=session, success=True, attempted=True)


async def run(
    form: CredentialForm,
    *,
    provider: SignInProviderPort | None,
    router: RouterPort,
    ready: bool,
    home_path: str = "/",
) -> SignInOutput:
    return await run_sign_in(form, provider, router, ready=ready, home_path=home_path)
