"""Bootstrap component implementation.

Silent session bootstrap: selects session persistence, then signs in with
the externally supplied token if there is one, anonymously otherwise. The
readiness gate always ends up READY, whatever happens.
"""

from __future__ import annotations

import logging

from src.core.ports.identity import ProviderError
from src.domain.auth_errors import ErrorCategory, classify

from .models import BootstrapInput, BootstrapOutcome
from .ports import BootstrapProviderPort, ReadinessWriterPort

logger = logging.getLogger(__name__)

PROVIDER_UNAVAILABLE_MESSAGE = "Authentication service is not initialized."
INIT_FAILED_PREFIX = "Authentication initialization failed: "


async def run_bootstrap(
    bootstrap_input: BootstrapInput,
    provider: BootstrapProviderPort | None,
    gate: ReadinessWriterPort,
) -> BootstrapOutcome:
    """Execute the bootstrap attempt.

    Args:
        bootstrap_input: Optional token and the persistence mode to select.
        provider: Identity provider client, or None if it failed to load.
        gate: Readiness gate, marked READY on every exit path.

    Returns:
        BootstrapOutcome describing how (or whether) a session was obtained.
    """
    try:
        # 1. No provider: nothing to try, but the page must not hang
        if provider is None:
            logger.error("Identity provider unavailable; skipping bootstrap")
            return BootstrapOutcome.failed(PROVIDER_UNAVAILABLE_MESSAGE)

        use_token = bool(bootstrap_input.token)
        try:
            # 2. Persistence before any sign-in
            await provider.set_persistence(bootstrap_input.persistence)

            # 3. Token or anonymous
            if use_token:
                logger.info("Signing in with custom token...")
                session = await provider.sign_in_with_custom_token(
                    bootstrap_input.token or ""
                )
                return BootstrapOutcome.via_token(session)

            logger.info("Signing in anonymously...")
            session = await provider.sign_in_anonymously()
            return BootstrapOutcome.anonymous(session)

        except ProviderError as e:
            if classify(e.code) is ErrorCategory.ALREADY_SIGNED_IN:
                logger.info("Bootstrap found an existing session; continuing")
                if use_token:
                    return BootstrapOutcome.via_token(None, already_signed_in=True)
                return BootstrapOutcome.anonymous(None, already_signed_in=True)

            logger.error(f"Auth initialization error: {e.code} {e.message}")
            return BootstrapOutcome.failed(INIT_FAILED_PREFIX + (e.message or e.code))

        except Exception as e:
            logger.exception("Unexpected auth initialization error")
            return BootstrapOutcome.failed(INIT_FAILED_PREFIX + str(e))

    finally:
        gate.mark_ready()


async def run(
    bootstrap_input: BootstrapInput,
    provider: BootstrapProviderPort | None,
    gate: ReadinessWriterPort,
) -> BootstrapOutcome:
    """Main entry point for the bootstrap component."""
    return await run_bootstrap(bootstrap_input, provider, gate)
