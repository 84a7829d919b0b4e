"""Firebase Authentication client over the Identity Toolkit REST API"""

import logging
from typing import Any

import httpx

from src.core.ports.identity import (
    ALREADY_SIGNED_IN,
    INTERNAL_ERROR,
    NETWORK_REQUEST_FAILED,
    PersistenceMode,
    ProviderError,
    ProviderSession,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://identitytoolkit.googleapis.com/v1"

# REST error reasons -> client error codes
_REST_ERROR_CODES: dict[str, str] = {
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "INVALID_EMAIL": "auth/invalid-email",
    "MISSING_EMAIL": "auth/invalid-email",
    "MISSING_PASSWORD": "auth/missing-password",
    "USER_DISABLED": "auth/user-disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
    "INVALID_CUSTOM_TOKEN": "auth/invalid-custom-token",
    "CREDENTIAL_MISMATCH": "auth/custom-token-mismatch",
    "OPERATION_NOT_ALLOWED": "auth/operation-not-allowed",
    "ADMIN_ONLY_OPERATION": "auth/admin-restricted-operation",
    "PASSWORD_LOGIN_DISABLED": "auth/operation-not-allowed",
    "QUOTA_EXCEEDED": "auth/quota-exceeded",
}


class FirebaseIdentityClient:
    """
    Identity provider client for Firebase Authentication.

    Features:
    - Anonymous, custom-token and email/password sign-in
    - Password reset email dispatch
    - Session-scoped persistence held in memory for the process lifetime
    - REST error reasons translated to ``auth/*`` codes
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the Firebase client.

        Args:
            api_key: Web API key of the Firebase project
            base_url: Identity Toolkit base URL (override for the emulator)
            timeout: Per-request timeout in seconds
            client: Pre-built httpx client, owned by the caller. Without one
                each request opens and closes its own client.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self.persistence = PersistenceMode.SESSION
        self.current_session: ProviderSession | None = None

        logger.info(f"Initialized FirebaseIdentityClient against {self.base_url}")

    async def set_persistence(self, mode: PersistenceMode) -> None:
        self.persistence = mode
        if mode is PersistenceMode.NONE:
            self.current_session = None
        logger.debug(f"Persistence set to {mode.value}")

    async def sign_in_anonymously(self) -> ProviderSession:
        self._reject_if_signed_in()
        data = await self._post("accounts:signUp", {"returnSecureToken": True})
        return self._keep(self._session_from(data, is_anonymous=True))

    async def sign_in_with_custom_token(self, token: str) -> ProviderSession:
        self._reject_if_signed_in()
        data = await self._post(
            "accounts:signInWithCustomToken",
            {"token": token, "returnSecureToken": True},
        )
        return self._keep(self._session_from(data, is_anonymous=False))

    async def sign_in_with_email_and_password(
        self, email: str, password: str
    ) -> ProviderSession:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._keep(self._session_from(data, is_anonymous=False))

    async def send_password_reset_email(self, email: str) -> None:
        await self._post(
            "accounts:sendOobCode",
            {"requestType": "PASSWORD_RESET", "email": email},
        )
        logger.info("Password reset email requested")

    async def _post(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST to an Identity Toolkit method.

        Raises:
            ProviderError: On transport failure or an error response
        """
        url = f"{self.base_url}/{method}"
        params = {"key": self.api_key}
        try:
            if self._client is not None:
                response = await self._client.post(url, params=params, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, params=params, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Identity Toolkit request {method} failed: {str(e)}")
            raise ProviderError(
                NETWORK_REQUEST_FAILED,
                "A network error has occurred. Please check your connection.",
            ) from e

        if response.is_success:
            return response.json()

        raise translate_error_response(response)

    def _reject_if_signed_in(self) -> None:
        if self.persistence is PersistenceMode.SESSION and self.current_session is not None:
            raise ProviderError(ALREADY_SIGNED_IN, "A session is already active.")

    def _keep(self, session: ProviderSession) -> ProviderSession:
        if self.persistence is not PersistenceMode.NONE:
            self.current_session = session
        return session

    @staticmethod
    def _session_from(data: dict[str, Any], is_anonymous: bool) -> ProviderSession:
        return ProviderSession(
            uid=data.get("localId", ""),
            is_anonymous=is_anonymous,
            email=data.get("email") or None,
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )


def translate_error_response(response: httpx.Response) -> ProviderError:
    """Turn an Identity Toolkit error body into a coded ProviderError."""
    try:
        raw = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        logger.error(f"Unreadable Identity Toolkit error (HTTP {response.status_code})")
        return ProviderError(INTERNAL_ERROR, f"Unexpected response (HTTP {response.status_code}).")

    # "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been ..."
    reason, _, detail = str(raw).partition(" : ")
    reason = reason.strip()

    if reason.startswith("API key not valid"):
        return ProviderError("auth/invalid-api-key", reason)

    code = _REST_ERROR_CODES.get(reason, INTERNAL_ERROR)
    message = detail.strip() or reason.replace("_", " ").capitalize() + "."
    logger.warning(f"Identity Toolkit error {reason} -> {code}")
    return ProviderError(code, message)
