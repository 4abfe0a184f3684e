"""
Firebase Authentication Service

Identity provider adapter backed by the Firebase Admin SDK for account and token
operations and by the Identity Toolkit REST API for password checks.
"""

import asyncio
import json
from typing import Any

import httpx
from firebase_admin import App, auth, credentials, initialize_app
from firebase_admin.exceptions import FirebaseError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gatehouse.core.config import FirebaseConfig
from gatehouse.core.errors import (
    AuthorizationErrorCode,
    ConfigurationError,
    ValidationError,
)
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.domain.errors import (
    AuthErrorCode,
    ExternalAuthenticationError,
)
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    ExternalUser,
    VerifiedCredentials,
)

logger = get_logger(__name__)

FIREBASE_APP_NAME = "gatehouse"
MAX_ATTEMPTS = 3

# Identity Toolkit error messages meaning "wrong credentials"
INVALID_CREDENTIAL_MESSAGES = frozenset(
    {
        "INVALID_LOGIN_CREDENTIALS",
        "EMAIL_NOT_FOUND",
        "INVALID_PASSWORD",
        "USER_DISABLED",
        "INVALID_EMAIL",
    }
)


def _external_error(message: str, cause: Exception | None = None) -> ExternalAuthenticationError:
    return ExternalAuthenticationError(
        AuthErrorCode.EXTERNAL_AUTHENTICATION_ERROR, message=message, cause=cause
    )


class FirebaseAuthenticationService(ExternalAuthenticationService):
    """
    Firebase implementation of the identity provider port.

    The Admin SDK is synchronous, so its calls run in a worker thread.

    Usage Example:
        service = FirebaseAuthenticationService(settings.firebase)
        credentials = await service.verify_password("user@example.com", "S3cret!pw")
    """

    def __init__(
        self,
        config: FirebaseConfig,
        app: App | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._app = app or self._init_firebase(config)
        self._http_client = http_client

    @staticmethod
    def _init_firebase(config: FirebaseConfig) -> App:
        if not config.service_account_json:
            raise ConfigurationError(
                "Firebase service account is required",
                config_key="FIREBASE_SERVICE_ACCOUNT_JSON",
            )
        try:
            cred = credentials.Certificate(json.loads(config.service_account_json))
            return initialize_app(cred, name=FIREBASE_APP_NAME)
        except (ValueError, FirebaseError) as e:
            raise ConfigurationError(
                f"Failed to initialize Firebase: {e!s}",
                config_key="FIREBASE_SERVICE_ACCOUNT_JSON",
            ) from e

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.config.identity_toolkit_url,
                timeout=httpx.Timeout(self.config.request_timeout_seconds),
                headers={"Content-Type": "application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _call(self, func, *args, **kwargs) -> Any:
        return await asyncio.to_thread(func, *args, app=self._app, **kwargs)

    # =================================================================================
    # CREDENTIALS
    # =================================================================================

    async def verify_password(
        self, email: str, password: str
    ) -> VerifiedCredentials | None:
        """
        Check an email/password pair with the Identity Toolkit REST API.

        Returns:
            VerifiedCredentials, or None if the provider rejects the credentials

        Raises:
            ExternalAuthenticationError: For transport errors and unexpected responses
        """
        if not self.config.api_key:
            raise ConfigurationError("Firebase API key is required", config_key="FIREBASE_API_KEY")

        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                stop=stop_after_attempt(MAX_ATTEMPTS),
                wait=wait_exponential(multiplier=0.2, max=2),
                reraise=True,
            ):
                with attempt:
                    response = await self._client().post(
                        "/accounts:signInWithPassword",
                        params={"key": self.config.api_key},
                        json=payload,
                    )
        except httpx.HTTPError as e:
            logger.exception("Identity Toolkit request failed", error=str(e))
            raise _external_error("Identity provider request failed", e) from e

        data = response.json() if response.content else {}
        if response.status_code >= 400:
            message = str(data.get("error", {}).get("message", ""))
            # Messages may carry a suffix such as "TOO_MANY_ATTEMPTS_TRY_LATER : ..."
            if message.split(" ")[0] in INVALID_CREDENTIAL_MESSAGES:
                return None
            logger.error(
                "Identity Toolkit rejected the request",
                status_code=response.status_code,
                provider_message=message,
            )
            raise _external_error(f"Identity provider error: {message or response.status_code}")

        external_id = data.get("localId")
        id_token = data.get("idToken")
        if not external_id or not id_token:
            raise _external_error("Identity provider response is missing credentials")
        return VerifiedCredentials(external_id=external_id, id_token=id_token)

    async def create_sign_in_token(
        self, external_id: str, claims: dict[str, Any] | None = None
    ) -> str:
        try:
            token = await self._call(auth.create_custom_token, external_id, claims)
        except (FirebaseError, ValueError) as e:
            raise _external_error("Failed to create sign-in token", e) from e
        return token.decode("utf-8") if isinstance(token, bytes) else token

    async def verify_token(self, id_token: str) -> str:
        try:
            decoded = await self._call(auth.verify_id_token, id_token)
        except (FirebaseError, ValueError) as e:
            logger.info("Identity provider token rejected", error_type=type(e).__name__)
            raise ValidationError(AuthorizationErrorCode.INVALID_TOKEN) from e
        return decoded["uid"]

    # =================================================================================
    # ACCOUNTS
    # =================================================================================

    async def create_user(self, email: str, password: str) -> str:
        try:
            record = await self._call(auth.create_user, email=email, password=password)
        except auth.EmailAlreadyExistsError as e:
            raise ValidationError.for_field(AuthErrorCode.EMAIL_ALREADY_TAKEN, "email") from e
        except (FirebaseError, ValueError) as e:
            raise _external_error("Failed to create identity provider user", e) from e
        return record.uid

    async def enable_user(self, external_id: str) -> None:
        await self._set_disabled(external_id, False)

    async def disable_user(self, external_id: str) -> None:
        await self._set_disabled(external_id, True)

    async def _set_disabled(self, external_id: str, disabled: bool) -> None:
        try:
            await self._call(auth.update_user, external_id, disabled=disabled)
        except (FirebaseError, ValueError) as e:
            raise _external_error("Failed to update identity provider user", e) from e
        logger.info(
            "Identity provider user updated", external_id=external_id, disabled=disabled
        )

    async def find_user_by_id(self, external_id: str) -> ExternalUser | None:
        try:
            record = await self._call(auth.get_user, external_id)
        except auth.UserNotFoundError:
            return None
        except (FirebaseError, ValueError) as e:
            raise _external_error("Failed to load identity provider user", e) from e
        return self._to_external_user(record)

    async def find_user_by_email(self, email: str) -> ExternalUser | None:
        try:
            record = await self._call(auth.get_user_by_email, email)
        except auth.UserNotFoundError:
            return None
        except (FirebaseError, ValueError) as e:
            raise _external_error("Failed to load identity provider user", e) from e
        return self._to_external_user(record)

    @staticmethod
    def _to_external_user(record: Any) -> ExternalUser:
        provider_data = getattr(record, "provider_data", None) or []
        return ExternalUser(
            external_id=record.uid,
            email=record.email,
            display_name=record.display_name,
            provider_id=provider_data[0].provider_id if provider_data else None,
            disabled=bool(record.disabled),
        )
