import asyncio
import hashlib
import hmac
from typing import Annotated, Callable

from fastapi import Depends

from registry_auth.adapters.verification.adapter_http_verifier import HttpVerifier
from registry_auth.adapters.verification.adapter_static_policy import (
    AllowAllVerifier,
    DenyAllVerifier,
)
from registry_auth.adapters.verification.exceptions import VerifierUnavailableError
from registry_auth.adapters.verification.port import CredentialVerifier
from registry_auth.config.dependencies import DEnvironmentVariables
from registry_auth.config.environment_variables import (
    DEFAULT_REALM,
    DEFAULT_VERIFIER_TIMEOUT_SECONDS,
    EnvironmentVariables,
    VerifierProvider,
)
from registry_auth.domain.exceptions import ClientInputError, ServiceError
from registry_auth.domain.models.auth_models import (
    Accepted,
    AuthRequest,
    AuthResponse,
    Credential,
    Rejected,
    VerifyResult,
)
from registry_auth.utils.basic_auth import parse_basic_authorization
from registry_auth.utils.logging import make_logger

logger = make_logger(__name__)


REDACTED_USER = "<redacted>"


def username_fingerprint(username: str, key: str) -> str:
    digest = hmac.new(key.encode("utf-8"), username.encode("utf-8"), hashlib.sha256)
    return "hmac:" + digest.hexdigest()[:16]


class Gate:
    """
    Basic-Auth checkpoint for a single endpoint.

    ``handle`` never raises for anything a client sends or for anything the
    verifier does: every failure ends in the same 401 challenge, and only an
    accepted credential yields 200.
    """

    def __init__(
        self,
        verifier: CredentialVerifier,
        realm: str = DEFAULT_REALM,
        verifier_timeout: float = DEFAULT_VERIFIER_TIMEOUT_SECONDS,
        log_usernames: bool = False,
        username_hmac_key: str | None = None,
    ):
        self.verifier = verifier
        self.realm = realm
        self.verifier_timeout = verifier_timeout
        self.log_usernames = log_usernames
        self.username_hmac_key = username_hmac_key

    async def handle(self, request: AuthRequest) -> AuthResponse:
        if not isinstance(request, AuthRequest):
            raise TypeError(
                f"Gate.handle expects an AuthRequest, got {type(request).__name__}"
            )

        try:
            credential = parse_basic_authorization(request.header("authorization"))
        except ClientInputError as e:
            logger.info(
                f"[gate] {request.method} {request.path} challenged: {e.message}"
            )
            return AuthResponse.challenge(self.realm)

        outcome = await self._verify(credential)
        if isinstance(outcome, Accepted):
            self._audit(request, credential, "accepted")
            return AuthResponse.accepted()

        reason = outcome.reason if isinstance(outcome, Rejected) else "unknown outcome"
        self._audit(request, credential, f"rejected ({reason})")
        return AuthResponse.challenge(self.realm)

    async def _verify(self, credential: Credential) -> VerifyResult:
        try:
            return await asyncio.wait_for(
                self.verifier.verify(credential), timeout=self.verifier_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"[gate] Verifier did not answer within {self.verifier_timeout}s"
            )
            return Rejected(reason="verifier timed out")
        except VerifierUnavailableError as e:
            logger.warning(f"[gate] Verifier unavailable: {e.message}")
            return Rejected(reason="verifier unavailable")
        except Exception as e:
            # Exception text may echo the credential; log the type only.
            logger.error(f"[gate] Verifier failed with {e.__class__.__name__}")
            return Rejected(reason="verifier failed")

    def _audit(self, request: AuthRequest, credential: Credential, outcome: str):
        if self.log_usernames:
            user = credential.username
        elif self.username_hmac_key:
            user = username_fingerprint(credential.username, self.username_hmac_key)
        else:
            user = REDACTED_USER
        logger.info(
            f"[gate] {request.method} {request.path} user={user} credential {outcome}"
        )


VERIFIER_FACTORIES: dict[
    VerifierProvider, Callable[[EnvironmentVariables], CredentialVerifier]
] = {
    VerifierProvider.deny_all: lambda _: DenyAllVerifier(),
    VerifierProvider.allow_all: lambda _: AllowAllVerifier(),
    VerifierProvider.http: lambda env: HttpVerifier(
        base_url=env.VERIFIER_BASE_URL, path=env.VERIFIER_PATH
    ),
}


def build_verifier(environment_variables: EnvironmentVariables) -> CredentialVerifier:
    try:
        provider = VerifierProvider(environment_variables.VERIFIER_PROVIDER)
    except ValueError as e:
        raise ServiceError(
            f"Verifier provider not supported: {environment_variables.VERIFIER_PROVIDER}"
        ) from e
    return VERIFIER_FACTORIES[provider](environment_variables)


def get_gate(environment_variables: DEnvironmentVariables) -> Gate:
    return Gate(
        verifier=build_verifier(environment_variables),
        realm=environment_variables.AUTH_REALM,
        verifier_timeout=environment_variables.VERIFIER_TIMEOUT_SECONDS,
        log_usernames=environment_variables.AUDIT_LOG_USERNAMES,
        username_hmac_key=environment_variables.AUDIT_USERNAME_HMAC_KEY,
    )


DGate = Annotated[Gate, Depends(get_gate)]
