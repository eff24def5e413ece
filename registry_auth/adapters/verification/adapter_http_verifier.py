import httpx

from registry_auth.adapters.verification.exceptions import (
    VerifierTimeoutError,
    VerifierUnavailableError,
)
from registry_auth.adapters.verification.port import CredentialVerifier
from registry_auth.domain.exceptions import ServiceError
from registry_auth.domain.models.auth_models import (
    Accepted,
    Credential,
    Rejected,
    VerifyResult,
)
from registry_auth.utils.basic_auth import encode_basic_authorization
from registry_auth.utils.cached_httpx_client import get_async_client
from registry_auth.utils.logging import make_logger

logger = make_logger(__name__)


class HttpVerifier(CredentialVerifier):
    """
    Delegates the decision to an upstream authentication endpoint.

    The credential is forwarded as a Basic ``Authorization`` header. A 2xx
    answer accepts, 401/403 rejects, anything else means the upstream could
    not decide.
    """

    def __init__(
        self,
        base_url: str | None,
        path: str = "/verify",
    ):
        if not base_url:
            raise ServiceError("VERIFIER_BASE_URL is required for the http verifier")
        self.base_url = base_url
        self.path = path or "/"

    async def verify(self, credential: Credential) -> VerifyResult:
        client = get_async_client(self.base_url)
        headers = {
            "authorization": encode_basic_authorization(
                credential.username, credential.password.get_secret_value()
            )
        }

        try:
            response = await client.request(method="GET", url=self.path, headers=headers)
        except httpx.TimeoutException as e:
            raise VerifierTimeoutError(
                f"Verifier at {self.base_url} timed out"
            ) from e
        except httpx.HTTPError as e:
            raise VerifierUnavailableError(
                f"Verifier at {self.base_url} is unreachable: {e.__class__.__name__}"
            ) from e

        if 200 <= response.status_code < 300:
            return Accepted()
        if response.status_code in (401, 403):
            return Rejected(reason=f"upstream answered HTTP {response.status_code}")

        logger.warning(
            f"[http_verifier] Unexpected HTTP {response.status_code} from {self.base_url}"
        )
        raise VerifierUnavailableError(
            f"HTTP {response.status_code}", code=502 if response.status_code < 500 else 503
        )
