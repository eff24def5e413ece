from registry_auth.adapters.verification.port import CredentialVerifier
from registry_auth.domain.models.auth_models import (
    Accepted,
    Credential,
    Rejected,
    VerifyResult,
)


class DenyAllVerifier(CredentialVerifier):
    """Rejects every credential. Used when no verifier is configured."""

    async def verify(self, credential: Credential) -> VerifyResult:
        return Rejected(reason="no verifier configured")


class AllowAllVerifier(CredentialVerifier):
    """
    Accepts every well-formed credential. Only suitable for local
    development against a registry that does its own checks.
    """

    async def verify(self, credential: Credential) -> VerifyResult:
        return Accepted()
