from abc import ABC, abstractmethod

from registry_auth.domain.models.auth_models import Credential, VerifyResult


class CredentialVerifier(ABC):
    """Abstract interface for credential verifiers."""

    @abstractmethod
    async def verify(self, credential: Credential) -> VerifyResult:
        """
        Decide whether *credential* may pass the gate.

        The credential is always a well-formed username/password pair.
        Implementations must be safe to call concurrently.

        Returns:
            Accepted or Rejected(reason)

        Raises:
            VerifierUnavailableError: When no decision could be reached
        """
