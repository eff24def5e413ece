from registry_auth.domain.exceptions import ServiceError


class VerifierUnavailableError(ServiceError):
    """
    Exception raised when the credential verifier cannot give an answer
    (timeout, network partition, unexpected upstream response).
    """

    code = 503


class VerifierTimeoutError(VerifierUnavailableError):
    """
    Exception raised when the credential verifier does not answer within the
    configured bound.
    """

    code = 504
