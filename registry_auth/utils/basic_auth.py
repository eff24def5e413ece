"""
Parsing of RFC 7617 ``Basic`` credentials out of an ``Authorization`` header.

Every failure raises :class:`ClientInputError`; callers decide how to answer.
"""

import base64
import binascii

from registry_auth.domain.exceptions import ClientInputError
from registry_auth.domain.models.auth_models import Credential

BASIC_SCHEME = "basic"


def extract_basic_token(authorization: str | None) -> str:
    """Return the base64 token of a ``Basic <token>`` header value."""
    if not authorization:
        raise ClientInputError("Authorization header is missing")

    scheme, separator, token = authorization.partition(" ")
    if not separator or scheme.lower() != BASIC_SCHEME:
        raise ClientInputError("Authorization scheme is not Basic")
    if not token or " " in token:
        raise ClientInputError("Basic token is missing or malformed")
    return token


def decode_basic_token(token: str) -> Credential:
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ClientInputError("Basic token is not valid base64") from e

    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ClientInputError("Basic token is not valid UTF-8") from e

    username, separator, password = decoded.partition(":")
    if not separator:
        raise ClientInputError("Basic token has no username/password separator")
    return Credential(username=username, password=password)


def parse_basic_authorization(authorization: str | None) -> Credential:
    return decode_basic_token(extract_basic_token(authorization))


def encode_basic_authorization(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"
