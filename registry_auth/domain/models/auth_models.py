from __future__ import annotations

from typing import Annotated, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

WWW_AUTHENTICATE = "WWW-Authenticate"


class AuthRequest(BaseModel):
    """
    The parts of an inbound HTTP request the gate looks at.

    Header names are lower-cased on construction so lookups through
    ``header()`` are case-insensitive.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    headers: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("headers", mode="before")
    @classmethod
    def _lowercase_header_names(cls, value):
        if value is None:
            return {}
        return {str(name).lower(): str(header) for name, header in dict(value).items()}

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class Credential(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr


class AuthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: Literal[200, 401]
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def accepted(cls) -> AuthResponse:
        return cls(status_code=200)

    @classmethod
    def challenge(cls, realm: str) -> AuthResponse:
        return cls(
            status_code=401,
            headers={WWW_AUTHENTICATE: f'Basic realm="{_quote(realm)}"'},
        )


class Accepted(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["accepted"] = "accepted"


class Rejected(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["rejected"] = "rejected"
    reason: str = "rejected"


VerifyResult = Annotated[Accepted | Rejected, Field(discriminator="outcome")]


def _quote(value: str) -> str:
    # realm is sent as an RFC 7230 quoted-string
    return value.replace("\\", "\\\\").replace('"', '\\"')
