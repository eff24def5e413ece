from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from pydantic import BaseModel

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class EnvVarKeys(str, Enum):
    ENVIRONMENT = "ENVIRONMENT"
    AUTH_REALM = "AUTH_REALM"
    AUTH_PATH = "AUTH_PATH"
    AUTH_METHODS = "AUTH_METHODS"
    VERIFIER_PROVIDER = "VERIFIER_PROVIDER"
    VERIFIER_BASE_URL = "VERIFIER_BASE_URL"
    VERIFIER_PATH = "VERIFIER_PATH"
    VERIFIER_TIMEOUT_SECONDS = "VERIFIER_TIMEOUT_SECONDS"
    AUDIT_LOG_USERNAMES = "AUDIT_LOG_USERNAMES"
    AUDIT_USERNAME_HMAC_KEY = "AUDIT_USERNAME_HMAC_KEY"
    HOST = "HOST"
    PORT = "PORT"


class Environment(str, Enum):
    DEV = "development"
    STAGING = "staging"
    PROD = "production"


class VerifierProvider(str, Enum):
    deny_all = "deny_all"
    allow_all = "allow_all"
    http = "http"


DEFAULT_REALM = "registry"
DEFAULT_AUTH_PATH = "/auth"
DEFAULT_VERIFIER_TIMEOUT_SECONDS = 2.0

refreshed_environment_variables = None


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


class EnvironmentVariables(BaseModel):
    ENVIRONMENT: str = Environment.DEV
    AUTH_REALM: str = DEFAULT_REALM
    AUTH_PATH: str = DEFAULT_AUTH_PATH
    AUTH_METHODS: str = "GET"
    VERIFIER_PROVIDER: str = VerifierProvider.deny_all.value
    VERIFIER_BASE_URL: Optional[str] = None
    VERIFIER_PATH: str = "/verify"
    VERIFIER_TIMEOUT_SECONDS: float = DEFAULT_VERIFIER_TIMEOUT_SECONDS
    AUDIT_LOG_USERNAMES: bool = False
    AUDIT_USERNAME_HMAC_KEY: Optional[str] = None
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def auth_methods(self) -> list[str]:
        return [
            method.strip().upper()
            for method in self.AUTH_METHODS.split(",")
            if method.strip()
        ]

    @classmethod
    def refresh(cls, force: bool = False) -> Optional[EnvironmentVariables]:
        global refreshed_environment_variables
        if refreshed_environment_variables is not None and not force:
            return refreshed_environment_variables

        if os.environ.get(EnvVarKeys.ENVIRONMENT, Environment.DEV) == Environment.DEV:
            load_dotenv(dotenv_path=Path(PROJECT_ROOT / ".env"), override=True)

        environment_variables = EnvironmentVariables(
            ENVIRONMENT=os.environ.get(EnvVarKeys.ENVIRONMENT, Environment.DEV),
            AUTH_REALM=os.environ.get(EnvVarKeys.AUTH_REALM, DEFAULT_REALM),
            AUTH_PATH=os.environ.get(EnvVarKeys.AUTH_PATH, DEFAULT_AUTH_PATH),
            AUTH_METHODS=os.environ.get(EnvVarKeys.AUTH_METHODS, "GET"),
            VERIFIER_PROVIDER=os.environ.get(
                EnvVarKeys.VERIFIER_PROVIDER, VerifierProvider.deny_all.value
            ),
            VERIFIER_BASE_URL=os.environ.get(EnvVarKeys.VERIFIER_BASE_URL),
            VERIFIER_PATH=os.environ.get(EnvVarKeys.VERIFIER_PATH, "/verify"),
            VERIFIER_TIMEOUT_SECONDS=os.environ.get(
                EnvVarKeys.VERIFIER_TIMEOUT_SECONDS, DEFAULT_VERIFIER_TIMEOUT_SECONDS
            ),
            AUDIT_LOG_USERNAMES=_parse_bool(
                os.environ.get(EnvVarKeys.AUDIT_LOG_USERNAMES)
            ),
            AUDIT_USERNAME_HMAC_KEY=os.environ.get(EnvVarKeys.AUDIT_USERNAME_HMAC_KEY),
            HOST=os.environ.get(EnvVarKeys.HOST, "0.0.0.0"),
            PORT=os.environ.get(EnvVarKeys.PORT, 8000),
        )
        refreshed_environment_variables = environment_variables
        return refreshed_environment_variables
