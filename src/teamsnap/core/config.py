from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

ROOT_URL = "https://api.teamsnap.com/v3/"

AUTH_TOKEN_ENV = "TEAMSNAP_AUTH_TOKEN"
ROOT_URL_ENV = "TEAMSNAP_ROOT_URL"


class MissingAuthTokenError(ValueError):
    """Raised when no bearer token is configured."""


@dataclass(frozen=True)
class TeamSnapConfig:
    auth_token: str
    root_url: str = ROOT_URL
    timeout_seconds: Optional[float] = None  # None: wait indefinitely
    raise_for_status: bool = False

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True, **overrides) -> "TeamSnapConfig":
        auth_token, root_url = load_env_config(use_dotenv=use_dotenv)
        if not auth_token:
            raise MissingAuthTokenError(f"{AUTH_TOKEN_ENV} not set")
        return cls(auth_token=auth_token, root_url=root_url or ROOT_URL, **overrides)


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the bearer token and root URL from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    auth_token = os.getenv(AUTH_TOKEN_ENV, "").strip()
    root_url = os.getenv(ROOT_URL_ENV, "").strip()
    return auth_token, root_url


__all__ = [
    "ROOT_URL",
    "AUTH_TOKEN_ENV",
    "ROOT_URL_ENV",
    "MissingAuthTokenError",
    "TeamSnapConfig",
    "load_env_config",
]
