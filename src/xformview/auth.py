#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import base64
from typing import Literal, Optional, TypeAlias, get_args

from pydantic_settings import BaseSettings

AuthType: TypeAlias = Literal[
    # No authentication required
    "none",
    # HTTP Basic Auth, the usual setup of the security plugin
    "basic",
    # Static token (custom header or Bearer)
    "token",
    # API key header
    "api-key",
]

AUTH_TYPE_NAMES: tuple[str, ...] = get_args(AuthType)


class AuthConfig(BaseSettings):
    """Authentication configuration."""

    # Authentication type
    auth_type: Optional[AuthType] = None

    # For type "basic"
    username: Optional[str] = None
    password: Optional[str] = None

    # For type "token"
    token: Optional[str] = None
    use_bearer: bool = False  # if True → Authorization: Bearer <token>
    token_header: str = "X-Auth-Token"

    # For type "api-key"
    api_key: Optional[str] = None
    api_key_header: str = "X-API-Key"

    @property
    def auth_headers(self) -> dict[str, str]:
        """
        Return the HTTP authentication headers for this auth configuration.
        """
        return get_auth_headers(self)


def get_auth_headers(config: AuthConfig) -> dict[str, str]:
    """
    Returns the HTTP authentication headers for given auth type.
    """

    auth_type = config.auth_type

    if auth_type is None or auth_type == "none":
        return {}

    if auth_type == "token":
        if not config.token:
            raise ValueError("Missing API token.")
        if config.use_bearer:
            return {"Authorization": f"Bearer {config.token}"}
        return {config.token_header: config.token}

    if auth_type == "api-key":
        if not config.api_key:
            raise ValueError("api_key must be set for authentication type 'api-key'.")
        return {config.api_key_header: config.api_key}

    if auth_type == "basic":
        if not (config.username and config.password):
            raise ValueError("username/password required for basic authentication.")
        creds = f"{config.username}:{config.password}"
        encoded = base64.b64encode(creds.encode()).decode()
        return {"Authorization": f"Basic {encoded}"}

    raise NotImplementedError(f"Unknown authentication type: {auth_type}")
