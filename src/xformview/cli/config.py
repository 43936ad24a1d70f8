#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import os
from pathlib import Path
from typing import Any

import click
import typer

from xformview.auth import AUTH_TYPE_NAMES
from xformview.config import ViewerConfig
from xformview.defaults import DEFAULT_API_URL, DEFAULT_AUTH_TYPE

_HIDDEN_INPUT = 6 * "*"


def configure_viewer(
    config_path: Path | str | None = None,
    **cli_params: Any,
) -> Path:
    """Write the viewer configuration, prompting for missing values.

    Values not given by `cli_params` are prompted for,
    using the previous configuration as defaults.
    """
    prev_params = ViewerConfig.create(config_path=config_path).to_dict()
    curr_params: dict[str, Any] = {}

    api_url = cli_params.get("api_url")
    if not api_url:
        api_url = typer.prompt(
            "Cluster URL",
            default=prev_params.get("api_url") or DEFAULT_API_URL,
        )
    curr_params.update(api_url=api_url)

    auth_type = cli_params.get("auth_type")
    if auth_type is None:
        auth_type = typer.prompt(
            f"Authorisation type ({'|'.join(AUTH_TYPE_NAMES)})",
            default=prev_params.get("auth_type") or DEFAULT_AUTH_TYPE,
        )
    if auth_type not in AUTH_TYPE_NAMES:
        raise click.ClickException(
            f"Invalid authorisation type {auth_type!r},"
            f" must be one of {', '.join(AUTH_TYPE_NAMES)}."
        )
    curr_params.update(auth_type=auth_type)

    if auth_type != "none":
        curr_params.update(_configure_auth(auth_type, cli_params, prev_params))

    config = ViewerConfig(**curr_params)
    return config.write(config_path=config_path)


def _configure_auth(
    auth_type: str, cli_params: dict[str, Any], prev_config: dict[str, Any]
) -> dict[str, Any]:
    auth_params: dict[str, Any] = {}

    if auth_type == "basic":
        username = cli_params.get("username")
        if username is None:
            username = typer.prompt(
                "Username",
                default=(
                    prev_config.get("username")
                    or os.environ.get("USER", os.environ.get("USERNAME"))
                ),
            )
        auth_params.update(username=username)
        auth_params.update(
            password=_prompt_secret(
                "Password", cli_params.get("password"), prev_config.get("password")
            )
        )

    elif auth_type == "token":
        auth_params.update(
            token=_prompt_secret(
                "Access token", cli_params.get("token"), prev_config.get("token")
            )
        )
        use_bearer = cli_params.get("use_bearer")
        if use_bearer is None:
            use_bearer = typer.confirm(
                "Send token as bearer token?",
                default=bool(prev_config.get("use_bearer")),
            )
        auth_params.update(use_bearer=use_bearer)

    elif auth_type == "api-key":
        auth_params.update(
            api_key=_prompt_secret(
                "API key", cli_params.get("api_key"), prev_config.get("api_key")
            )
        )

    return auth_params


def _prompt_secret(text: str, value: str | None, prev_value: str | None) -> str:
    if value is not None:
        return value
    _value = typer.prompt(
        text,
        type=str,
        hide_input=True,
        default=_HIDDEN_INPUT if prev_value else None,
    )
    if _value == _HIDDEN_INPUT and prev_value:
        return prev_value
    return _value
