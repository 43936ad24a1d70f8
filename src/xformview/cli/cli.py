#  Copyright (c) 2026 by the Eozilla team and contributors
#  Permissions are hereby granted under the terms of the Apache 2.0 License:
#  https://opensource.org/license/apache-2-0.

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Any, Callable, Optional

import click
import typer

from xformview.bulk import BulkAction
from xformview.config import ViewerConfig
from xformview.query import (
    PAGE_SIZE_OPTIONS,
    SORT_FIELDS,
    SortDirection,
    query_from_url,
    query_to_url,
)
from xformview.rendering import empty_prompt, render_title, transforms_to_dataframe
from xformview.service import TransformService

from .config import configure_viewer
from .session import run_session

DEFAULT_CLI_NAME = "xformview"
DEFAULT_CLI_HELP = """
`xformview` lists, searches and pages through the transform jobs of a
cluster and enables, disables or deletes selected transform jobs.

The list is addressed like the browsable list page, either by a
query string given by `--url`, for example `from=20&size=20&search=logs`,
or by the individual options, which take precedence.
"""

ServiceFactory = Callable[[ViewerConfig], TransformService]

CLI_CONFIG_OPTION = typer.Option(
    "--config",
    "-c",
    help="Path to the configuration file.",
)
CLI_URL_OPTION = typer.Option(
    "--url",
    "-u",
    help="Query string of the list page, e.g. 'from=0&size=20&search=logs'.",
)
CLI_FROM_OPTION = typer.Option("--from", help="Offset of the first transform job.")
CLI_SIZE_OPTION = typer.Option(
    "--size", "-s", help=f"Page size, one of {', '.join(map(str, PAGE_SIZE_OPTIONS))}."
)
CLI_SEARCH_OPTION = typer.Option("--search", "-q", help="Free-text search.")
CLI_SORT_FIELD_OPTION = typer.Option(
    "--sort-field", help=f"Sort field, one of {', '.join(SORT_FIELDS)}."
)
CLI_SORT_DIRECTION_OPTION = typer.Option("--sort-direction", help="Sort direction.")
CLI_IDS_ARG = typer.Argument(help="Identifiers of the transform jobs.")


def new_cli(name: str = DEFAULT_CLI_NAME) -> typer.Typer:
    """
    Create a CLI instance.

    The service used by the commands can be replaced by passing
    an object `{"get_service": factory}` to the CLI's context,
    where `factory` is called with the effective configuration.

    Args:
        name: The name of the CLI application.
    Return:
        a `typer.Typer` instance
    """
    t = typer.Typer(name=name, help=DEFAULT_CLI_HELP, invoke_without_command=True)

    @t.callback()
    def main(
        ctx: typer.Context,
        version_: Annotated[
            bool, typer.Option("--version", help="Show version and exit.")
        ] = False,
        verbose: Annotated[
            bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
        ] = False,
    ):
        if version_:
            from xformview import __version__

            typer.echo(__version__)
            raise typer.Exit()
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if ctx.obj is None:
            ctx.obj = {}

    @t.command()
    def configure(
        config_path: Annotated[Optional[Path], CLI_CONFIG_OPTION] = None,
        api_url: Annotated[
            Optional[str], typer.Option(help="URL of the cluster.")
        ] = None,
        auth_type: Annotated[
            Optional[str], typer.Option(help="Authentication type.")
        ] = None,
        username: Annotated[Optional[str], typer.Option(help="Username.")] = None,
        password: Annotated[Optional[str], typer.Option(help="Password.")] = None,
        token: Annotated[Optional[str], typer.Option(help="API token.")] = None,
        use_bearer: Annotated[
            Optional[bool],
            typer.Option(help="Send the token as 'Authorization: Bearer'."),
        ] = None,
        api_key: Annotated[Optional[str], typer.Option(help="API key.")] = None,
    ):
        """Configure the cluster connection."""
        path = configure_viewer(
            config_path,
            api_url=api_url,
            auth_type=auth_type,
            username=username,
            password=password,
            token=token,
            use_bearer=use_bearer,
            api_key=api_key,
        )
        typer.echo(f"Configuration written to {path}")

    # noinspection PyShadowingBuiltins
    @t.command(name="list")
    def list_(
        ctx: typer.Context,
        config_path: Annotated[Optional[Path], CLI_CONFIG_OPTION] = None,
        url: Annotated[Optional[str], CLI_URL_OPTION] = None,
        from_: Annotated[Optional[int], CLI_FROM_OPTION] = None,
        size: Annotated[Optional[int], CLI_SIZE_OPTION] = None,
        search: Annotated[Optional[str], CLI_SEARCH_OPTION] = None,
        sort_field: Annotated[Optional[str], CLI_SORT_FIELD_OPTION] = None,
        sort_direction: Annotated[
            Optional[SortDirection], CLI_SORT_DIRECTION_OPTION
        ] = None,
    ):
        """List a page of transform jobs."""
        config = _get_config(config_path)
        location = _get_location(
            config, url, from_, size, search, sort_field, sort_direction
        )
        vm, notifications = _run(ctx, config, location)
        if notifications.errors:
            raise typer.Exit(1)

        state = vm.state
        typer.echo(render_title(state.transforms))
        if state.transforms:
            dataframe = transforms_to_dataframe(
                state.transforms, state.transform_metadata
            )
            typer.echo(dataframe.to_string(index=False))
        else:
            typer.echo(empty_prompt(state.query.is_filtered, loading=False))
        pagination = state.pagination
        typer.echo(
            f"Page {pagination.page_index + 1} of {pagination.page_count},"
            f" {state.total_transforms} transform job(s) in total"
        )
        typer.echo(f"Location: {query_to_url(state.query)}")

    def _bulk_command(action: BulkAction, doc: str):
        def command(
            ctx: typer.Context,
            ids: Annotated[list[str], CLI_IDS_ARG],
            config_path: Annotated[Optional[Path], CLI_CONFIG_OPTION] = None,
            url: Annotated[Optional[str], CLI_URL_OPTION] = None,
            from_: Annotated[Optional[int], CLI_FROM_OPTION] = None,
            size: Annotated[Optional[int], CLI_SIZE_OPTION] = None,
            search: Annotated[Optional[str], CLI_SEARCH_OPTION] = None,
            yes: Annotated[
                bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")
            ] = False,
        ):
            config = _get_config(config_path)
            location = _get_location(config, url, from_, size, search, None, None)

            def confirm_delete(target_ids) -> bool:
                return yes or typer.confirm(
                    f"Delete transform job(s) {', '.join(target_ids)}?"
                )

            _, notifications = _run(
                ctx,
                config,
                location,
                select=ids,
                action=action,
                confirm_delete=confirm_delete,
            )
            if notifications.errors:
                raise typer.Exit(1)

        command.__doc__ = doc
        return command

    t.command(name="enable")(
        _bulk_command(BulkAction.ENABLE, "Enable transform jobs listed on a page.")
    )
    t.command(name="disable")(
        _bulk_command(BulkAction.DISABLE, "Disable transform jobs listed on a page.")
    )
    t.command(name="delete")(
        _bulk_command(BulkAction.DELETE, "Delete transform jobs listed on a page.")
    )

    @t.command()
    def serve(
        config_path: Annotated[Optional[Path], CLI_CONFIG_OPTION] = None,
        port: Annotated[int, typer.Option(help="Port number.")] = 5006,
        demo: Annotated[
            bool, typer.Option(help="Serve in-memory demo transform jobs.")
        ] = False,
    ):
        """Serve the transforms list as web application."""
        import panel as pn

        from xformview.gui import create_app
        from xformview.services import HttpTransformService, MemoryTransformService

        config = _get_config(config_path)

        def app():
            service = (
                MemoryTransformService.create_demo()
                if demo
                else HttpTransformService.from_config(config)
            )
            return create_app(service, config)

        pn.serve({"transforms": app}, port=port, show=False)  # pragma: no cover

    return t


def _get_config(config_path: Optional[Path]) -> ViewerConfig:
    if config_path is not None and ViewerConfig.from_file(config_path) is None:
        raise click.ClickException(
            f"Configuration file {config_path} not found or empty."
        )
    return ViewerConfig.create(config_path=config_path)


def _get_location(
    config: ViewerConfig,
    url: Optional[str],
    from_: Optional[int],
    size: Optional[int],
    search: Optional[str],
    sort_field: Optional[str],
    sort_direction: Optional[SortDirection],
) -> str:
    if from_ is not None and from_ < 0:
        raise typer.BadParameter("must not be negative", param_hint="'--from'")
    if size is not None and size not in PAGE_SIZE_OPTIONS:
        raise typer.BadParameter(
            f"must be one of {', '.join(map(str, PAGE_SIZE_OPTIONS))}",
            param_hint="'--size'",
        )
    if sort_field is not None and sort_field not in SORT_FIELDS:
        raise typer.BadParameter(
            f"must be one of {', '.join(SORT_FIELDS)}", param_hint="'--sort-field'"
        )
    query = query_from_url(url, config.effective_page_size)
    overrides: dict[str, Any] = dict(
        offset=from_,
        page_size=size,
        search=search,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    query = replace(query, **{k: v for k, v in overrides.items() if v is not None})
    return query_to_url(query)


def _run(ctx: typer.Context, config: ViewerConfig, location: str, **kwargs):
    get_service: ServiceFactory = (ctx.obj or {}).get(
        "get_service", _get_http_service
    )
    service = get_service(config)

    async def run():
        try:
            return await run_session(
                service,
                location,
                page_size=config.effective_page_size,
                debounce_window=config.debounce_window,
                **kwargs,
            )
        finally:
            aclose = getattr(service, "aclose", None)
            if aclose is not None:
                await aclose()

    return asyncio.run(run())


def _get_http_service(config: ViewerConfig) -> TransformService:
    from xformview.services import HttpTransformService

    return HttpTransformService.from_config(config)


cli: typer.Typer = new_cli()
"""The default CLI instance."""

if __name__ == "__main__":  # pragma: no cover
    cli()
