"""Root CLI entry point: ``osprov`` command group.

Drives a connector the way a host platform would, for manual checks
against a real cloud.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console

from openstack_provisioning import __version__
from openstack_provisioning.cli._config import load_config
from openstack_provisioning.cli._context import CliContext
from openstack_provisioning.cli._output import print_errors, print_result, print_success
from openstack_provisioning.exceptions import ConnectorError
from openstack_provisioning.host.manifest import MANIFEST
from openstack_provisioning.host.module import HostModule
from openstack_provisioning.host.plugins import discover_connectors, load_connector
from openstack_provisioning.observability.logging import setup_logging
from openstack_provisioning.settings import ConnectorSettings

if TYPE_CHECKING:
    from collections.abc import Callable

_PLAN_COLUMNS: list[tuple[str, str]] = [
    ("ID", "id"),
    ("Plan", "label"),
]

_CONNECTOR_COLUMNS: list[tuple[str, str]] = [
    ("Name", "name"),
    ("Module", "module"),
    ("Enabled", "enabled"),
    ("Error", "error"),
]

# ---------------------------------------------------------------------------
# Error-handling decorator
# ---------------------------------------------------------------------------


def handle_errors(fn: Any) -> Any:
    """Turn connector exceptions into user-friendly messages."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except click.exceptions.Exit:
            raise
        except ConnectorError as exc:
            raise click.ClickException(str(exc)) from None

    return wrapper


def _module(ctx: CliContext) -> HostModule:
    settings = ConnectorSettings()
    module = HostModule(load_connector(ctx.connector_name, settings=settings))
    module.connect(ctx.config.app_details())
    return module


def _finish(ctx: CliContext, module: HostModule, ok: bool, message: str) -> None:
    if not ok:
        print_errors(ctx, module.errors)
        raise click.exceptions.Exit(1)
    print_success(ctx, message)


def _server_command(
    name: str,
    run: Callable[[HostModule], bool],
    done: str,
) -> click.Command:
    @click.command(name)
    @click.argument("server_id")
    @click.pass_obj
    @handle_errors
    def command(ctx: CliContext, server_id: str) -> None:
        module = _module(ctx)
        module.veid = server_id
        _finish(ctx, module, run(module), f"Server {server_id} {done}.")

    command.help = f"{name.capitalize()} the server SERVER_ID."
    return command


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--auth-url", default=None, help="Keystone authentication URL.")
@click.option("--username", default=None, help="OpenStack username.")
@click.option("--password", default=None, help="OpenStack password.")
@click.option("--tenant", default=None, help="Tenant (project) name.")
@click.option("--profile", default=None, help="Config profile name.")
@click.option("--connector", "connector_name", default="openstack", help="Connector to use.")
@click.option("--json", "json_mode", is_flag=True, default=False, help="Output raw JSON.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
@click.version_option(version=__version__, prog_name="osprov")
@click.pass_context
def cli(
    ctx: click.Context,
    auth_url: str | None,
    username: str | None,
    password: str | None,
    tenant: str | None,
    profile: str | None,
    connector_name: str,
    json_mode: bool,
    verbose: bool,
) -> None:
    """OpenStack provisioning connector CLI."""
    settings = ConnectorSettings()
    setup_logging("DEBUG" if verbose else settings.log_level, json_output=settings.log_json)
    cfg = load_config(
        auth_url=auth_url,
        username=username,
        password=password,
        tenant=tenant,
        profile=profile,
    )
    ctx.obj = CliContext(
        console=Console(),
        err_console=Console(stderr=True),
        json_mode=json_mode,
        config=cfg,
        connector_name=connector_name,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@cli.command("connectors")
@click.pass_obj
def list_connectors(ctx: CliContext) -> None:
    """List installed connectors."""
    rows = [
        {"name": info.name, "module": info.module, "enabled": info.enabled, "error": info.error}
        for info in discover_connectors().values()
    ]
    print_result(ctx, rows, columns=_CONNECTOR_COLUMNS, title="Connectors")


@cli.command("manifest")
@click.pass_obj
def show_manifest(ctx: CliContext) -> None:
    """Show the module metadata a host platform reads."""
    print_result(ctx, MANIFEST.model_dump(), title=MANIFEST.name)


@cli.command("test-connection")
@click.pass_obj
@handle_errors
def test_connection(ctx: CliContext) -> None:
    """Authenticate against Keystone and report the result."""
    module = _module(ctx)
    _finish(ctx, module, module.test_connection(), "Connection OK.")


@cli.command("plans")
@click.pass_obj
@handle_errors
def list_plans(ctx: CliContext) -> None:
    """List flavors as selectable plans."""
    module = _module(ctx)
    plans = module.get_plans()
    if plans is False:
        print_errors(ctx, module.errors)
        raise click.exceptions.Exit(1)
    rows = [{"id": plan_id, "label": label} for plan_id, label in plans]
    print_result(ctx, rows, columns=_PLAN_COLUMNS, title="Plans")


@cli.command("create")
@click.option("--flavor", required=True, help="Flavor ID (see 'osprov plans').")
@click.option("--name", required=True, help="Server name.")
@click.pass_obj
@handle_errors
def create_server(ctx: CliContext, flavor: str, name: str) -> None:
    """Create a server from the first Ubuntu image."""
    module = _module(ctx)
    module.set_product_options({"flavor": flavor})
    module.set_account_details({"domain": name})
    if not module.create():
        print_errors(ctx, module.errors)
        raise click.exceptions.Exit(1)
    print_result(
        ctx,
        {"id": module.veid, "admin_password": module.account_details["password"]},
        title=f"Server {name}",
    )


cli.add_command(_server_command("suspend", HostModule.suspend, "suspended"))
cli.add_command(_server_command("unsuspend", HostModule.unsuspend, "resumed"))
cli.add_command(_server_command("terminate", HostModule.terminate, "deleted"))
