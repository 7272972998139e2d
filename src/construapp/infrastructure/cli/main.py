import logging

import click
from pydantic import ValidationError as SettingsError

from construapp.infrastructure.cli.admin_commands import admin_set_price
from construapp.infrastructure.cli.catalog_commands import catalog_list, catalog_seed, catalog_show
from construapp.infrastructure.cli.common import opened_storefront
from construapp.infrastructure.cli.shell import StorefrontShell
from construapp.infrastructure.config import Settings
from construapp.infrastructure.identity import sign_in


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ConstruApp: construction materials storefront."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.obj is None:
        try:
            ctx.obj = Settings()
        except SettingsError as exc:
            raise click.ClickException(f"Invalid configuration: {exc}")


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
def admin() -> None:
    """Admin price editor."""


@cli.command("whoami")
@click.pass_obj
def whoami(settings: Settings) -> None:
    """Show the session identity."""
    identity = sign_in(settings)
    kind = "anonymous" if identity.anonymous else "token"
    click.echo(f"User ID: {identity.user_id} ({kind})")


@cli.command("shell")
@click.pass_obj
def shell(settings: Settings) -> None:
    """Interactive storefront: catalog, cart, checkout and admin."""
    with opened_storefront(settings, live=True) as storefront:
        StorefrontShell(storefront).run()


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_show)
catalog.add_command(catalog_seed)
admin.add_command(admin_set_price)
