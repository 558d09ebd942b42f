"""Commands to read and update ghi configuration."""

import click

from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.output import machine_output, user_output
from ghi.core.config_store import CONFIG_KEYS
from ghi.core.context import GhiContext


@click.group("config")
def config_group() -> None:
    """Manage ghi configuration."""


@config_group.command("list")
@click.pass_obj
@cli_error_boundary
def config_list(ctx: GhiContext) -> None:
    """Print a list of configuration keys and values."""
    if not ctx.config_store.exists():
        user_output(f"(no config file at {ctx.config_store.path()}; showing defaults)")
    for key in CONFIG_KEYS:
        machine_output(f"{key}={ctx.global_config.get(key)}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
@cli_error_boundary
def config_get(ctx: GhiContext, key: str) -> None:
    """Print the value of a given configuration key."""
    machine_output(ctx.global_config.get(key))


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
@cli_error_boundary
def config_set(ctx: GhiContext, key: str, value: str) -> None:
    """Update configuration with a value for the given key."""
    new_config = ctx.global_config.with_value(key, value)
    ctx.config_store.save(new_config)
    user_output(f"Set {key}={value}")
