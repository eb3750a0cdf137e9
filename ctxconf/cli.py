# ctxconf/cli.py

import json
import logging
import click

from .exceptions import PathError
from .loader import config_to_dict, detect_format, dumps, load_config, save_config, to_plain
from .mutator import get_property, set_property, unset_property
from .reset import (
    CURRENT_CONTEXT_PROPERTY,
    delete_primary_configs,
    unset_current_context,
    unset_preferences,
)
from .utils import default_config_path, load_environment

log = logging.getLogger(__name__)

_ABSENT = object()


def _names(names) -> str:
    """Render a name list the way the reset messages expect: [a b c]."""
    return "[" + " ".join(names) + "]"


def _fail(ctx, message: str):
    click.secho(f"Error: {message}", fg="red", err=True)
    ctx.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--kubeconfig", "file_path",
              help="Config file to edit (default: $KUBECONFIG or ~/.kube/config)")
@click.option("--env-file", help="Load environment variables from this .env file first")
@click.pass_context
def cli(ctx, file_path, env_file):
    """
    ctxconf CLI: edit context configuration files via property paths.

    Paths address any property, e.g. `current-context`,
    `preferences.colors` or `clusters.prod.server`:
      • get     PATH
      • set     PATH VALUE [--set-raw-bytes] [--json]
      • unset   PATH
      • reset
      • view    [--output yaml|json|toml]
    """
    load_environment(env_file)
    explicit = file_path is not None
    file_path = file_path or default_config_path()
    log.debug("Using config file %s (explicit: %s)", file_path, explicit)

    try:
        cfg = load_config(file_path)
    except RuntimeError as e:
        _fail(ctx, str(e))

    ctx.obj = {
        "cfg": cfg,
        "file_path": file_path,
    }


@cli.command()
@click.argument("path")
@click.pass_context
def get(ctx, path):
    """Print the value at PATH as JSON."""
    try:
        value = get_property(ctx.obj["cfg"], path, _ABSENT)
    except PathError as e:
        _fail(ctx, str(e))
    if value is _ABSENT:
        click.secho(f"Property not found: {path}", fg="yellow", err=True)
        ctx.exit(1)
    click.echo(json.dumps(to_plain(value), indent=2))


@cli.command("set")
@click.argument("path")
@click.argument("value")
@click.option("--set-raw-bytes", is_flag=True,
              help="Store VALUE as-is in byte properties instead of base64-decoding it")
@click.option("--json", "as_json", is_flag=True,
              help="Parse VALUE as JSON before setting it")
@click.pass_context
def set_(ctx, path, value, set_raw_bytes, as_json):
    """Set PATH to VALUE and save the config file."""
    if as_json:
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            _fail(ctx, f"VALUE is not valid JSON: {e}")
    try:
        set_property(ctx.obj["cfg"], path, value, raw_bytes=set_raw_bytes)
    except PathError as e:
        _fail(ctx, str(e))
    save_config(ctx.obj["cfg"], ctx.obj["file_path"])
    click.secho(f'Property "{path}" set.', fg="green")


@cli.command()
@click.argument("path")
@click.pass_context
def unset(ctx, path):
    """Unset PATH and save the config file."""
    try:
        unset_property(ctx.obj["cfg"], path)
    except PathError as e:
        _fail(ctx, str(e))
    save_config(ctx.obj["cfg"], ctx.obj["file_path"])
    click.secho(f'Property "{path}" unset.', fg="green")


@cli.command()
@click.pass_context
def reset(ctx):
    """
    Reset the config file: unset the current context and all preferences,
    and delete every cluster, context and user.
    """
    cfg = ctx.obj["cfg"]
    fp = ctx.obj["file_path"]

    unset_current_context(cfg)
    click.echo(f'Property "{CURRENT_CONTEXT_PROPERTY}" unset from "{fp}"')

    unset_preferences(cfg)
    click.echo(f'All preferences are unset from "{fp}"')

    deleted = delete_primary_configs(cfg)
    save_config(cfg, fp)
    click.echo(f'Deleted all cluster(s) {_names(deleted.clusters)} from "{fp}"')
    click.echo(f'Deleted all context(s) {_names(deleted.contexts)} from "{fp}"')
    click.echo(f'Deleted all user(s) {_names(deleted.users)} from "{fp}"')


@cli.command()
@click.option("-o", "--output", "fmt", type=click.Choice(["yaml", "json", "toml"]),
              default=None, help="Output format (default: format of the config file)")
@click.pass_context
def view(ctx, fmt):
    """Print the whole config."""
    fmt = fmt or detect_format(ctx.obj["file_path"])
    click.echo(dumps(config_to_dict(ctx.obj["cfg"]), fmt), nl=False)


if __name__ == "__main__":
    cli()
