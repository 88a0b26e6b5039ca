import click
import os
import json
from .. import config as config_module
from ..cli_logger import logger
from ..decorators import handle_exceptions

# Keys holding lists; `config set` splits their value on commas
LIST_KEYS = {
    "component.build_types",
    "component.target_machines",
    "component.linkages",
}


def _load(ctx):
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No variantbuilder.toml found. Please run 'variantbuilder init' first.")
    return conf


def _parse_value(key, value):
    if key in LIST_KEYS:
        return [part.strip() for part in value.split(",") if part.strip()]
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


@click.group()
@click.pass_context
def config(ctx):
    """View or edit the variantbuilder.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View the contents of the variantbuilder.toml file."""
    if not _load(ctx):
        return
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading variantbuilder.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")

@config.command(name="list")
@click.pass_context
def list_config(ctx):
    """List all configuration keys and values."""
    conf = _load(ctx)
    if not conf:
        return
    click.echo(json.dumps(conf, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value from the variantbuilder.toml file."""
    conf = _load(ctx)
    if not conf:
        return

    value = conf
    try:
        for k in key.split('.'):
            value = value[k]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in variantbuilder.toml")
        return
    if isinstance(value, (dict, list)):
        click.echo(json.dumps(value))
    else:
        click.echo(value)

@config.command(name="set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value in the variantbuilder.toml file.

    Values of list keys such as component.target_machines are comma-separated.
    """
    conf = _load(ctx)
    if not conf:
        return

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = _parse_value(key, value)

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key from the variantbuilder.toml file."""
    conf = _load(ctx)
    if not conf:
        return

    keys = key.split('.')
    d = conf
    try:
        for k in keys[:-1]:
            d = d[k]
        del d[keys[-1]]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in variantbuilder.toml")
        return
    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Unset '{key}'")

@config.command()
@click.pass_context
@handle_exceptions
def check(ctx):
    """Validate the [project] and [component] tables."""
    conf = _load(ctx)
    if not conf:
        return
    spec = config_module.read_component(conf)
    logger.success(
        f"{spec.component_type.capitalize()} '{spec.project_name}': "
        f"{len(spec.build_types)} build type(s), {len(spec.target_machines)} target machine(s), "
        f"{len(spec.linkages)} linkage(s)."
    )
    if spec.component_type == config_module.LIBRARY and not spec.linkages:
        logger.warning("The library has no linkages; building it will fail.")
    return spec
