import click
import os
import sys
import toml
from .. import config as config_module
from ..cli_logger import logger
from ..host import current_machine


def _get_default_config():
    host = current_machine()
    return {
        "project": {
            "name": "greeter",
            "group": "org.example",
            "version": "0.1",
        },
        "component": {
            "type": "library",
            "base_name": "greeter",
            "language": "cpp",
            "build_types": ["debug", "release"],
            "target_machines": [str(host)],
            "linkages": ["shared"],
        },
    }


def _prompt_for_input(prompt, default, validation_func=None, **kwargs):
    while True:
        value = click.prompt(prompt, default=default, **kwargs)
        if validation_func is None or validation_func(value):
            return value
        else:
            logger.warning(f"Invalid input for {prompt}. Please try again.")


def _prompt_for_list_input(prompt, default):
    while True:
        value_str = click.prompt(prompt, default=default)
        # Allow empty list if the input string was empty
        if not value_str.strip():
            return []
        values = [v.strip() for v in value_str.split(',') if v.strip()]
        if values:
            return values
        else:
            logger.warning(f"Invalid input for {prompt}. Please provide a comma-separated list of values.")


def _is_target_machine(value):
    os_family, sep, arch = value.partition(":")
    return bool(sep and os_family.strip() and arch.strip())


@click.command()
@click.option('--non-interactive', is_flag=True, help='Run in non-interactive mode using default values.')
@click.option('--config-file', type=click.Path(exists=True), help='Path to a TOML file with configuration values.')
@click.pass_context
def init(ctx, non_interactive, config_file):
    """Initialize a new variantbuilder project."""
    logger.info("Initializing a new variantbuilder project.")

    conf = {}
    if config_file:
        logger.info(f"Loading configuration from {config_file}")
        with open(config_file, 'r') as f:
            conf = toml.load(f)
    elif non_interactive:
        logger.info("Running in non-interactive mode with default values.")
        conf = _get_default_config()
    else:
        logger.info("Please provide the following details:")
        host = str(current_machine())
        try:
            project_name = _prompt_for_input("Project Name", "greeter")
            group = _prompt_for_input("Group (e.g., org.example)", "org.example")
            version = _prompt_for_input("Version", "0.1")
            component_type = _prompt_for_input("Component Type", "library", type=click.Choice(['library', 'application']))
            language = _prompt_for_input("Language", "cpp", type=click.Choice(['cpp', 'swift']))
            build_types = _prompt_for_list_input("Build Types (comma-separated: debug, release)", "debug,release")

            target_machines = []
            while not target_machines:
                target_machines = _prompt_for_list_input("Target Machines (comma-separated <os>:<arch>, e.g., linux:x86-64)", host)
                if not all(_is_target_machine(value) for value in target_machines):
                    logger.warning("Target machines must be written as <os>:<arch>. Please try again.")
                    target_machines = []

            conf = {
                "project": {
                    "name": project_name,
                    "group": group,
                    "version": version,
                },
                "component": {
                    "type": component_type,
                    "base_name": project_name,
                    "language": language,
                    "build_types": build_types,
                    "target_machines": target_machines,
                },
            }
            if component_type == "library":
                conf["component"]["linkages"] = _prompt_for_list_input("Linkages (comma-separated: shared, static)", "shared")
        except click.Abort:
            logger.warning("\nProject initialization aborted by user.")
            return

    try:
        if config_module.save_config(conf, path=ctx.obj["path"]):
            logger.success(f"variantbuilder project initialized successfully! Configuration saved to {os.path.join(ctx.obj['path'], config_module.CONFIG_FILE)}")
            logger.info("Next steps: Run 'variantbuilder variants' to list the variants of your component.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while saving configuration file: {e}")
        logger.exception(*sys.exc_info())
