import click
from .. import config as config_module
from ..cli_logger import logger
from ..components import configure_component
from ..decorators import handle_exceptions
from ..host import current_operating_system_family
from ..model import OPERATING_SYSTEM_FAMILIES


@click.command()
@click.option("--host-os", type=click.Choice(OPERATING_SYSTEM_FAMILIES), default=None,
              help="Operating system family to build for instead of the current host.")
@click.pass_context
@handle_exceptions
def binaries(ctx, host_os):
    """List the binaries the component builds on this host."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No variantbuilder.toml found. Please run 'variantbuilder init' first.")
        return

    host_family = host_os or current_operating_system_family()
    spec = config_module.read_component(conf)
    logger.info(f"Resolving binaries of '{spec.project_name}' for a {host_family} host...")
    _, component, _ = configure_component(spec, host_family=host_family)

    if not component.binaries:
        logger.warning(f"No binaries are built on a {host_family} host. Check the target machines of the component.")
        return

    for binary in component.binaries:
        logger.step_info(f"- {binary.name}: {binary.kind.value} {binary.artifact} ({binary.target_machine})", indent=2)

    publications = getattr(component, "publications", [])
    if publications:
        logger.info("Publications:")
        for publication in publications:
            logger.step_info(f"- {publication.name}: {publication.artifact}", indent=2)

    if component.development_binary is not None:
        logger.success(f"Development binary: {component.development_binary.name}")
