import click
import json
from .. import config as config_module
from ..cli_logger import logger
from ..components import variant_builder
from ..decorators import handle_exceptions


def _describe(variant):
    identity = variant.identity
    return {
        "name": identity.name,
        "base_name": identity.base_name.get(),
        "group": identity.group.get(),
        "version": identity.version.get(),
        "build_type": variant.build_type.name,
        "target_machine": str(identity.target_machine),
        "linkage": variant.linkage.value if variant.linkage is not None else None,
        "usage_contexts": [
            {"name": context.name, "usage": context.usage.value, "attributes": context.attributes.as_dict()}
            for context in identity.usage_contexts
        ],
    }


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the variants as JSON.")
@click.pass_context
@handle_exceptions
def variants(ctx, as_json):
    """List every variant of the configured component and its attributes."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No variantbuilder.toml found. Please run 'variantbuilder init' first.")
        return

    spec = config_module.read_component(conf)
    expanded = variant_builder(spec).variants().get()
    descriptions = [_describe(variant) for variant in expanded]

    if as_json:
        click.echo(json.dumps(descriptions, indent=4))
        return

    logger.info(f"{spec.component_type.capitalize()} '{spec.project_name}' has {len(descriptions)} variant(s):")
    for description in descriptions:
        logger.step_info(f"- {description['name']} ({description['target_machine']})", indent=2)
        for context in description["usage_contexts"]:
            attributes = ", ".join(f"{key}={value}" for key, value in sorted(context["attributes"].items()))
            logger.step_info(f"{context['name']}: {attributes}", indent=6)
