"""Variant naming and attribute assembly."""
import re
from enum import Enum

from .cli_logger import logger
from .expander import unique
from .model import (
    ARCHITECTURE_ATTRIBUTE,
    DEBUGGABLE_ATTRIBUTE,
    LINKAGE_ATTRIBUTE,
    OPERATING_SYSTEM_ATTRIBUTE,
    OPTIMIZED_ATTRIBUTE,
    USAGE_ATTRIBUTE,
    AttributeSet,
    Usage,
    UsageContext,
    VariantIdentity,
)

_WORD_SEPARATORS = re.compile(r"[\s.]+")


def dimension_token(value):
    """Turn a dimension value into a name token: ``x86-64`` becomes ``X86_64``."""
    if isinstance(value, Enum):
        value = value.value
    words = [word for word in _WORD_SEPARATORS.split(str(value)) if word]
    return "".join(word[:1].upper() + word[1:].replace("-", "_") for word in words)


def dimension_suffix(value, all_values):
    """Suffix for ``value``, empty unless the dimension has more than one distinct value."""
    if value is None or len(unique(all_values)) <= 1:
        return ""
    return dimension_token(value)


def variant_name(build_type, target_machine, linkage, all_target_machines, all_linkages):
    operating_system_suffix = dimension_suffix(
        target_machine.operating_system_family,
        [machine.operating_system_family for machine in all_target_machines],
    )
    architecture_suffix = dimension_suffix(
        target_machine.architecture,
        [machine.architecture for machine in all_target_machines],
    )
    linkage_suffix = dimension_suffix(linkage, all_linkages)
    return build_type.name + linkage_suffix + operating_system_suffix + architecture_suffix


def _attributes(usage, build_type, target_machine, linkage):
    attributes = AttributeSet()
    attributes.attribute(USAGE_ATTRIBUTE, usage)
    attributes.attribute(DEBUGGABLE_ATTRIBUTE, build_type.debuggable)
    attributes.attribute(OPTIMIZED_ATTRIBUTE, build_type.optimized)
    if linkage is not None:
        attributes.attribute(LINKAGE_ATTRIBUTE, linkage)
    attributes.attribute(OPERATING_SYSTEM_ATTRIBUTE, target_machine.operating_system_family)
    attributes.attribute(ARCHITECTURE_ATTRIBUTE, target_machine.architecture)
    return attributes


def identify(build_type, target_machine, linkage, all_target_machines, all_linkages, base_name, group, version):
    """Build the identity of one variant.

    ``base_name``, ``group`` and ``version`` are :class:`~variantbuilder.deferred.Deferred`
    values and are stored as-is so they resolve when first read.
    """
    name = variant_name(build_type, target_machine, linkage, all_target_machines, all_linkages)

    runtime_usage_context = UsageContext(
        f"{name}-runtime",
        Usage.RUNTIME,
        _attributes(Usage.RUNTIME, build_type, target_machine, linkage),
    )

    link_usage_context = None
    if linkage is not None:
        link_usage_context = UsageContext(
            f"{name}-link",
            Usage.LINK,
            _attributes(Usage.LINK, build_type, target_machine, linkage),
        )

    logger.debug(f"Identified variant '{name}' for {target_machine}.")
    return VariantIdentity(
        name=name,
        base_name=base_name,
        group=group,
        version=version,
        debuggable=build_type.debuggable,
        optimized=build_type.optimized,
        target_machine=target_machine,
        link_usage_context=link_usage_context,
        runtime_usage_context=runtime_usage_context,
    )
