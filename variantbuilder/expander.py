"""Cartesian expansion of build dimensions."""
from typing import NamedTuple, Optional

from .cli_logger import logger
from .model import BuildType, Linkage, TargetMachine


class Variant(NamedTuple):
    build_type: BuildType
    target_machine: TargetMachine
    linkage: Optional[Linkage]


def unique(values):
    """Drop duplicates from ``values`` keeping first-seen order."""
    seen = []
    for value in values or ():
        if value not in seen:
            seen.append(value)
    return seen


def optional_values(values):
    """Values of an optional dimension; an empty dimension yields a single ``None``."""
    values = unique(values)
    if not values:
        return [None]
    return values


def expand(build_types, target_machines, linkages=()):
    """Return every (build type, target machine, linkage) combination.

    Build types vary slowest and linkages fastest. With no linkages each
    (build type, target machine) pair appears once with ``linkage=None``.
    """
    variants = [
        Variant(build_type, target_machine, linkage)
        for build_type in unique(build_types)
        for target_machine in unique(target_machines)
        for linkage in optional_values(linkages)
    ]
    logger.debug(f"Expanded {len(variants)} variant(s) from the build dimensions.")
    return variants
