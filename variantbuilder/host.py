"""Description of the machine running the build."""
import platform

from .model import (
    OPERATING_SYSTEM_FAMILIES,
    UNKNOWN,
    TargetMachine,
    canonical_architecture,
    canonical_operating_system_family,
)


def operating_system_family(system_name):
    family = canonical_operating_system_family(system_name)
    return family if family in OPERATING_SYSTEM_FAMILIES else UNKNOWN


def architecture(machine_name):
    return canonical_architecture(machine_name) or UNKNOWN


def current_operating_system_family():
    return operating_system_family(platform.system())


def current_architecture():
    return architecture(platform.machine())


def current_machine():
    """The host as a :class:`TargetMachine`, used when a component names no targets."""
    return TargetMachine(current_operating_system_family(), current_architecture())
