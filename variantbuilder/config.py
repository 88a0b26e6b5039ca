import toml
import os
from dataclasses import dataclass, field
from typing import Tuple

from .cli_logger import logger
from .errors import ConfigurationError
from .expander import unique
from .host import current_machine
from .model import BUILD_TYPES_BY_NAME, DEFAULT_BUILD_TYPES, BuildType, Linkage, TargetMachine

CONFIG_FILE = "variantbuilder.toml"

LIBRARY = "library"
APPLICATION = "application"
COMPONENT_TYPES = (LIBRARY, APPLICATION)


def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Loading configuration from {config_path}")
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}

def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False


@dataclass(frozen=True)
class ComponentSpec:
    """The ``[project]`` and ``[component]`` tables of a configuration, validated."""
    project_name: str
    group: str
    version: str
    component_type: str
    base_name: str
    language: str
    build_types: Tuple[BuildType, ...]
    target_machines: Tuple[TargetMachine, ...]
    linkages: Tuple[Linkage, ...] = field(default=())


def _read_build_type(entry):
    if isinstance(entry, str):
        build_type = BUILD_TYPES_BY_NAME.get(entry.strip().lower())
        if build_type is None:
            available = ", ".join(sorted(BUILD_TYPES_BY_NAME))
            raise ConfigurationError(f"Unknown build type '{entry}'. Available build types: {available}")
        return build_type
    if isinstance(entry, dict):
        name = str(entry.get("name", "")).strip()
        if not name:
            raise ConfigurationError("Build type tables must include a non-empty 'name'")
        return BuildType(name, bool(entry.get("debuggable", False)), bool(entry.get("optimized", False)))
    raise ConfigurationError("Build types must be given as names or tables")


def _read_target_machine(entry):
    if isinstance(entry, str):
        try:
            return TargetMachine.parse(entry)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    if isinstance(entry, dict):
        os_family = str(entry.get("os", "")).strip().lower()
        arch = str(entry.get("arch", "")).strip().lower()
        if not os_family or not arch:
            raise ConfigurationError("Target machine tables must include both 'os' and 'arch'")
        return TargetMachine(os_family, arch)
    raise ConfigurationError("Target machines must be given as '<os>:<arch>' strings or tables")


def _read_linkage(entry):
    try:
        return Linkage(str(entry).strip().lower())
    except ValueError:
        supported = ", ".join(linkage.value for linkage in Linkage)
        raise ConfigurationError(f"Unknown linkage '{entry}'. Supported linkages: {supported}") from None


def _as_list(value, key):
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if isinstance(value, list):
        return value
    raise ConfigurationError(f"component.{key} must be a list")


def read_component(conf):
    """Validate the component description in ``conf``.

    Missing target machines default to the host machine, missing build types
    to debug and release, and a library without linkages is shared.
    """
    project = conf.get("project", {})
    component = conf.get("component", {})
    if not isinstance(project, dict) or not isinstance(component, dict):
        raise ConfigurationError("[project] and [component] must be tables")

    project_name = str(project.get("name", "")).strip()
    if not project_name:
        raise ConfigurationError("project.name is required in variantbuilder.toml")

    component_type = str(component.get("type", LIBRARY)).strip().lower()
    if component_type not in COMPONENT_TYPES:
        raise ConfigurationError(
            f"Unknown component type '{component_type}'. Supported types: {', '.join(COMPONENT_TYPES)}"
        )

    build_types = [_read_build_type(entry) for entry in _as_list(component.get("build_types"), "build_types")]
    target_machines = [
        _read_target_machine(entry) for entry in _as_list(component.get("target_machines"), "target_machines")
    ]
    if not target_machines:
        host = current_machine()
        logger.debug(f"No target machines configured, defaulting to the host machine {host}.")
        target_machines = [host]

    linkages = [_read_linkage(entry) for entry in _as_list(component.get("linkages"), "linkages")]
    if component_type == APPLICATION:
        if linkages:
            logger.warning("Linkages are ignored for applications.")
        linkages = []
    elif not linkages and "linkages" not in component:
        linkages = [Linkage.SHARED]

    return ComponentSpec(
        project_name=project_name,
        group=str(project.get("group", "")),
        version=str(project.get("version", "unspecified")),
        component_type=component_type,
        base_name=str(component.get("base_name") or project_name),
        language=str(component.get("language", "cpp")).strip().lower(),
        build_types=tuple(build_types or DEFAULT_BUILD_TYPES),
        target_machines=tuple(unique(target_machines)),
        linkages=tuple(unique(linkages)),
    )
