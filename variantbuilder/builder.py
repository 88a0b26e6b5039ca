"""Expansion of a component's build dimensions into binaries.

:class:`BinaryBuilder` collects the dimensions and factories of a component
while it is being configured. ``build()`` hands back a deferred value; the
first read freezes the configuration into a :class:`VariantConfiguration`,
expands it, and memoizes the binaries. Configuration calls made after that
read have no effect on the returned binaries.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .cli_logger import logger
from .deferred import Deferred
from .dispatcher import FactoryRegistry, dispatch
from .errors import ConfigurationError
from .expander import expand, unique
from .host import current_operating_system_family
from .identity import identify
from .model import DEFAULT_BUILD_TYPES, BuildType, Linkage, TargetMachine


@dataclass(frozen=True)
class VariantConfiguration:
    build_types: Tuple[BuildType, ...]
    target_machines: Tuple[TargetMachine, ...]
    linkages: Tuple[Linkage, ...]
    base_name: Deferred = field(compare=False)
    group: Deferred = field(compare=False)
    version: Deferred = field(compare=False)
    registry: FactoryRegistry = field(compare=False)
    host_family: str
    component: str = "component"
    require_linkage: bool = False
    require_factory: bool = False

    def validate(self):
        if not self.build_types:
            raise ConfigurationError(f"A build type needs to be specified for the {self.component}.")
        names = [build_type.name for build_type in self.build_types]
        duplicates = unique(name for name in names if names.count(name) > 1)
        if duplicates:
            raise ConfigurationError(
                f"Build type '{duplicates[0]}' is declared more than once for the {self.component}."
            )
        if not self.target_machines:
            raise ConfigurationError(f"A target machine needs to be specified for the {self.component}.")
        if self.require_linkage and not self.linkages:
            raise ConfigurationError(f"A linkage needs to be specified for the {self.component}.")
        if self.require_factory and self.registry.is_empty():
            raise ConfigurationError(f"No binary factory is registered for the {self.component}.")


@dataclass(frozen=True)
class ExpandedVariant:
    identity: object
    build_type: BuildType
    target_machine: TargetMachine
    linkage: Optional[Linkage]

    @property
    def name(self):
        return self.identity.name


def identify_variants(configuration):
    """Every variant identity of ``configuration``, whatever the host."""
    configuration.validate()
    variants = []
    for build_type, target_machine, linkage in expand(
        configuration.build_types, configuration.target_machines, configuration.linkages
    ):
        identity = identify(
            build_type,
            target_machine,
            linkage,
            configuration.target_machines,
            configuration.linkages,
            configuration.base_name,
            configuration.group,
            configuration.version,
        )
        variants.append(ExpandedVariant(identity, build_type, target_machine, linkage))
    return variants


def build_binaries(configuration):
    """Binaries the host builds for ``configuration``, in expansion order."""
    binaries = []
    for variant in identify_variants(configuration):
        binaries.extend(
            dispatch(
                variant.identity,
                variant.build_type,
                variant.target_machine,
                variant.linkage,
                configuration.registry,
                configuration.host_family,
            )
        )
    logger.debug(f"Created {len(binaries)} binary(ies) for the {configuration.component} on {configuration.host_family}.")
    return binaries


class BinaryBuilder:
    CONFIGURING = "configuring"
    BUILT = "built"

    def __init__(self, project, component="component"):
        self._project = project
        self._component = component
        self._build_types = list(DEFAULT_BUILD_TYPES)
        self._target_machines = []
        self._linkages = []
        self._base_name = Deferred.not_defined(f"base name of the {component}")
        self._host_family = None
        self._registry = FactoryRegistry()
        self._require_linkage = False
        self._require_factory = False
        self._result = None
        self._variants = None

    @property
    def state(self):
        if self._result is not None and self._result.is_evaluated():
            return self.BUILT
        return self.CONFIGURING

    def _configuring(self, what):
        if self.state == self.BUILT:
            logger.warning(f"Ignoring {what} for the {self._component}: its binaries have already been built.")
            return False
        return True

    def with_build_types(self, build_types):
        if self._configuring("build types"):
            self._build_types = list(build_types)
        return self

    def with_target_machines(self, target_machines):
        if self._configuring("target machines"):
            self._target_machines = list(target_machines)
        return self

    def with_linkages(self, linkages, required=False):
        if self._configuring("linkages"):
            self._linkages = [Linkage(linkage) for linkage in linkages]
            self._require_linkage = required
        return self

    def with_base_name(self, base_name):
        if self._configuring("base name"):
            self._base_name = base_name if isinstance(base_name, Deferred) else Deferred.of(base_name)
        return self

    def with_host_family(self, host_family):
        if self._configuring("host"):
            self._host_family = host_family
        return self

    def require_factory(self, required=True):
        if self._configuring("factory requirement"):
            self._require_factory = required
        return self

    def register_binary_factory(self, kind, factory, priority=None):
        if self._configuring("binary factory"):
            if priority is None:
                self._registry.register(kind, factory)
            else:
                self._registry.register(kind, factory, priority)
        return self

    def configuration(self):
        """Snapshot of the current configuration."""
        return VariantConfiguration(
            build_types=tuple(unique(self._build_types)),
            target_machines=tuple(unique(self._target_machines)),
            linkages=tuple(unique(self._linkages)),
            base_name=self._base_name,
            group=self._project.group_provider(),
            version=self._project.version_provider(),
            registry=self._registry.copy(),
            host_family=self._host_family or current_operating_system_family(),
            component=self._component,
            require_linkage=self._require_linkage,
            require_factory=self._require_factory,
        )

    def variants(self):
        """Deferred list of every :class:`ExpandedVariant`, including non-host ones."""
        if self._variants is None:
            self._variants = Deferred.memoized(
                lambda: identify_variants(self.configuration()),
                description=f"variants of the {self._component}",
            )
        return self._variants

    def build(self):
        """Deferred list of binaries; evaluated on first read and then cached."""
        if self._result is None:
            self._result = Deferred.memoized(self._build, description=f"binaries of the {self._component}")
        return self._result

    def _build(self):
        configuration = self.configuration()
        logger.debug(
            f"Building {self._component} binaries: {len(configuration.build_types)} build type(s), "
            f"{len(configuration.target_machines)} target machine(s), {len(configuration.linkages)} linkage(s)."
        )
        return build_binaries(configuration)
