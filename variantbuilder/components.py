"""Native library and application components.

These wire a :class:`~variantbuilder.builder.BinaryBuilder` for a component:
they check the component's dimensions, register the factories for its
language, collect the binaries built on this host, choose the development
binary and publish the API of each library binary.
"""
from .builder import BinaryBuilder
from .cli_logger import logger
from .config import LIBRARY
from .dispatcher import GENERIC_PRIORITY, LANGUAGE_PRIORITY, BinaryKind
from .errors import ConfigurationError
from .model import (
    DEBUGGABLE_ATTRIBUTE,
    DEFAULT_BUILD_TYPES,
    LINKAGE_ATTRIBUTE,
    MACOS,
    OPERATING_SYSTEM_ATTRIBUTE,
    OPTIMIZED_ATTRIBUTE,
    USAGE_ATTRIBUTE,
    WINDOWS,
    AttributeSet,
    Linkage,
    Usage,
)
from .project import Project, to_camel_case

CPP = "cpp"
SWIFT = "swift"
LANGUAGES = {CPP: "Cpp", SWIFT: "Swift"}


def check_language(language):
    language = str(language).strip().lower()
    if language not in LANGUAGES:
        supported = ", ".join(sorted(LANGUAGES))
        raise ConfigurationError(f"Unsupported language '{language}'. Supported languages: {supported}")
    return language


class Binary:
    kind = None

    def __init__(self, identity, build_type, target_machine, language, module):
        self.identity = identity
        self.build_type = build_type
        self.target_machine = target_machine
        self.language = language
        self.module = module

    @property
    def name(self):
        return self.identity.name

    @property
    def debuggable(self):
        return self.identity.debuggable

    @property
    def optimized(self):
        return self.identity.optimized

    @property
    def base_name(self):
        return self.identity.base_name.get()

    @property
    def target_platform(self):
        return self.target_machine

    @property
    def artifact(self):
        return self.file_name(self.base_name, self.target_machine.operating_system_family)

    @staticmethod
    def file_name(base_name, os_family):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.language}, {self.target_machine})"


class SharedLibrary(Binary):
    kind = BinaryKind.SHARED_LIBRARY

    @staticmethod
    def file_name(base_name, os_family):
        if os_family == WINDOWS:
            return f"{base_name}.dll"
        if os_family == MACOS:
            return f"lib{base_name}.dylib"
        return f"lib{base_name}.so"


class StaticLibrary(Binary):
    kind = BinaryKind.STATIC_LIBRARY

    @staticmethod
    def file_name(base_name, os_family):
        if os_family == WINDOWS:
            return f"{base_name}.lib"
        return f"lib{base_name}.a"


class Executable(Binary):
    kind = BinaryKind.EXECUTABLE

    @staticmethod
    def file_name(base_name, os_family):
        if os_family == WINDOWS:
            return f"{base_name}.exe"
        return base_name


class Publication:
    """Outgoing API elements of a library binary."""

    def __init__(self, name, attributes, artifact):
        self.name = name
        self.attributes = attributes
        self.artifact = artifact

    def __repr__(self):
        return f"Publication({self.name!r}, {self.artifact!r})"


class NativeComponent:
    component_type = "component"

    def __init__(self, project, name="main"):
        self.project = project
        self.name = name
        self.module = to_camel_case(project.name)
        self.base_name = project.name
        self.target_machines = []
        self.binaries = []
        self.development_binary = None

    def add_binary(self, binary):
        self.binaries.append(binary)
        logger.debug(f"Added {binary.kind.value} '{binary.name}' to the {self.component_type}.")


class NativeLibrary(NativeComponent):
    component_type = "library"

    def __init__(self, project, name="main"):
        super().__init__(project, name)
        self.linkages = [Linkage.SHARED]
        self.publications = []


class NativeApplication(NativeComponent):
    component_type = "application"


def _factory(binary_class, language, module):
    def create(identity, build_type, target_machine):
        return binary_class(identity, build_type, target_machine, language, module)
    return create


def _new_builder(project, component, build_types, host_family):
    if not component.target_machines:
        raise ConfigurationError(f"A target machine needs to be specified for the {component.component_type}.")
    builder = BinaryBuilder(project, component.component_type)
    builder.with_build_types(build_types or DEFAULT_BUILD_TYPES)
    builder.with_target_machines(component.target_machines)
    builder.with_base_name(component.base_name)
    if host_family:
        builder.with_host_family(host_family)
    return builder


def _api_publication(binary, linkage):
    attributes = AttributeSet()
    attributes.attribute(USAGE_ATTRIBUTE, Usage.API)
    attributes.attribute(LINKAGE_ATTRIBUTE, linkage)
    attributes.attribute(DEBUGGABLE_ATTRIBUTE, binary.debuggable)
    attributes.attribute(OPTIMIZED_ATTRIBUTE, binary.optimized)
    attributes.attribute(OPERATING_SYSTEM_ATTRIBUTE, binary.target_platform.operating_system_family)
    if binary.language == SWIFT:
        artifact = f"{binary.module}.swiftmodule"
    else:
        artifact = "src/main/public"
    name = f"{binary.name}{LANGUAGES[binary.language]}ApiElements"
    return Publication(name, attributes, artifact)


def configure_library(project, library, language=CPP, host_family=None, build_types=None):
    """Build and register the binaries of ``library`` for this host.

    Shared and static factories for ``language`` take precedence over the
    generic C++ ones.
    """
    language = check_language(language)
    builder = _new_builder(project, library, build_types, host_family)
    if not library.linkages:
        raise ConfigurationError("A linkage needs to be specified for the library.")
    builder.with_linkages(library.linkages, required=True)

    builder.register_binary_factory(
        BinaryKind.SHARED_LIBRARY, _factory(SharedLibrary, language, library.module), LANGUAGE_PRIORITY
    )
    builder.register_binary_factory(
        BinaryKind.STATIC_LIBRARY, _factory(StaticLibrary, language, library.module), LANGUAGE_PRIORITY
    )
    if language != CPP:
        builder.register_binary_factory(
            BinaryKind.SHARED_LIBRARY, _factory(SharedLibrary, CPP, library.module), GENERIC_PRIORITY
        )
        builder.register_binary_factory(
            BinaryKind.STATIC_LIBRARY, _factory(StaticLibrary, CPP, library.module), GENERIC_PRIORITY
        )

    for binary in builder.build().get():
        library.add_binary(binary)

    # Each match replaces the previous one, so the last debuggable match wins
    shared = Linkage.SHARED in library.linkages
    for binary in library.binaries:
        if not binary.debuggable:
            continue
        if isinstance(binary, SharedLibrary) or (not shared and isinstance(binary, StaticLibrary)):
            library.development_binary = binary

    for binary in library.binaries:
        linkage = Linkage.SHARED if isinstance(binary, SharedLibrary) else Linkage.STATIC
        library.publications.append(_api_publication(binary, linkage))

    logger.info(f"Configured library '{library.module}' with {len(library.binaries)} binary(ies).")
    return builder


def configure_application(project, application, language=CPP, host_family=None, build_types=None):
    """Build and register the executables of ``application`` for this host."""
    language = check_language(language)
    builder = _new_builder(project, application, build_types, host_family)
    builder.require_factory()
    builder.register_binary_factory(
        BinaryKind.EXECUTABLE, _factory(Executable, language, application.module), LANGUAGE_PRIORITY
    )

    for binary in builder.build().get():
        application.add_binary(binary)

    for binary in application.binaries:
        if binary.debuggable:
            application.development_binary = binary

    logger.info(f"Configured application '{application.module}' with {len(application.binaries)} binary(ies).")
    return builder


def configure_component(spec, host_family=None):
    """Create and configure the component described by a :class:`~variantbuilder.config.ComponentSpec`.

    Returns ``(project, component, builder)``.
    """
    project = Project(spec.project_name, group=spec.group, version=spec.version)
    if spec.component_type == LIBRARY:
        component = NativeLibrary(project)
        component.linkages = list(spec.linkages)
        configure = configure_library
    else:
        component = NativeApplication(project)
        configure = configure_application
    component.base_name = spec.base_name
    component.target_machines = list(spec.target_machines)
    builder = configure(
        project,
        component,
        language=spec.language,
        host_family=host_family,
        build_types=spec.build_types,
    )
    return project, component, builder


def variant_builder(spec, host_family=None):
    """A builder over the dimensions of ``spec`` with no factories registered.

    Useful to list every variant of a component, including those for other
    operating systems than the host.
    """
    project = Project(spec.project_name, group=spec.group, version=spec.version)
    builder = BinaryBuilder(project, spec.component_type)
    builder.with_build_types(spec.build_types)
    builder.with_target_machines(spec.target_machines)
    builder.with_linkages(spec.linkages, required=spec.component_type == LIBRARY)
    builder.with_base_name(spec.base_name)
    if host_family:
        builder.with_host_family(host_family)
    return builder
