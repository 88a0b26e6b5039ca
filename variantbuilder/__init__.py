from .builder import BinaryBuilder, VariantConfiguration, build_binaries, identify_variants
from .deferred import Deferred
from .dispatcher import BinaryKind, FactoryRegistry, dispatch
from .errors import ConfigurationError, MissingValueError, VariantBuilderError
from .expander import expand
from .identity import identify
from .model import (
    DEBUG,
    DEFAULT_BUILD_TYPES,
    RELEASE,
    AttributeSet,
    BuildType,
    Linkage,
    TargetMachine,
    Usage,
    UsageContext,
    VariantIdentity,
)
from .project import Project
