"""Value types describing native build variants."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .deferred import Deferred


# Operating system families
WINDOWS = "windows"
LINUX = "linux"
MACOS = "macos"
FREEBSD = "freebsd"
SOLARIS = "solaris"
UNKNOWN = "unknown"

OPERATING_SYSTEM_FAMILIES = (WINDOWS, LINUX, MACOS, FREEBSD, SOLARIS)

# Machine architectures
X86 = "x86"
X86_64 = "x86-64"
ARM64 = "arm64"
ARM = "arm"

ARCHITECTURES = (X86, X86_64, ARM64, ARM)

# Other spellings of the same family or architecture, as reported by
# platform.system() / platform.machine() or written by hand
OPERATING_SYSTEM_ALIASES = {
    "darwin": MACOS,
    "osx": MACOS,
    "mac os x": MACOS,
    "win32": WINDOWS,
    "sunos": SOLARIS,
}

ARCHITECTURE_ALIASES = {
    "x86_64": X86_64,
    "amd64": X86_64,
    "x64": X86_64,
    "i386": X86,
    "i486": X86,
    "i586": X86,
    "i686": X86,
    "aarch64": ARM64,
    "arm-v8": ARM64,
    "armv7l": ARM,
    "armv6l": ARM,
}


def canonical_operating_system_family(name):
    name = str(name).strip().lower()
    return OPERATING_SYSTEM_ALIASES.get(name, name)


def canonical_architecture(name):
    name = str(name).strip().lower()
    return ARCHITECTURE_ALIASES.get(name, name)

# Attribute keys
USAGE_ATTRIBUTE = "usage"
DEBUGGABLE_ATTRIBUTE = "debuggable"
OPTIMIZED_ATTRIBUTE = "optimized"
LINKAGE_ATTRIBUTE = "linkage"
OPERATING_SYSTEM_ATTRIBUTE = "operating-system-family"
ARCHITECTURE_ATTRIBUTE = "architecture"


@dataclass(frozen=True)
class BuildType:
    name: str
    debuggable: bool
    optimized: bool


DEBUG = BuildType("debug", debuggable=True, optimized=False)
RELEASE = BuildType("release", debuggable=False, optimized=True)

DEFAULT_BUILD_TYPES = (DEBUG, RELEASE)
BUILD_TYPES_BY_NAME = {build_type.name: build_type for build_type in DEFAULT_BUILD_TYPES}


@dataclass(frozen=True)
class TargetMachine:
    operating_system_family: str
    architecture: str

    def __post_init__(self):
        # Aliases fold into one value so that equal machines dedupe and name alike
        object.__setattr__(self, "operating_system_family",
                           canonical_operating_system_family(self.operating_system_family))
        object.__setattr__(self, "architecture", canonical_architecture(self.architecture))

    @classmethod
    def parse(cls, text):
        """Parse ``"<os>:<arch>"`` (for example ``"linux:x86-64"``)."""
        os_family, sep, arch = str(text).partition(":")
        os_family = os_family.strip()
        arch = arch.strip()
        if not sep or not os_family or not arch:
            raise ValueError(f"Target machine '{text}' must be written as '<os>:<arch>'")
        return cls(os_family, arch)

    def __str__(self):
        return f"{self.operating_system_family}:{self.architecture}"


class Linkage(str, Enum):
    SHARED = "shared"
    STATIC = "static"


class Usage(str, Enum):
    RUNTIME = "native-runtime"
    LINK = "native-link"
    API = "api"


class AttributeSet:
    """Mutable mapping of attribute keys to values.

    Keys are unique; setting a key again replaces its value. Two sets are
    equal when they hold the same keys and values, whatever the insertion
    order.
    """

    def __init__(self, values=None):
        self._values: Dict[str, Any] = dict(values or {})

    def attribute(self, key, value):
        self._values[key] = value
        return self

    def get(self, key, default=None):
        return self._values.get(key, default)

    def contains(self, key):
        return key in self._values

    def keys(self):
        return set(self._values)

    def is_empty(self):
        return not self._values

    def matches(self, requested):
        """True when every requested attribute is present here with an equal value."""
        if isinstance(requested, AttributeSet):
            requested = requested.as_dict()
        return all(key in self._values and self._values[key] == value for key, value in requested.items())

    def as_dict(self):
        # Enum members are flattened to their plain values for publication
        return {key: (value.value if isinstance(value, Enum) else value) for key, value in self._values.items()}

    def __contains__(self, key):
        return key in self._values

    def __getitem__(self, key):
        return self._values[key]

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, AttributeSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        items = ", ".join(f"{key}={value}" for key, value in sorted(self.as_dict().items()))
        return f"AttributeSet({items})"


@dataclass(frozen=True)
class UsageContext:
    name: str
    usage: Usage
    attributes: AttributeSet = field(compare=False)


@dataclass(frozen=True)
class VariantIdentity:
    name: str
    base_name: Deferred = field(compare=False, repr=False)
    group: Deferred = field(compare=False, repr=False)
    version: Deferred = field(compare=False, repr=False)
    debuggable: bool
    optimized: bool
    target_machine: TargetMachine
    link_usage_context: Optional[UsageContext]
    runtime_usage_context: UsageContext

    @property
    def usage_contexts(self):
        if self.link_usage_context is None:
            return (self.runtime_usage_context,)
        return (self.runtime_usage_context, self.link_usage_context)
