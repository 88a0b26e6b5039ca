"""Selection and invocation of binary factories."""
from enum import Enum

from .cli_logger import logger
from .model import Linkage

# Priorities for registered factories; lower runs first.
LANGUAGE_PRIORITY = 0
GENERIC_PRIORITY = 100


class BinaryKind(str, Enum):
    SHARED_LIBRARY = "shared-library"
    STATIC_LIBRARY = "static-library"
    EXECUTABLE = "executable"


LINKAGE_KINDS = {
    Linkage.SHARED: BinaryKind.SHARED_LIBRARY,
    Linkage.STATIC: BinaryKind.STATIC_LIBRARY,
}


class FactoryRegistry:
    """Ordered binary factories per :class:`BinaryKind`.

    A factory is any callable ``(identity, build_type, target_machine) -> binary``.
    Within a kind, factories are ordered by priority, then by registration
    order.
    """

    def __init__(self, entries=None):
        self._entries = {}
        for kind, priority, factory in entries or ():
            self.register(kind, factory, priority)

    def register(self, kind, factory, priority=GENERIC_PRIORITY):
        kind = BinaryKind(kind)
        candidates = self._entries.setdefault(kind, [])
        candidates.append((priority, factory))
        # sort is stable, so equal priorities keep registration order
        candidates.sort(key=lambda entry: entry[0])
        return self

    def candidates(self, kind):
        return [factory for _, factory in self._entries.get(BinaryKind(kind), ())]

    def select(self, kind):
        """The preferred factory for ``kind``, or ``None`` when none is registered."""
        candidates = self.candidates(kind)
        return candidates[0] if candidates else None

    def kinds(self):
        return [kind for kind in BinaryKind if self._entries.get(kind)]

    def all_factories(self):
        """Every registered factory, grouped by kind in declaration order."""
        factories = []
        for kind in self.kinds():
            factories.extend(self.candidates(kind))
        return factories

    def copy(self):
        clone = FactoryRegistry()
        clone._entries = {kind: list(candidates) for kind, candidates in self._entries.items()}
        return clone

    def is_empty(self):
        return not self.kinds()

    def __len__(self):
        return sum(len(candidates) for candidates in self._entries.values())


def dispatch(identity, build_type, target_machine, linkage, registry, host_family):
    """Create the binaries for one variant.

    Returns an empty list for target machines of a different operating system
    family than the host, and when no factory is registered for the kind the
    linkage asks for. Exceptions raised by a factory propagate to the caller.
    """
    if target_machine.operating_system_family != host_family:
        logger.debug(
            f"Skipping variant '{identity.name}': targets {target_machine.operating_system_family}, "
            f"host is {host_family}."
        )
        return []

    if linkage is not None:
        kind = LINKAGE_KINDS[Linkage(linkage)]
        factory = registry.select(kind)
        if factory is None:
            logger.debug(f"No factory registered for {kind.value}; variant '{identity.name}' produces no binary.")
            return []
        return [factory(identity, build_type, target_machine)]

    return [factory(identity, build_type, target_machine) for factory in registry.all_factories()]
