import unittest
from unittest.mock import MagicMock
from variantbuilder.deferred import Deferred
from variantbuilder.dispatcher import (
    GENERIC_PRIORITY,
    LANGUAGE_PRIORITY,
    BinaryKind,
    FactoryRegistry,
    dispatch,
)
from variantbuilder.identity import identify
from variantbuilder.model import DEBUG, Linkage, TargetMachine

LINUX_X64 = TargetMachine("linux", "x86-64")
WINDOWS_X64 = TargetMachine("windows", "x86-64")


def _identity(machine, linkage=None):
    linkages = [linkage] if linkage else []
    return identify(
        DEBUG, machine, linkage, [machine], linkages,
        Deferred.of("greeter"), Deferred.of("org.example"), Deferred.of("1.0"),
    )


class TestFactoryRegistry(unittest.TestCase):

    def test_select_prefers_lower_priority(self):
        """The language factory wins over the generic one whatever the registration order."""
        generic, specific = MagicMock(name="generic"), MagicMock(name="specific")
        registry = FactoryRegistry()
        registry.register(BinaryKind.SHARED_LIBRARY, generic, GENERIC_PRIORITY)
        registry.register(BinaryKind.SHARED_LIBRARY, specific, LANGUAGE_PRIORITY)
        self.assertIs(registry.select(BinaryKind.SHARED_LIBRARY), specific)
        self.assertEqual(registry.candidates(BinaryKind.SHARED_LIBRARY), [specific, generic])

    def test_equal_priorities_keep_registration_order(self):
        first, second = MagicMock(name="first"), MagicMock(name="second")
        registry = FactoryRegistry().register("executable", first).register("executable", second)
        self.assertIs(registry.select(BinaryKind.EXECUTABLE), first)

    def test_select_unregistered_kind(self):
        self.assertIsNone(FactoryRegistry().select(BinaryKind.STATIC_LIBRARY))
        self.assertTrue(FactoryRegistry().is_empty())

    def test_unknown_kind_is_rejected(self):
        with self.assertRaises(ValueError):
            FactoryRegistry().register("framework", MagicMock())

    def test_copy_is_independent(self):
        registry = FactoryRegistry().register(BinaryKind.EXECUTABLE, MagicMock())
        clone = registry.copy()
        registry.register(BinaryKind.EXECUTABLE, MagicMock())
        self.assertEqual(len(clone), 1)
        self.assertEqual(len(registry), 2)

    def test_all_factories(self):
        shared, static, executable = MagicMock(), MagicMock(), MagicMock()
        registry = FactoryRegistry([
            (BinaryKind.EXECUTABLE, 0, executable),
            (BinaryKind.SHARED_LIBRARY, 0, shared),
            (BinaryKind.STATIC_LIBRARY, 0, static),
        ])
        self.assertEqual(registry.all_factories(), [shared, static, executable])


class TestDispatch(unittest.TestCase):

    def test_foreign_target_builds_nothing(self):
        """No factory runs for a target machine of another OS family."""
        factory = MagicMock()
        registry = FactoryRegistry().register(BinaryKind.EXECUTABLE, factory)
        identity = _identity(WINDOWS_X64)
        self.assertEqual(dispatch(identity, DEBUG, WINDOWS_X64, None, registry, "linux"), [])
        factory.assert_not_called()

    def test_host_target_invokes_factory(self):
        factory = MagicMock(return_value="binary")
        registry = FactoryRegistry().register(BinaryKind.EXECUTABLE, factory)
        identity = _identity(LINUX_X64)
        self.assertEqual(dispatch(identity, DEBUG, LINUX_X64, None, registry, "linux"), ["binary"])
        factory.assert_called_once_with(identity, DEBUG, LINUX_X64)

    def test_shared_linkage_uses_specific_factory(self):
        """Only the preferred shared-library factory runs."""
        specific = MagicMock(return_value="swift")
        generic = MagicMock(return_value="cpp")
        static = MagicMock(return_value="static")
        registry = FactoryRegistry()
        registry.register(BinaryKind.SHARED_LIBRARY, generic, GENERIC_PRIORITY)
        registry.register(BinaryKind.SHARED_LIBRARY, specific, LANGUAGE_PRIORITY)
        registry.register(BinaryKind.STATIC_LIBRARY, static)
        identity = _identity(LINUX_X64, Linkage.SHARED)

        self.assertEqual(dispatch(identity, DEBUG, LINUX_X64, Linkage.SHARED, registry, "linux"), ["swift"])
        specific.assert_called_once()
        generic.assert_not_called()
        static.assert_not_called()

    def test_static_linkage_falls_back_to_generic(self):
        generic = MagicMock(return_value="cpp-static")
        registry = FactoryRegistry().register(BinaryKind.STATIC_LIBRARY, generic, GENERIC_PRIORITY)
        identity = _identity(LINUX_X64, Linkage.STATIC)
        self.assertEqual(dispatch(identity, DEBUG, LINUX_X64, Linkage.STATIC, registry, "linux"), ["cpp-static"])

    def test_missing_kind_is_a_gap(self):
        """A linkage with no registered factory simply produces nothing."""
        executable = MagicMock()
        registry = FactoryRegistry().register(BinaryKind.EXECUTABLE, executable)
        identity = _identity(LINUX_X64, Linkage.STATIC)
        self.assertEqual(dispatch(identity, DEBUG, LINUX_X64, Linkage.STATIC, registry, "linux"), [])
        executable.assert_not_called()

    def test_no_linkage_invokes_every_factory(self):
        """Without a linkage every registered factory runs once."""
        factories = [MagicMock(return_value=kind) for kind in BinaryKind]
        registry = FactoryRegistry()
        for kind, factory in zip(BinaryKind, factories):
            registry.register(kind, factory)
        identity = _identity(LINUX_X64)
        binaries = dispatch(identity, DEBUG, LINUX_X64, None, registry, "linux")
        self.assertEqual(len(binaries), 3)
        for factory in factories:
            factory.assert_called_once_with(identity, DEBUG, LINUX_X64)

    def test_factory_errors_propagate(self):
        registry = FactoryRegistry().register(BinaryKind.EXECUTABLE, MagicMock(side_effect=RuntimeError("boom")))
        with self.assertRaises(RuntimeError):
            dispatch(_identity(LINUX_X64), DEBUG, LINUX_X64, None, registry, "linux")


if __name__ == "__main__":
    unittest.main()
