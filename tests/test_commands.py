import json
import unittest
from click.testing import CliRunner
from variantbuilder import config
from variantbuilder.main import cli

LIBRARY_CONFIG = {
    "project": {"name": "greeter", "group": "org.example", "version": "1.0"},
    "component": {
        "type": "library",
        "build_types": ["debug"],
        "target_machines": ["linux:x86-64", "windows:x86-64"],
        "linkages": ["shared", "static"],
    },
}


class TestVariantsCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def test_variants_json(self):
        """Every variant is listed, whatever the host."""
        with self.runner.isolated_filesystem():
            config.save_config(LIBRARY_CONFIG)
            result = self.runner.invoke(cli, ["variants", "--json"])
            self.assertEqual(result.exit_code, 0)
            payload = json.loads(result.output[result.output.index("[\n"):])
            self.assertEqual(
                [variant["name"] for variant in payload],
                ["debugSharedLinux", "debugStaticLinux", "debugSharedWindows", "debugStaticWindows"],
            )
            contexts = payload[0]["usage_contexts"]
            self.assertEqual([context["name"] for context in contexts], ["debugSharedLinux-runtime", "debugSharedLinux-link"])
            self.assertEqual(contexts[1]["attributes"]["usage"], "native-link")
            self.assertEqual(contexts[1]["attributes"]["linkage"], "shared")
            self.assertEqual(payload[0]["group"], "org.example")

    def test_variants_text(self):
        with self.runner.isolated_filesystem():
            config.save_config(LIBRARY_CONFIG)
            result = self.runner.invoke(cli, ["variants"])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("has 4 variant(s)", result.output)
            self.assertIn("debugStaticWindows-link", result.output)

    def test_variants_configuration_error(self):
        with self.runner.isolated_filesystem():
            config.save_config({"project": {"name": "greeter"}, "component": {"linkages": ["dynamic"]}})
            result = self.runner.invoke(cli, ["variants"])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("Configuration error: Unknown linkage 'dynamic'", result.output)


class TestBinariesCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def test_binaries_for_host(self):
        """Only binaries for the host's OS family are listed."""
        with self.runner.isolated_filesystem():
            config.save_config(LIBRARY_CONFIG)
            result = self.runner.invoke(cli, ["binaries", "--host-os", "windows"])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("debugSharedWindows: shared-library greeter.dll", result.output)
            self.assertIn("debugStaticWindows: static-library greeter.lib", result.output)
            self.assertNotIn("debugSharedLinux:", result.output)
            self.assertIn("Development binary: debugSharedWindows", result.output)
            self.assertIn("debugSharedWindowsCppApiElements", result.output)

    def test_no_binaries_for_host(self):
        with self.runner.isolated_filesystem():
            config.save_config(LIBRARY_CONFIG)
            result = self.runner.invoke(cli, ["binaries", "--host-os", "macos"])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("No binaries are built on a macos host", result.output)

    def test_library_without_linkage(self):
        with self.runner.isolated_filesystem():
            conf = {
                "project": {"name": "greeter"},
                "component": {"target_machines": ["linux:x86-64"], "linkages": []},
            }
            config.save_config(conf)
            result = self.runner.invoke(cli, ["binaries", "--host-os", "linux"])
            self.assertEqual(result.exit_code, 0)
            self.assertIn("A linkage needs to be specified for the library.", result.output)


if __name__ == "__main__":
    unittest.main()
