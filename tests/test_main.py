import os
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from variantbuilder import config
from variantbuilder.main import cli

class TestMain(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = "test_project"
        os.makedirs(self.test_dir, exist_ok=True)
        self.config_path = os.path.join(self.test_dir, config.CONFIG_FILE)

    def tearDown(self):
        if os.path.exists(self.config_path):
            os.remove(self.config_path)
        os.rmdir(self.test_dir)

    def test_config_view_not_found(self):
        """Test that viewing a non-existent config returns an error."""
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        self.assertIn("Error: No variantbuilder.toml found.", result.output)

    def test_config_view(self):
        """Test that viewing a config prints its content."""
        sample_config = {
            "project": {
                "name": "greeter",
                "version": "0.1.0"
            }
        }
        config.save_config(sample_config, path=self.test_dir)

        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        with open(self.config_path, "r") as f:
            self.assertIn(f.read().strip(), result.output)

    def test_variants_without_config(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "variants"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Error: No variantbuilder.toml found.", result.output)

    @patch("importlib.metadata.version", return_value="0.1.0")
    def test_version(self, mock_version):
        result = self.runner.invoke(cli, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("variantbuilder version 0.1.0", result.output)
        mock_version.assert_called_once_with("variantbuilder")

    def test_verbose_flag(self):
        with patch("variantbuilder.main.logger") as mock_logger:
            self.runner.invoke(cli, ["--verbose", "--path", self.test_dir, "variants"])
            self.assertTrue(mock_logger.verbose)

if __name__ == "__main__":
    unittest.main()
