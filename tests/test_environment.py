"""
Tests for the toolchain preflight and npm invocations.
"""
import subprocess
import unittest
from pathlib import Path
from unittest.mock import patch

from tsclean_generator import environment
from tsclean_generator.exceptions import EnvironmentCheckError


def _completed(stdout="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr="")


def _which_all(cmd):
    return f"/usr/bin/{cmd}"


class TestParseNodeMajor(unittest.TestCase):
    """Test cases for parse_node_major"""

    def test_versions(self):
        self.assertEqual(environment.parse_node_major("v18.17.0\n"), 18)
        self.assertEqual(environment.parse_node_major("22.1.0"), 22)
        self.assertIsNone(environment.parse_node_major("not a version"))


@patch("tsclean_generator.environment.subprocess.run")
@patch("tsclean_generator.environment.shutil.which")
class TestCheckToolchain(unittest.TestCase):
    """Test cases for check_node, check_npm and check_toolchain"""

    def test_all_present(self, mock_which, mock_run):
        mock_which.side_effect = _which_all
        mock_run.return_value = _completed("v20.11.1\n")

        environment.check_toolchain(18)

        mock_run.assert_called_once()
        self.assertEqual(mock_run.call_args[0][0], ["node", "-v"])

    def test_node_missing(self, mock_which, mock_run):
        mock_which.return_value = None

        with self.assertRaises(EnvironmentCheckError) as ctx:
            environment.check_node(18)

        self.assertIn("Node.js is not installed", ctx.exception.message)
        mock_run.assert_not_called()

    def test_node_too_old(self, mock_which, mock_run):
        mock_which.side_effect = _which_all
        mock_run.return_value = _completed("v16.20.0\n")

        with self.assertRaises(EnvironmentCheckError) as ctx:
            environment.check_node(18)

        self.assertIn("Node.js version 18 or higher is required. Found: v16.20.0", ctx.exception.message)

    def test_npm_missing(self, mock_which, mock_run):
        mock_which.side_effect = lambda cmd: None if cmd == "npm" else _which_all(cmd)
        mock_run.return_value = _completed("v20.0.0")

        with self.assertRaises(EnvironmentCheckError) as ctx:
            environment.check_toolchain()

        self.assertEqual(ctx.exception.context["tool"], "npm")

    def test_missing_tsc_is_installed(self, mock_which, mock_run):
        mock_which.side_effect = lambda cmd: None if cmd == "tsc" else _which_all(cmd)
        mock_run.return_value = _completed("v20.0.0")

        environment.check_toolchain()

        self.assertEqual(mock_run.call_args_list[-1][0][0], ["npm", "install", "-g", "typescript"])

    def test_tsc_present_is_not_installed(self, mock_which, mock_run):
        mock_which.side_effect = _which_all
        self.assertFalse(environment.ensure_typescript())
        mock_run.assert_not_called()


@patch("tsclean_generator.environment.subprocess.run")
class TestInstallDependencies(unittest.TestCase):
    """Test cases for install_dependencies"""

    def test_success(self, mock_run):
        mock_run.return_value = _completed()

        self.assertTrue(environment.install_dependencies(Path("/tmp/app")))

        self.assertEqual(mock_run.call_args[0][0], ["npm", "install"])
        self.assertEqual(mock_run.call_args[1]["cwd"], "/tmp/app")

    def test_failure_is_reported_not_raised(self, mock_run):
        mock_run.return_value = _completed(returncode=1)
        with self.assertLogs("tsclean_generator.environment", level="WARNING"):
            self.assertFalse(environment.install_dependencies(Path("/tmp/app")))

    def test_npm_cannot_start(self, mock_run):
        mock_run.side_effect = FileNotFoundError("npm")
        self.assertFalse(environment.install_dependencies(Path("/tmp/app")))
