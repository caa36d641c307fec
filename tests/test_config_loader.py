"""Tests for layered connection configuration."""

from __future__ import annotations

import tempfile
import textwrap
import unittest
from pathlib import Path

from rssh.adapters.config.loader import ConfigLoader
from rssh.core.exceptions import ConfigError


class TestConfigLoader(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)

    def write_toml(self, body: str) -> Path:
        path = self.tmp / "rssh.toml"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    def test_cli_values_with_default_port(self):
        target = ConfigLoader(environ={}).load(
            cli_overrides={"host": "h", "user": "u", "password": "p", "port": None}
        )
        self.assertEqual((target.host, target.user, target.password, target.port), ("h", "u", "p", 22))

    def test_priority_cli_over_env_over_toml(self):
        path = self.write_toml(
            """
            [connection]
            host = "toml-host"
            user = "toml-user"
            password = "toml-pw"
            port = 2200
            """
        )
        env = {"RSSH_USER": "env-user", "RSSH_PORT": "2201"}
        target = ConfigLoader(environ=env).load(
            toml_path=path,
            cli_overrides={"host": None, "user": None, "password": "cli-pw", "port": None},
        )
        self.assertEqual(target.host, "toml-host")
        self.assertEqual(target.user, "env-user")
        self.assertEqual(target.password, "cli-pw")
        self.assertEqual(target.port, 2201)

    def test_top_level_toml_keys(self):
        path = self.write_toml(
            """
            host = "example.com"
            user = "deploy"
            password = "pw"
            """
        )
        target = ConfigLoader(environ={}).load(toml_path=path)
        self.assertEqual(str(target), "deploy@example.com:22")

    def test_missing_values_are_named(self):
        with self.assertRaises(ConfigError) as err:
            ConfigLoader(environ={}).load(cli_overrides={"host": "h"})
        self.assertIn("user", str(err.exception))
        self.assertIn("password", str(err.exception))

    def test_invalid_port(self):
        with self.assertRaises(ConfigError):
            ConfigLoader(environ={"RSSH_PORT": "ssh"}).load(
                cli_overrides={"host": "h", "user": "u", "password": "p"}
            )
        with self.assertRaises(ConfigError):
            ConfigLoader(environ={}).load(
                cli_overrides={"host": "h", "user": "u", "password": "p", "port": 70000}
            )

    def test_boolean_port_in_toml_is_rejected(self):
        path = self.write_toml(
            """
            host = "h"
            user = "u"
            password = "p"
            port = true
            """
        )
        with self.assertRaises(ConfigError) as err:
            ConfigLoader(environ={}).load(toml_path=path)
        self.assertIn("True", str(err.exception))

    def test_missing_or_broken_toml(self):
        with self.assertRaises(ConfigError):
            ConfigLoader(environ={}).load(toml_path=self.tmp / "absent.toml")
        broken = self.write_toml("host = \n")
        with self.assertRaises(ConfigError):
            ConfigLoader(environ={}).load(toml_path=broken)


if __name__ == "__main__":
    unittest.main()
