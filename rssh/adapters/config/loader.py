"""
Configuration loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.client import ConnectionTarget
from ...core.constants import DEFAULT_SSH_PORT, ENV_PREFIX
from ...core.exceptions import ConfigError


class ConfigLoader:
    """Configuration loader with priority support"""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = os.environ if environ is None else environ

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e

        # Connection keys may live at top level or under [connection]
        section = data.get("connection", data)
        return {k: section[k] for k in ("host", "user", "password", "port") if k in section}

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}

        for key in ("host", "user", "password", "port"):
            value = self._environ.get(f"{self._env_prefix}{key.upper()}")
            if value:
                config[key] = value

        return config

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones; None values never override.
        """
        result: Dict[str, Any] = {}

        for config in configs:
            for key, value in config.items():
                if value is not None:
                    result[key] = value

        return result

    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> ConnectionTarget:
        """
        Load connection target with priority: CLI > env > TOML > defaults

        Args:
            toml_path: Path to TOML configuration file
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables

        Returns:
            Validated ConnectionTarget

        Raises:
            ConfigError: If a required value is missing or invalid
        """
        configs = [{"port": DEFAULT_SSH_PORT}]

        if toml_path:
            configs.append(self.load_toml(toml_path))

        if use_env:
            configs.append(self.load_env())

        if cli_overrides:
            configs.append(cli_overrides)

        merged = self.merge_configs(*configs)

        missing = [k for k in ("host", "user", "password") if merged.get(k) is None]
        if missing:
            raise ConfigError(f"Missing connection settings: {', '.join(missing)}")

        return ConnectionTarget(
            host=str(merged["host"]),
            user=str(merged["user"]),
            password=str(merged["password"]),
            port=self._convert_port(merged["port"]),
        )

    def _convert_port(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"port must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"port must be an integer, got {value!r}") from None
