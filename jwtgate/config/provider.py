"""Configuration provider following Black Box Design principles."""
import json
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Union

# Keys shared by the executor config bag and the host configuration
JWT_SECRET = "jwtSecret"
JWT_CERT = "jwtCert"
JWT_VERIFY_OPTIONS = "jwtVerifyOptions"
JWT_SIGN_OPTIONS = "jwtSignOptions"

# Values read from the environment that must decode to JSON objects
_JSON_KEYS = {JWT_VERIFY_OPTIONS, JWT_SIGN_OPTIONS}


@dataclass
class ExecutorConfig:
    """Per-instance executor configuration."""
    jwt_secret: Optional[Union[str, bytes]] = None
    jwt_cert: Optional[str] = None
    jwt_verify_options: Optional[Dict[str, Any]] = None
    jwt_sign_options: Optional[Dict[str, Any]] = None

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "ExecutorConfig":
        """Build from a config bag using the camelCase executor keys."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls(
            jwt_secret=config.get(JWT_SECRET),
            jwt_cert=config.get(JWT_CERT),
            jwt_verify_options=config.get(JWT_VERIFY_OPTIONS),
            jwt_sign_options=config.get(JWT_SIGN_OPTIONS),
        )


class ConfigProvider(Protocol):
    """Protocol for host configuration lookup."""

    def get_config(self, key: str) -> Optional[Any]:
        """Get a configuration value, or None when the key is absent."""
        ...


class DictConfigProvider:
    """In-memory configuration provider."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get_config(self, key: str) -> Optional[Any]:
        return self._values.get(key)


class EnvConfigProvider:
    """
    Environment-based configuration provider.

    Keys are mapped to upper snake case environment variables, so
    ``jwtVerifyOptions`` is read from ``JWT_VERIFY_OPTIONS`` (or
    ``<PREFIX>_JWT_VERIFY_OPTIONS`` when a prefix is set). Option keys
    hold JSON objects.
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def env_name(self, key: str) -> str:
        """Environment variable name for a configuration key."""
        name = re.sub(r"(?<!^)(?=[A-Z])", "_", key).upper()
        if self.prefix:
            return f"{self.prefix.upper()}_{name}"
        return name

    def get_config(self, key: str) -> Optional[Any]:
        """Get configuration value from environment variables."""
        name = self.env_name(key)
        value = self._environ.get(name)
        if not value:
            return None

        if key in _JSON_KEYS:
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"{name} must be a JSON object: {e}") from e
            if not isinstance(parsed, dict):
                raise ValueError(f"{name} must be a JSON object, got {type(parsed).__name__}")
            return parsed

        return value
