"""Layered configuration: a YAML file overridden by environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = "global.yaml"
DEFAULT_CONFIG_DIR = Path("../common/config")

_ENV_BINDINGS: dict[str, tuple[str, ...]] = {
    "stripe-key": ("STRIPE_KEY", "endpoint-stripe-secret", "ENDPOINT_STRIPE_SECRET"),
}


def _lower_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        str(key).lower(): _lower_keys(value) if isinstance(value, Mapping) else value
        for key, value in data.items()
    }


@dataclass
class Config:
    """Case-insensitive view over nested settings with dotted keys."""

    data: Mapping[str, Any]
    environ: Mapping[str, str] | None = None
    env_bindings: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.data = _lower_keys(self.data)
        self.env_bindings = {key.lower(): tuple(names) for key, names in self.env_bindings.items()}

    def _env_lookup(self, name: str) -> str | None:
        if self.environ is None:
            return None
        value = self.environ.get(name)
        return value if value else None

    def _from_env(self, key: str) -> str | None:
        if self.environ is None:
            return None
        value = self._env_lookup(key.upper())
        if value is not None:
            return value
        for name in self.env_bindings.get(key, ()):
            value = self._env_lookup(name)
            if value is not None:
                return value
        return None

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at a dotted key; the environment takes precedence."""
        key = key.lower()
        env_value = self._from_env(key)
        if env_value is not None:
            return env_value
        node: Any = self.data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node

    def get_string(self, key: str) -> str:
        """Return the value at a dotted key as text, or an empty string."""
        value = self.get(key)
        if value is None or isinstance(value, (Mapping, list)):
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def sub(self, key: str) -> Config | None:
        """Return the section at ``key`` as its own config, or None."""
        value = self.get(key)
        if not isinstance(value, Mapping):
            return None
        return Config(value)


def load_config(
    config_dir: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Read ``global.yaml`` from ``config_dir`` and layer the environment over it."""
    path = Path(config_dir if config_dir is not None else DEFAULT_CONFIG_DIR) / CONFIG_FILE_NAME
    if not path.is_file():
        raise FileNotFoundError(f"config file {CONFIG_FILE_NAME} not found in {path.parent}")
    with path.open(encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"config file {path} does not hold a mapping")
    return Config(
        data,
        environ=os.environ if environ is None else environ,
        env_bindings=_ENV_BINDINGS,
    )