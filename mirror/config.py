from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from typing import Optional

import yaml

from mirror.filters import is_valid_seed
from mirror.storage import DEFAULT_USER_AGENT

DEFAULT_TIMEOUT_MS = 5000


class MirrorError(Exception):
    """Base class for the errors that stop a run before it starts."""


class InvalidSeedError(MirrorError):
    pass


class ConfigError(MirrorError):
    pass


@dataclass(frozen=True)
class MirrorConfig:
    url: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    storage_path: str = field(default_factory=os.getcwd)
    user_agent: str = DEFAULT_USER_AGENT

    @staticmethod
    def from_yaml(path: str) -> "MirrorConfig":
        """
        Load a config file, e.g.

            url: https://example.com/docs/
            timeout_ms: 10000
            storage_path: /srv/mirror
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Unable to read config file '{path}': {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file '{path}' must contain a mapping")

        try:
            timeout_ms = int(data.get("timeout_ms", DEFAULT_TIMEOUT_MS))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Unable to parse value '{data.get('timeout_ms')}' as a number for timeout.") from exc

        return MirrorConfig(
            url=data.get("url"),
            timeout_ms=timeout_ms,
            storage_path=str(data.get("storage_path") or os.getcwd()),
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
        )

    def with_overrides(self, **kwargs) -> "MirrorConfig":
        """Return a copy with the given (non-None) fields overridden."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})

    def validate(self) -> "MirrorConfig":
        if not self.url:
            raise InvalidSeedError("No URL to mirror was given.")
        if not is_valid_seed(self.url):
            raise InvalidSeedError(f"'{self.url}' is not an absolute http(s) URL.")
        if self.timeout_ms <= 0:
            raise ConfigError(f"Timeout must be a positive number of milliseconds, got {self.timeout_ms}.")
        if not os.path.isdir(self.storage_path):
            raise ConfigError(f"The specified path '{self.storage_path}' does not exist.")
        return self
