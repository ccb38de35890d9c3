"""Resolver configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

from constants import Constants


class ConfigError(ValueError):
    """Raised when a configuration mapping has an invalid value."""


def _str_tuple(name: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{name}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class ResolverConfig:
    """Tunables for a Resolver instance."""
    extensions: Tuple[str, ...] = tuple(Constants.DEFAULT_EXTENSIONS)
    conditions: Tuple[str, ...] = tuple(Constants.DEFAULT_CONDITIONS)
    prefer_module: bool = False
    strict_descriptors: bool = False
    project_root: Optional[str] = None
    extra_core_modules: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ResolverConfig":
        """Build a config from a mapping such as a parsed YAML section.

        Unknown keys raise ConfigError so typos do not go unnoticed.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("resolver configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown resolver option(s): {', '.join(unknown)}")

        kwargs = {}
        for name in ("extensions", "conditions", "extra_core_modules"):
            if name in data:
                kwargs[name] = _str_tuple(name, data[name])
        for name in ("prefer_module", "strict_descriptors"):
            if name in data:
                if not isinstance(data[name], bool):
                    raise ConfigError(f"'{name}' must be a boolean")
                kwargs[name] = data[name]
        if data.get("project_root") is not None:
            if not isinstance(data["project_root"], str):
                raise ConfigError("'project_root' must be a string")
            kwargs["project_root"] = data["project_root"]

        for ext in kwargs.get("extensions", ()):
            if not ext.startswith("."):
                raise ConfigError(f"extension {ext!r} must start with '.'")
        return cls(**kwargs)
