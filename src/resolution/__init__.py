"""Module specifier resolution.

``resolve`` and ``cache`` belong to a process-wide default Resolver; build
separate ``Resolver`` instances for isolated caches or other settings.
"""

from typing import Optional

from .cache import ResolutionCache
from .config import ConfigError, ResolverConfig
from .core_modules import CORE_MODULES, CoreModuleRegistry
from .descriptor import PackageDescriptorLoader
from .errors import DescriptorError, FilesystemError, InvalidSpecifierError, ResolutionError
from .exports import match_export_key, parse_exports, resolve_export, resolve_root_target
from .models import PackageDescriptor, PackageLocation, ResolutionRequest, SpecifierKind
from .paths import path_to_posix, to_file_url
from .probe import FilesystemProbe
from .resolver import Resolver
from .walker import node_module_paths

default_resolver = Resolver()
cache = default_resolver.cache


def resolve(specifier: str, base_path: Optional[str] = None) -> Optional[str]:
    """Resolve with the process-wide default resolver."""
    return default_resolver.resolve(specifier, base_path)


__all__ = [
    "CORE_MODULES",
    "ConfigError",
    "CoreModuleRegistry",
    "DescriptorError",
    "FilesystemError",
    "FilesystemProbe",
    "InvalidSpecifierError",
    "PackageDescriptor",
    "PackageDescriptorLoader",
    "PackageLocation",
    "ResolutionCache",
    "ResolutionError",
    "ResolutionRequest",
    "Resolver",
    "ResolverConfig",
    "SpecifierKind",
    "cache",
    "default_resolver",
    "match_export_key",
    "node_module_paths",
    "parse_exports",
    "path_to_posix",
    "resolve",
    "resolve_export",
    "resolve_root_target",
    "to_file_url",
]
