"""Module resolution orchestrator.

Classifies a specifier, then dispatches to the core-module shortcut, direct
path probing, or bare package lookup. Results are file URLs, ``node:`` ids,
or None, memoized per (specifier, base path).
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled

from .cache import ResolutionCache
from .config import ResolverConfig
from .core_modules import CoreModuleRegistry
from .descriptor import PackageDescriptorLoader, select_entry
from .errors import InvalidSpecifierError
from .exports import resolve_export
from .models import PackageDescriptor, PackageLocation, ResolutionRequest, SpecifierKind
from .paths import (
    file_url_to_path,
    is_absolute_specifier,
    is_file_url,
    is_relative_specifier,
    join_posix,
    path_to_posix,
    to_file_url,
)
from .probe import FilesystemProbe
from .walker import node_module_paths, split_package_specifier

logger = logging.getLogger(__name__)


class Resolver:
    """Resolves specifiers against a base location.

    Each instance owns its cache; pass ``cache`` to share or pre-seed one.
    """

    def __init__(self, config: Optional[ResolverConfig] = None, cache: Optional[ResolutionCache] = None):
        self.config = config or ResolverConfig()
        self.cache = cache if cache is not None else ResolutionCache()
        self.core_modules = CoreModuleRegistry(self.config.extra_core_modules)
        self.descriptors = PackageDescriptorLoader(strict=self.config.strict_descriptors)
        self.probe = FilesystemProbe(self.config.extensions, entry_lookup=self._entry_point)

    def _entry_point(self, directory: str) -> Optional[str]:
        return self.descriptors.entry_point(directory, prefer_module=self.config.prefer_module)

    def classify(self, specifier: str) -> SpecifierKind:
        """Return how ``specifier`` will be resolved.

        Raises:
            InvalidSpecifierError: empty, non-string, or malformed specifiers.
        """
        if not isinstance(specifier, str) or not specifier.strip():
            raise InvalidSpecifierError(specifier, "empty specifier")
        if "\0" in specifier:
            raise InvalidSpecifierError(specifier, "specifier contains a NUL byte")
        if specifier in self.core_modules:
            return SpecifierKind.CORE
        if is_relative_specifier(specifier) or is_absolute_specifier(specifier):
            return SpecifierKind.PATH
        if split_package_specifier(specifier) is None:
            raise InvalidSpecifierError(specifier, "invalid package name")
        return SpecifierKind.PACKAGE

    def resolve(self, specifier: str, base_path: Optional[str] = None) -> Optional[str]:
        """Resolve ``specifier`` relative to ``base_path``.

        Args:
            specifier: Relative or absolute path, file URL, bare package
                name (optionally with a subpath), or core-module name.
            base_path: Directory, file path or file URL to anchor to.
                Defaults to the current working directory.

        Returns:
            A ``file://`` URL, a ``node:`` id, or None when nothing matches.
        """
        request = ResolutionRequest(specifier, base_path)
        kind = self.classify(specifier)
        key = ResolutionCache.make_key(specifier, base_path)

        with Timer() as t:
            result = self.cache.get_or_compute(key, lambda: self._resolve_uncached(request, kind))

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved specifier",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    action=kind.value,
                    outcome="found" if result is not None else "not_found",
                    specifier=specifier,
                    base=base_path,
                    target=result,
                    duration_ms=t.duration_ms(),
                ),
            )
        return result

    def _resolve_uncached(self, request: ResolutionRequest, kind: SpecifierKind) -> Optional[str]:
        if kind is SpecifierKind.CORE:
            return self.core_modules.canonical(request.specifier)

        base_dir = self.base_directory(request.base_path)
        if kind is SpecifierKind.PATH:
            found = self._resolve_path(request.specifier, base_dir)
        else:
            found = self._resolve_package(request.specifier, base_dir)
        return to_file_url(found) if found else None

    def base_directory(self, base_path: Optional[str]) -> str:
        """Directory that relative specifiers and package lookups start from.

        A file URL anchors at its parent directory unless it ends with ``/``;
        a plain path anchors at itself, or at its parent when it is a file.
        """
        if base_path is None:
            return path_to_posix(os.getcwd())
        if is_file_url(base_path):
            path = file_url_to_path(base_path)
            if not base_path.endswith("/"):
                path = os.path.dirname(path)
            return path_to_posix(os.path.abspath(path))

        path = os.path.abspath(base_path)
        if self.probe.is_file(path):
            path = os.path.dirname(path)
        return path_to_posix(path)

    def _resolve_path(self, specifier: str, base_dir: str) -> Optional[str]:
        target = file_url_to_path(specifier) if is_file_url(specifier) else specifier
        directory_only = specifier in (".", "..") or specifier.endswith(("/", "\\"))
        return self.probe.resolve_path(join_posix(base_dir, target), directory_only=directory_only)

    def find_package(self, specifier: str, base_path: Optional[str] = None) -> Optional[PackageLocation]:
        """Locate the package directory a bare specifier refers to.

        Returns None for core and path specifiers, and when no candidate
        node_modules directory contains the package.
        """
        if self.classify(specifier) is not SpecifierKind.PACKAGE:
            return None
        return self._locate_package(specifier, self.base_directory(base_path))

    def _locate_package(self, specifier: str, base_dir: str) -> Optional[PackageLocation]:
        name, subpath = split_package_specifier(specifier)
        for candidate in node_module_paths(base_dir, self.config.project_root):
            package_dir = join_posix(candidate, name)
            if self.probe.is_dir(package_dir):
                return PackageLocation(
                    directory=package_dir,
                    package_name=name,
                    subpath=subpath,
                    descriptor=self.descriptors.load(package_dir),
                )
        if is_debug_enabled(logger):
            logger.debug(
                "Package not found in any node_modules",
                extra=extra_context(event="decision", component="resolver", outcome="not_found", target=name),
            )
        return None

    def _resolve_package(self, specifier: str, base_dir: str) -> Optional[str]:
        location = self._locate_package(specifier, base_dir)
        if location is None:
            return None

        descriptor = location.descriptor
        if descriptor is not None and descriptor.exports is not None:
            target = resolve_export(descriptor.exports, location.subpath, self.config.conditions)
            if target is None:
                if is_debug_enabled(logger):
                    logger.debug(
                        "Subpath not exported",
                        extra=extra_context(
                            event="decision",
                            component="resolver",
                            outcome="not_exported",
                            specifier=specifier,
                            target=location.subpath,
                        ),
                    )
                return None
            return self.probe.resolve_as_file(join_posix(location.directory, target))

        if location.subpath == ".":
            entry = select_entry(descriptor, self.config.prefer_module)
            return self.probe.resolve_directory_entry(location.directory, entry)
        return self.probe.resolve_path(join_posix(location.directory, location.subpath))

    def owning_package(self, result: Optional[str]) -> Optional[PackageDescriptor]:
        """Return the nearest package descriptor for a resolved file URL."""
        if not result or not is_file_url(result):
            return None
        return self.descriptors.find_nearest(os.path.dirname(file_url_to_path(result)))
