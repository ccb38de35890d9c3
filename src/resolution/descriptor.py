"""Package descriptor (package.json) loading."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import semantic_version

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .descriptor_schema import SchemaError, invalid_fields, validate_root
from .errors import DescriptorError, FilesystemError
from .exports import parse_exports
from .models import PackageDescriptor
from .paths import join_posix, path_to_posix

logger = logging.getLogger(__name__)


def _parse_version(raw: Optional[str], path: str) -> Optional[semantic_version.Version]:
    if raw is None:
        return None
    try:
        return semantic_version.Version(raw)
    except ValueError:
        if is_debug_enabled(logger):
            logger.debug(
                "Ignoring non-semver version %r",
                raw,
                extra=extra_context(event="decision", component="descriptor", target=path),
            )
        return None


def select_entry(descriptor: Optional[PackageDescriptor], prefer_module: bool = False) -> Optional[str]:
    """Pick "main" or "module" from a loaded descriptor."""
    if descriptor is None:
        return None
    if prefer_module:
        return descriptor.module or descriptor.main
    return descriptor.main or descriptor.module


class PackageDescriptorLoader:
    """Reads and validates package.json files.

    Args:
        strict: Raise DescriptorError on malformed JSON instead of treating
            the directory as having no descriptor.
    """

    def __init__(self, strict: bool = False, filename: str = Constants.PACKAGE_JSON_FILE):
        self.strict = strict
        self.filename = filename

    def _read(self, path: str) -> Optional[str]:
        try:
            # utf-8-sig drops a leading byte order mark
            with open(path, "r", encoding="utf-8-sig") as f:
                return f.read()
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            return None
        except OSError as e:
            raise FilesystemError(path, e) from e

    def _reject(self, path: str, message: str) -> None:
        if self.strict:
            raise DescriptorError(path, message)
        logger.warning("Ignoring package descriptor %s: %s", path, message)

    def load(self, directory: str) -> Optional[PackageDescriptor]:
        """Load ``<directory>/package.json`` or return None when absent/unusable."""
        path = join_posix(directory, self.filename)
        try:
            text = self._read(path)
        except UnicodeDecodeError as e:
            self._reject(path, f"not valid UTF-8 ({e.reason} at byte {e.start})")
            return None
        if text is None:
            return None

        try:
            data = json.loads(text)
            validate_root(data)
        except json.JSONDecodeError as e:
            self._reject(path, f"malformed JSON ({e.msg} at line {e.lineno})")
            return None
        except SchemaError as e:
            self._reject(path, str(e))
            return None

        return self.from_mapping(data, path)

    def from_mapping(self, data: Dict[str, Any], path: str) -> PackageDescriptor:
        """Build a descriptor from parsed JSON, dropping mistyped fields."""
        bad = invalid_fields(data)
        if bad:
            logger.warning("Ignoring invalid fields in %s: %s", path, ", ".join(bad))
        fields = {k: v for k, v in data.items() if k not in bad}

        return PackageDescriptor(
            path=path_to_posix(path),
            name=fields.get("name"),
            version=_parse_version(fields.get("version"), path),
            type=fields.get("type"),
            main=fields.get("main") or None,
            module=fields.get("module") or None,
            exports=parse_exports(fields.get("exports")),
        )

    def entry_point(self, directory: str, prefer_module: bool = False) -> Optional[str]:
        """Return the directory's declared "main"/"module" entry, if any."""
        return select_entry(self.load(directory), prefer_module)

    def find_nearest(self, start: str) -> Optional[PackageDescriptor]:
        """Return the descriptor of ``start`` or of its closest ancestor."""
        current = os.path.abspath(start)
        while True:
            descriptor = self.load(current)
            if descriptor is not None:
                return descriptor
            parent = os.path.dirname(current)
            if parent == current:
                return None
            current = parent
