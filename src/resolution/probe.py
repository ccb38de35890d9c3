"""Filesystem probing: file, extension and index lookups."""

from __future__ import annotations

import errno
import logging
import os
import stat
from typing import Callable, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import FilesystemError
from .paths import join_posix

logger = logging.getLogger(__name__)

# errno values meaning "this path cannot name an existing entry".
_MISSING_ERRNOS = frozenset([errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG])


def _stat_mode(path: str) -> Optional[int]:
    """Return the st_mode of ``path`` or None when it does not exist."""
    try:
        return os.stat(path).st_mode
    except OSError as exc:
        if exc.errno in _MISSING_ERRNOS:
            return None
        raise FilesystemError(path, exc) from exc
    except ValueError:
        # embedded NUL byte
        return None


class FilesystemProbe:
    """Existence checks plus the file and directory resolution steps.

    Args:
        extensions: Ordered suffixes tried after the bare path.
        entry_lookup: Callable returning the package entry point declared
            for a directory (``main``/``module``), or None. Injected by the
            resolver so the probe does not depend on descriptor parsing.
    """

    def __init__(
        self,
        extensions: Sequence[str] = tuple(Constants.DEFAULT_EXTENSIONS),
        entry_lookup: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.extensions = tuple(extensions)
        self.entry_lookup = entry_lookup

    def is_file(self, path: str) -> bool:
        mode = _stat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    def is_dir(self, path: str) -> bool:
        mode = _stat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    def resolve_as_file(self, path: str) -> Optional[str]:
        """Return ``path`` or ``path + ext`` for the first existing file."""
        if self.is_file(path):
            return path
        for ext in self.extensions:
            candidate = path + ext
            if self.is_file(candidate):
                return candidate
        return None

    def resolve_index(self, directory: str) -> Optional[str]:
        """File resolution on ``<directory>/index``."""
        return self.resolve_as_file(join_posix(directory, Constants.INDEX_BASENAME))

    def resolve_as_directory(self, path: str) -> Optional[str]:
        """Resolve a directory through its declared entry point, then index."""
        if not self.is_dir(path):
            return None
        entry = self.entry_lookup(path) if self.entry_lookup else None
        return self.resolve_directory_entry(path, entry)

    def resolve_directory_entry(self, path: str, entry: Optional[str]) -> Optional[str]:
        """Resolve an existing directory given its already-known entry point."""
        if entry:
            entry_path = join_posix(path, entry)
            found = self.resolve_as_file(entry_path) or self.resolve_index(entry_path)
            if found:
                return found
            if is_debug_enabled(logger):
                logger.debug(
                    "Declared entry point missing, falling back to index",
                    extra=extra_context(
                        event="decision",
                        component="probe",
                        action="resolve_as_directory",
                        target=entry_path,
                    ),
                )
        return self.resolve_index(path)

    def resolve_path(self, path: str, directory_only: bool = False) -> Optional[str]:
        """File resolution first, directory resolution as the fallback."""
        if not directory_only:
            found = self.resolve_as_file(path)
            if found:
                return found
        return self.resolve_as_directory(path)
