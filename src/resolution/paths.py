"""Path normalization and file-URL helpers. No filesystem access."""

from __future__ import annotations

import os
import re
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from constants import Constants

_DRIVE_PATH_RE = re.compile(r"^[A-Za-z]:[\\/]")


def path_to_posix(path: str) -> str:
    """Return ``path`` with every backslash separator replaced by ``/``.

    Drive prefixes are kept as-is, so ``D:\\a\\b.js`` becomes ``D:/a/b.js``.
    Applying it twice gives the same result as applying it once.
    """
    return path.replace("\\", "/")


def is_file_url(value: str) -> bool:
    """True when ``value`` uses the ``file:`` scheme."""
    return value[: len(Constants.FILE_URL_SCHEME)].lower() == Constants.FILE_URL_SCHEME


def file_url_to_path(url: str) -> str:
    """Convert a ``file:`` URL into a local filesystem path."""
    parsed = urlparse(url)
    path = url2pathname(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        # UNC share
        path = f"//{parsed.netloc}{path}"
    return path


def to_file_url(path: str) -> str:
    """Format an existing location as an absolute ``file://`` URL."""
    return Path(os.path.abspath(path)).as_uri()


def is_relative_specifier(specifier: str) -> bool:
    """True for ``./x``, ``../x``, ``.`` and ``..`` (either separator)."""
    if specifier in (".", ".."):
        return True
    return specifier.startswith(("./", "../", ".\\", "..\\"))


def is_absolute_specifier(specifier: str) -> bool:
    """True for posix roots, drive-letter paths and ``file:`` URLs."""
    if is_file_url(specifier):
        return True
    return specifier.startswith("/") or bool(_DRIVE_PATH_RE.match(specifier)) or os.path.isabs(specifier)


def join_posix(directory: str, *parts: str) -> str:
    """Join and normalize path components, returning posix separators."""
    joined = os.path.normpath(os.path.join(directory, *parts))
    return path_to_posix(joined)
