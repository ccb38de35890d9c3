"""Interpretation of the package.json "exports" field.

Everything here is a pure function over parsed data. Raw JSON values are
first turned into the tagged target variants from ``models`` by
``parse_exports``; ``resolve_export`` then picks a subpath key and walks the
selected target with a fixed condition priority.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import Alternatives, ConditionalMap, ExportsMap, ExportTarget, PackageDescriptor, StringTarget

logger = logging.getLogger(__name__)

ROOT_SUBPATH = "."
DEFAULT_CONDITIONS: Tuple[str, ...] = tuple(Constants.DEFAULT_CONDITIONS)


def parse_target(raw: Any) -> Optional[ExportTarget]:
    """Turn one raw exports value into a target variant.

    Values that can never resolve (null, numbers, booleans) become None and
    are dropped from their enclosing array or condition map.
    """
    if isinstance(raw, str):
        return StringTarget(raw)
    if isinstance(raw, list):
        options = tuple(t for t in (parse_target(item) for item in raw) if t is not None)
        return Alternatives(options)
    if isinstance(raw, dict):
        conditions = []
        for name, value in raw.items():
            target = parse_target(value)
            if target is not None:
                conditions.append((name, target))
        return ConditionalMap(tuple(conditions))
    return None


def parse_exports(raw: Any) -> Optional[ExportsMap]:
    """Normalize a raw "exports" value into an ``ExportsMap``.

    A string, an array, or an object of condition names all describe the
    package root and are wrapped as ``{".": ...}``.
    """
    if raw is None:
        return None
    if isinstance(raw, (str, list)):
        target = parse_target(raw)
        return ExportsMap({ROOT_SUBPATH: target} if target is not None else {})
    if not isinstance(raw, dict):
        return None

    subpath_keys = [k for k in raw if k.startswith(".")]
    if not subpath_keys and raw:
        return ExportsMap({ROOT_SUBPATH: parse_target(raw)})
    if len(subpath_keys) != len(raw):
        logger.warning(
            "exports mixes subpath keys and condition names; condition names ignored: %s",
            sorted(k for k in raw if not k.startswith(".")),
        )

    entries = {}
    for key in subpath_keys:
        target = parse_target(raw[key])
        if target is not None:
            entries[key] = target
    return ExportsMap(entries)


def _active_conditions(conditions: Iterable[str]) -> Tuple[str, ...]:
    excluded = set(Constants.EXCLUDED_CONDITIONS)
    return tuple(c for c in conditions if c not in excluded)


def resolve_target(
    target: ExportTarget,
    conditions: Sequence[str] = DEFAULT_CONDITIONS,
    capture: Optional[str] = None,
) -> Optional[str]:
    """Walk a target variant down to a single relative subpath string."""
    if isinstance(target, StringTarget):
        value = target.value if capture is None else target.value.replace("*", capture)
        if not value.startswith("./"):
            if is_debug_enabled(logger):
                logger.debug(
                    "Rejecting exports target outside the package",
                    extra=extra_context(event="decision", component="exports", outcome="rejected", target=value),
                )
            return None
        return value

    if isinstance(target, Alternatives):
        for option in target.options:
            resolved = resolve_target(option, conditions, capture)
            if resolved is not None:
                return resolved
        return None

    if isinstance(target, ConditionalMap):
        for condition in _active_conditions(conditions):
            selected = target.get(condition)
            if selected is None:
                continue
            resolved = resolve_target(selected, conditions, capture)
            if resolved is not None:
                return resolved
        return None

    return None


def _wildcard_capture(key: str, subpath: str) -> Optional[str]:
    """Return what ``*`` in ``key`` matches within ``subpath``, or None."""
    if key.count("*") != 1:
        return None
    prefix, suffix = key.split("*")
    if len(subpath) < len(key) or not subpath.startswith(prefix) or not subpath.endswith(suffix):
        return None
    return subpath[len(prefix):len(subpath) - len(suffix)]


def match_subpath(exports: ExportsMap, subpath: str) -> Optional[Tuple[ExportTarget, Optional[str]]]:
    """Select the exports entry for ``subpath``.

    Returns ``(target, capture)``; capture is None for exact matches. Among
    wildcard keys the longest prefix before ``*`` wins, then the longer key.
    """
    if "*" not in subpath and subpath in exports.entries:
        return exports.entries[subpath], None

    best_key = None
    best_capture = None
    for key in exports.entries:
        capture = _wildcard_capture(key, subpath)
        if capture is None:
            continue
        if best_key is None or _pattern_rank(key) > _pattern_rank(best_key):
            best_key, best_capture = key, capture

    if best_key is None:
        return None
    return exports.entries[best_key], best_capture


def _pattern_rank(key: str) -> Tuple[int, int]:
    return (key.index("*"), len(key))


def resolve_export(
    exports: Union[ExportsMap, Any],
    subpath: str = ROOT_SUBPATH,
    conditions: Sequence[str] = DEFAULT_CONDITIONS,
) -> Optional[str]:
    """Resolve ``subpath`` (``.`` or ``./x``) against an exports value.

    ``exports`` may be a parsed ``ExportsMap`` or the raw JSON value.
    Returns the package-relative target (``./dist/index.mjs``) or None.
    """
    if not isinstance(exports, ExportsMap):
        exports = parse_exports(exports)
        if exports is None:
            return None

    match = match_subpath(exports, subpath)
    if match is None:
        return None
    target, capture = match
    return resolve_target(target, conditions, capture)


def match_export_key(
    key: str,
    value: Any,
    subpath: str,
    conditions: Sequence[str] = DEFAULT_CONDITIONS,
) -> Optional[str]:
    """Resolve ``subpath`` against a single exports entry ``key: value``."""
    target = value if isinstance(value, (StringTarget, ConditionalMap, Alternatives)) else parse_target(value)
    if target is None:
        return None
    if "*" not in key:
        return resolve_target(target, conditions) if key == subpath else None
    capture = _wildcard_capture(key, subpath)
    if capture is None:
        return None
    return resolve_target(target, conditions, capture)


def resolve_root_target(
    descriptor: PackageDescriptor,
    conditions: Sequence[str] = DEFAULT_CONDITIONS,
) -> Optional[str]:
    """Return the package's root entry point as declared in its descriptor.

    Uses the "exports" root when the package declares "exports", otherwise
    "main".
    """
    if descriptor.exports is not None:
        return resolve_export(descriptor.exports, ROOT_SUBPATH, conditions)
    return descriptor.main
