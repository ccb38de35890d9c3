"""Registry of reserved core-module identifiers."""

from typing import FrozenSet, Iterable, Optional

from constants import Constants

# Names reserved by the host runtime; resolvable with or without the prefix.
# Newer prefix-only built-ins (node:test, node:sqlite) are not listed and
# only resolve in their prefixed form.
CORE_MODULES: FrozenSet[str] = frozenset([
    "assert", "assert/strict", "async_hooks", "buffer", "child_process",
    "cluster", "console", "constants", "crypto", "dgram",
    "diagnostics_channel", "dns", "dns/promises", "domain", "events", "fs",
    "fs/promises", "http", "http2", "https", "inspector",
    "inspector/promises", "module", "net", "os", "path", "path/posix",
    "path/win32", "perf_hooks", "process", "punycode", "querystring",
    "readline", "readline/promises", "repl", "stream", "stream/consumers",
    "stream/promises", "stream/web", "string_decoder", "sys", "timers",
    "timers/promises", "tls", "trace_events", "tty", "url", "util",
    "util/types", "v8", "vm", "wasi", "worker_threads", "zlib",
])


class CoreModuleRegistry:
    """Answers whether a specifier names a built-in and formats its id."""

    def __init__(self, extra: Optional[Iterable[str]] = None, prefix: str = Constants.CORE_MODULE_PREFIX):
        self.prefix = prefix
        self._names = CORE_MODULES | frozenset(extra or ())

    def __contains__(self, specifier: str) -> bool:
        return self.canonical(specifier) is not None

    def canonical(self, specifier: str) -> Optional[str]:
        """Return ``<prefix><name>`` for a core specifier, else None.

        Prefixed specifiers are returned unchanged whether or not the name
        is known, matching how the host treats its reserved scheme.
        """
        if specifier.startswith(self.prefix):
            return specifier if len(specifier) > len(self.prefix) else None
        if specifier in self._names:
            return self.prefix + specifier
        return None

