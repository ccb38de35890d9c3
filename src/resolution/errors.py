"""Exceptions raised by the resolution engine.

"Not found" is never an exception: resolvers return None for it. The
classes below cover invalid input and unexpected filesystem conditions.
"""


class ResolutionError(Exception):
    """Base class for resolution failures that are not a plain miss."""


class InvalidSpecifierError(ResolutionError, ValueError):
    """Raised when a specifier is empty or malformed."""

    def __init__(self, specifier, reason: str = "invalid specifier"):
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"{reason}: {specifier!r}")


class DescriptorError(ResolutionError):
    """Raised when a package.json cannot be parsed in strict mode."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid package descriptor at {path}: {message}")


class FilesystemError(ResolutionError):
    """Raised for filesystem errors other than a missing entry."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot access {path}: {cause}")
