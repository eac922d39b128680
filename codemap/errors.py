"""Error taxonomy for API surface mapping runs."""

from __future__ import annotations


class CodeMapError(RuntimeError):
    """Base class for mapping failures."""


class DiscoveryError(CodeMapError):
    """Raised when no project units are found under a root path."""


class ParseError(CodeMapError):
    """Raised when one source file cannot be read, parsed or walked."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class ArtifactWriteError(CodeMapError):
    """Raised when a project artifact cannot be written."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
