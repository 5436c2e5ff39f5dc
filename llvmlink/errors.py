"""
Error model for llvmlink.

Every stage raises BuildError and nothing catches it except the driver,
which turns it into a single error line and a non-zero exit status.
"""

from enum import Enum


class ErrorKind(Enum):
    TOOL_INVOCATION_FAILED = 'ToolInvocationFailed'
    TOOL_NOT_FOUND = 'ToolNotFound'
    UNPARSEABLE_OUTPUT = 'UnparseableOutput'
    VERSION_TOO_LOW = 'VersionTooLow'
    MALFORMED_CACHE_ENTRY = 'MalformedCacheEntry'
    INVALID_CONFIGURATION = 'InvalidConfiguration'


class BuildError(Exception):
    """Fatal build error carrying its kind and a human-readable message."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
