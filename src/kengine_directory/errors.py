"""
Exception types for the namespace directory

Lookups and context extraction raise; environment parsing never does.
"""

from typing import Optional


class DirectoryError(Exception):
    """Base class for namespace directory errors"""


class NamespaceNotFoundError(DirectoryError, KeyError):
    """Raised when a namespace has no entry in the directory"""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"namespace not found: {namespace!r}")

    def __str__(self) -> str:
        return self.args[0]


class NamespaceNotSetError(DirectoryError, LookupError):
    """Raised when a context carries no namespace"""

    def __init__(self, message: str = "namespace not set in context"):
        super().__init__(message)


class TenantResolutionNotImplementedError(DirectoryError, NotImplementedError):
    """
    Identity-to-tenant resolution is not available in multi-tenant mode

    Raised instead of returning an empty namespace so that callers cannot
    mistake the missing resolution for a valid result.
    """

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(
            f"tenant resolution for {identity!r} is not implemented in SaaS mode"
        )


class NamespaceTaskError(DirectoryError):
    """Raised by per-namespace callbacks to attach a log message to a failure"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message if cause is None else f"{message}: {cause}")
