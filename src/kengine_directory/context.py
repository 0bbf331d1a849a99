"""
Request-scoped namespace context

The active namespace travels in a contextvar, so it is isolated between
threads and asyncio tasks. A namespace can be carried by the current context
or by an explicit ``contextvars.Context`` handed to a callback.
"""

import contextvars
from typing import NewType, Optional

from .errors import NamespaceNotSetError

NamespaceID = NewType("NamespaceID", str)

GLOBAL_DIR_KEY = NamespaceID("global")
NON_SAAS_DIR_KEY = NamespaceID("default")
DATABASE_DIR_KEY = NamespaceID("database")
NAMESPACE_KEY = "namespace"

_namespace_context: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    NAMESPACE_KEY, default=None
)


def set_namespace(namespace: str) -> contextvars.Token:
    """
    Set the namespace in the current context

    Args:
        namespace: The namespace to set

    Returns:
        Token that can be used to reset the context
    """
    return _namespace_context.set(namespace)


def get_namespace() -> Optional[NamespaceID]:
    """Get the namespace of the current context, or None if unset"""
    value = _namespace_context.get()
    return NamespaceID(value) if value is not None else None


def reset_namespace(token: contextvars.Token) -> None:
    """Reset the namespace using a token returned by set_namespace()"""
    _namespace_context.reset(token)


def extract_namespace(ctx: Optional[contextvars.Context] = None) -> NamespaceID:
    """
    Extract the namespace carried by a context

    Args:
        ctx: Context to read from; the current context when omitted

    Raises:
        NamespaceNotSetError: If the context carries no namespace
    """
    if ctx is None:
        value = _namespace_context.get()
    else:
        value = ctx.get(_namespace_context)
    if value is None:
        raise NamespaceNotSetError()
    return NamespaceID(value)


def new_context_with_namespace(namespace: str) -> contextvars.Context:
    """Copy the current context and set the namespace in the copy"""
    ctx = contextvars.copy_context()
    ctx.run(_namespace_context.set, namespace)
    return ctx


class NamespaceContext:
    """Context manager scoping a namespace to a block of code"""

    def __init__(self, namespace: str):
        self.namespace = namespace
        self.token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self.token = set_namespace(self.namespace)
        return self.namespace

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            reset_namespace(self.token)
            self.token = None
