"""
Namespace directory

Maps tenant namespaces to backend configurations. The directory is populated
once from the environment by ``initialize()`` and read concurrently for the
rest of the process lifetime. A single reader/writer lock covers the whole map.
"""

import contextvars
import logging
import os
import threading
from collections.abc import Mapping
from typing import Callable, Optional

from .concurrency import ReadWriteLock
from .config import DBConfigs
from .context import (
    GLOBAL_DIR_KEY,
    NON_SAAS_DIR_KEY,
    NamespaceID,
    extract_namespace,
    new_context_with_namespace,
)
from .env import init_file_server, init_neo4j, init_postgresql, init_redis
from .errors import (
    NamespaceNotFoundError,
    NamespaceTaskError,
    TenantResolutionNotImplementedError,
)

logger = logging.getLogger(__name__)

SAAS_MODE_ENV = "KENGINE_SAAS_MODE"

NamespaceTask = Callable[[contextvars.Context], object]


def is_saas_mode(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Whether the environment selects multi-tenant (SaaS) mode"""
    env = os.environ if environ is None else environ
    value = env.get(SAAS_MODE_ENV)
    if value is None:
        logger.warning(f"{SAAS_MODE_ENV} defaults to: off")
        return False
    return value == "on"


class NamespaceDirectory:
    """Thread-safe mapping of namespace to DBConfigs"""

    def __init__(
        self,
        entries: Optional[Mapping[str, DBConfigs]] = None,
        saas_mode: bool = False,
    ):
        self._entries: dict[NamespaceID, DBConfigs] = {
            NamespaceID(ns): cfg for ns, cfg in (entries or {}).items()
        }
        self._saas_mode = saas_mode
        self._lock = ReadWriteLock(name="namespace-directory")

    @property
    def saas_mode(self) -> bool:
        return self._saas_mode

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def initialize(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Populate the directory from environment variables

        The file server config always goes under the global key. In
        single-tenant mode the Redis, Neo4j and PostgreSQL configs go under
        the default namespace. Existing entries are replaced, and both
        entries are written in one critical section.
        """
        file_server = init_file_server(environ)
        saas_mode = is_saas_mode(environ)

        tenant: Optional[DBConfigs] = None
        if not saas_mode:
            tenant = DBConfigs(
                redis=init_redis(environ),
                neo4j=init_neo4j(environ),
                postgres=init_postgresql(environ),
            )

        with self._lock.write_lock():
            self._entries.clear()
            self._saas_mode = saas_mode
            if tenant is not None:
                self._entries[NON_SAAS_DIR_KEY] = tenant
            self._entries[GLOBAL_DIR_KEY] = DBConfigs(file_server=file_server)

        logger.info(
            f"Namespace directory initialized in {'SaaS' if saas_mode else 'single-tenant'} mode"
        )

    def get_all_namespaces(self) -> list[NamespaceID]:
        """All tenant namespaces, excluding the global entry. Order is unspecified."""
        with self._lock.read_lock():
            return [ns for ns in self._entries if ns != GLOBAL_DIR_KEY]

    def get_global_config(self) -> DBConfigs:
        """Configuration shared by all tenants"""
        return self._get(GLOBAL_DIR_KEY)

    def get_database_config(
        self, ctx: Optional[contextvars.Context] = None
    ) -> DBConfigs:
        """
        Get the backend configs for the namespace carried by a context

        Args:
            ctx: Context carrying the namespace; the current context when omitted

        Raises:
            NamespaceNotSetError: If the context carries no namespace
            NamespaceNotFoundError: If the namespace has no entry
        """
        return self._get(extract_namespace(ctx))

    def _get(self, namespace: NamespaceID) -> DBConfigs:
        with self._lock.read_lock():
            cfg = self._entries.get(namespace)
        if cfg is None:
            raise NamespaceNotFoundError(namespace)
        return cfg.model_copy(deep=True)

    def for_each_namespace(
        self, fn: NamespaceTask
    ) -> dict[NamespaceID, Exception]:
        """
        Run fn once per tenant namespace

        fn is called with a context carrying the namespace and runs inside
        that context. A failure is logged and the remaining namespaces are
        still processed.

        Returns:
            Failed namespaces mapped to the exception they raised
        """
        failures: dict[NamespaceID, Exception] = {}
        for ns in self.get_all_namespaces():
            ctx = new_context_with_namespace(ns)
            try:
                ctx.run(fn, ctx)
            except NamespaceTaskError as e:
                logger.error(f"[{ns}] {e.message}", exc_info=e.cause or e)
                failures[ns] = e
            except Exception as e:
                logger.error(f"[{ns}] namespace task failed: {e}", exc_info=e)
                failures[ns] = e
        return failures

    def is_single_tenant(self) -> bool:
        """True when the only tenant namespace is the default one"""
        return self.get_all_namespaces() == [NON_SAAS_DIR_KEY]

    def resolve_tenant(self, identity: str) -> NamespaceID:
        """
        Resolve the tenant namespace of a user identity (e.g. an email)

        Raises:
            TenantResolutionNotImplementedError: In multi-tenant deployments
        """
        if self.is_single_tenant():
            return NON_SAAS_DIR_KEY
        raise TenantResolutionNotImplementedError(identity)


def initialize(environ: Optional[Mapping[str, str]] = None) -> NamespaceDirectory:
    """Create a directory populated from the environment (os.environ by default)"""
    directory = NamespaceDirectory()
    directory.initialize(environ)
    return directory


# Process-wide directory instance
_directory: Optional[NamespaceDirectory] = None
_directory_lock = threading.Lock()


def get_directory() -> NamespaceDirectory:
    """Get the process-wide directory, initializing it from os.environ on first use"""
    global _directory
    if _directory is not None:
        return _directory
    with _directory_lock:
        if _directory is None:
            _directory = initialize()
        return _directory


def set_directory(directory: Optional[NamespaceDirectory]) -> None:
    """Set the process-wide directory instance"""
    global _directory
    with _directory_lock:
        _directory = directory


def get_all_namespaces() -> list[NamespaceID]:
    return get_directory().get_all_namespaces()


def get_database_config(ctx: Optional[contextvars.Context] = None) -> DBConfigs:
    return get_directory().get_database_config(ctx)


def for_each_namespace(fn: NamespaceTask) -> dict[NamespaceID, Exception]:
    return get_directory().for_each_namespace(fn)


def is_single_tenant() -> bool:
    return get_directory().is_single_tenant()


def resolve_tenant(identity: str) -> NamespaceID:
    return get_directory().resolve_tenant(identity)
