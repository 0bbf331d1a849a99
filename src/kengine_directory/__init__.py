"""
kengine_directory - per-tenant backend configuration registry

Maps tenant namespaces to the Redis, Neo4j, PostgreSQL and file server
connection settings they use, resolved once from the environment at startup.
"""

__version__ = "0.1.0"

# Core API exports
from .config import (
    DBConfigs,
    FileServerConfig,
    Neo4jConfig,
    PostgresqlConfig,
    RedisConfig,
)
from .context import (
    DATABASE_DIR_KEY,
    GLOBAL_DIR_KEY,
    NON_SAAS_DIR_KEY,
    NamespaceContext,
    NamespaceID,
    extract_namespace,
    new_context_with_namespace,
)
from .directory import (
    NamespaceDirectory,
    for_each_namespace,
    get_all_namespaces,
    get_database_config,
    get_directory,
    initialize,
    is_single_tenant,
    resolve_tenant,
    set_directory,
)
from .errors import (
    DirectoryError,
    NamespaceNotFoundError,
    NamespaceNotSetError,
    NamespaceTaskError,
    TenantResolutionNotImplementedError,
)

__all__ = [
    "DATABASE_DIR_KEY",
    "DBConfigs",
    "DirectoryError",
    "FileServerConfig",
    "GLOBAL_DIR_KEY",
    "NON_SAAS_DIR_KEY",
    "NamespaceContext",
    "NamespaceDirectory",
    "NamespaceID",
    "NamespaceNotFoundError",
    "NamespaceNotSetError",
    "NamespaceTaskError",
    "Neo4jConfig",
    "PostgresqlConfig",
    "RedisConfig",
    "TenantResolutionNotImplementedError",
    "extract_namespace",
    "for_each_namespace",
    "get_all_namespaces",
    "get_database_config",
    "get_directory",
    "initialize",
    "is_single_tenant",
    "new_context_with_namespace",
    "resolve_tenant",
    "set_directory",
    "__version__",
]
