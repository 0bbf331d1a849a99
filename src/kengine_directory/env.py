"""
Environment-driven backend configuration

Each initializer reads a fixed set of ``KENGINE_*`` variables and always
returns a complete config. Missing variables fall back to defaults and
malformed numbers or booleans fall back with a warning; nothing here raises
on bad input, so configuration can never stop the process from starting.
"""

import logging
import os
import re
from collections.abc import Mapping
from typing import Optional

from .config import FileServerConfig, Neo4jConfig, PostgresqlConfig, RedisConfig

logger = logging.getLogger(__name__)

S3_HOST = "s3.amazonaws.com"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str, default: int) -> tuple[int, bool]:
    """
    Parse a base-10 integer: ASCII digits with an optional sign, nothing else

    Returns:
        (value, used_default): used_default is True when raw did not parse
    """
    if not _INT_PATTERN.fullmatch(raw):
        return default, True
    return int(raw, 10), False


def parse_bool(raw: str, default: bool) -> tuple[bool, bool]:
    """
    Parse a boolean flag such as "true", "F" or "1"

    Returns:
        (value, used_default): used_default is True when raw did not parse
    """
    if raw in _TRUE_VALUES:
        return True, False
    if raw in _FALSE_VALUES:
        return False, False
    return default, True


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def _lookup(env: Mapping[str, str], name: str, default: str) -> str:
    """Value of name, or default with a warning when it is not set at all"""
    value = env.get(name)
    if value is None:
        logger.warning(f"{name} defaults to: {default}")
        return default
    return value


def _non_empty(env: Mapping[str, str], name: str, default: str) -> str:
    """Value of name, or default with a warning when it is unset or empty"""
    value = env.get(name, "")
    if value == "":
        logger.warning(f"{name} defaults to: {default}")
        return default
    return value


def _password(env: Mapping[str, str], name: str, default: str, service: str) -> str:
    value = env.get(name, "")
    if value == "":
        logger.warning(f"using default {service} password")
        return default
    return value


def init_redis(environ: Optional[Mapping[str, str]] = None) -> RedisConfig:
    """Build the cache store config from KENGINE_REDIS_* variables"""
    env = _environ(environ)
    host = _lookup(env, "KENGINE_REDIS_HOST", "localhost")
    port = _lookup(env, "KENGINE_REDIS_PORT", "6379")

    database = 0
    raw_db = env.get("KENGINE_REDIS_DB_NUMBER", "")
    if raw_db != "":
        database, used_default = parse_int(raw_db, 0)
        if used_default:
            logger.warning(
                f"KENGINE_REDIS_DB_NUMBER defaults to: {database} (invalid value {raw_db!r})"
            )

    return RedisConfig(
        endpoint=f"{host}:{port}",
        password=env.get("KENGINE_REDIS_PASSWORD", ""),
        database=database,
    )


def init_file_server(environ: Optional[Mapping[str, str]] = None) -> FileServerConfig:
    """Build the object store config from KENGINE_FILE_SERVER_* variables"""
    env = _environ(environ)
    host = _lookup(env, "KENGINE_FILE_SERVER_HOST", "kengine-file-server")
    port = _lookup(env, "KENGINE_FILE_SERVER_PORT", "9000")
    username = _non_empty(env, "KENGINE_FILE_SERVER_USER", "kengine")
    password = _password(env, "KENGINE_FILE_SERVER_PASSWORD", "kengine", "file server")

    # Managed S3 is addressed without a port
    endpoint = host if host == S3_HOST else f"{host}:{port}"

    raw_secure = env.get("KENGINE_FILE_SERVER_SECURE", "") or "false"
    secure, used_default = parse_bool(raw_secure, False)
    if used_default:
        logger.warning(
            f"KENGINE_FILE_SERVER_SECURE defaults to: {secure} (invalid value {raw_secure!r})"
        )

    return FileServerConfig(
        endpoint=endpoint,
        username=username,
        password=password,
        bucket_name=env.get("KENGINE_FILE_SERVER_BUCKET", ""),
        secure=secure,
        region=env.get("KENGINE_FILE_SERVER_REGION", ""),
    )


def init_postgresql(environ: Optional[Mapping[str, str]] = None) -> PostgresqlConfig:
    """Build the relational store config from KENGINE_POSTGRES_USER_DB_* variables"""
    env = _environ(environ)
    host = _lookup(env, "KENGINE_POSTGRES_USER_DB_HOST", "localhost")

    port = 5432
    raw_port = env.get("KENGINE_POSTGRES_USER_DB_PORT", "")
    if raw_port == "":
        logger.warning(f"KENGINE_POSTGRES_USER_DB_PORT defaults to: {port}")
    else:
        port, used_default = parse_int(raw_port, 5432)
        if used_default:
            logger.warning(
                f"KENGINE_POSTGRES_USER_DB_PORT defaults to: {port} (invalid value {raw_port!r})"
            )

    return PostgresqlConfig(
        host=host,
        port=port,
        username=_non_empty(env, "KENGINE_POSTGRES_USER_DB_USER", "kengine"),
        password=_password(
            env, "KENGINE_POSTGRES_USER_DB_PASSWORD", "kengine", "postgres"
        ),
        database=env.get("KENGINE_POSTGRES_USER_DB_NAME", ""),
        sslmode=env.get("KENGINE_POSTGRES_USER_DB_SSLMODE", ""),
    )


def init_neo4j(environ: Optional[Mapping[str, str]] = None) -> Neo4jConfig:
    """Build the graph store config from KENGINE_NEO4J_* variables"""
    env = _environ(environ)
    host = _lookup(env, "KENGINE_NEO4J_HOST", "localhost")
    bolt_port = _lookup(env, "KENGINE_NEO4J_BOLT_PORT", "7687")

    return Neo4jConfig(
        endpoint=f"bolt://{host}:{bolt_port}",
        username=_non_empty(env, "KENGINE_NEO4J_USER", "neo4j"),
        password=_password(env, "KENGINE_NEO4J_PASSWORD", "e16908ffa5b9f8e9d4ed", "neo4j"),
    )
