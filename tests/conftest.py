"""
Pytest configuration and shared fixtures for kengine_directory tests

Provides a clean KENGINE_* environment and prebuilt directories.
"""

import os

import pytest

from kengine_directory import directory as directory_module
from kengine_directory.config import (
    DBConfigs,
    FileServerConfig,
    Neo4jConfig,
    PostgresqlConfig,
    RedisConfig,
)
from kengine_directory.context import GLOBAL_DIR_KEY
from kengine_directory.directory import NamespaceDirectory, initialize


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove KENGINE_* variables so tests start from an empty environment"""
    for name in list(os.environ):
        if name.startswith("KENGINE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_directory():
    """Reset the process-wide directory around each test"""
    directory_module.set_directory(None)
    yield
    directory_module.set_directory(None)


@pytest.fixture
def single_tenant_directory():
    """Directory initialized from an empty environment"""
    return initialize({})


@pytest.fixture
def saas_directory():
    """Directory initialized in SaaS mode"""
    return initialize({"KENGINE_SAAS_MODE": "on"})


@pytest.fixture
def sample_db_configs():
    """Fully populated tenant configs"""
    return DBConfigs(
        redis=RedisConfig(endpoint="redis:6379", password="r", database=1),
        neo4j=Neo4jConfig(endpoint="bolt://neo4j:7687", username="neo4j", password="n"),
        postgres=PostgresqlConfig(
            host="pg", port=5432, username="kengine", password="p", database="users"
        ),
    )


@pytest.fixture
def multi_tenant_directory(sample_db_configs):
    """Directory with three tenants plus the global entry"""
    entries = {
        "tenant_a": sample_db_configs,
        "tenant_b": sample_db_configs,
        "tenant_c": sample_db_configs,
        GLOBAL_DIR_KEY: DBConfigs(
            file_server=FileServerConfig(
                endpoint="s3.amazonaws.com", username="u", password="p"
            )
        ),
    }
    return NamespaceDirectory(entries, saas_mode=True)
