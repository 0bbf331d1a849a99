"""
Backend connection configuration models

One model per backing store plus the per-namespace bundle. Any store may be
absent from a bundle; the global entry only carries the file server, the
default entry carries everything else.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RedisConfig(BaseModel):
    """Cache store configuration"""

    endpoint: str
    password: str = Field(default="", repr=False)
    database: int = 0


class Neo4jConfig(BaseModel):
    """Graph store configuration"""

    endpoint: str
    username: str
    password: str = Field(repr=False)


class PostgresqlConfig(BaseModel):
    """Relational store configuration"""

    host: str
    port: int = 5432
    username: str
    password: str = Field(repr=False)
    database: str = ""
    sslmode: str = ""


class FileServerConfig(BaseModel):
    """Object store configuration"""

    endpoint: str
    username: str
    password: str = Field(repr=False)
    bucket_name: str = ""
    secure: bool = False
    region: str = ""


class DBConfigs(BaseModel):
    """Backend configurations for a single namespace"""

    redis: Optional[RedisConfig] = None
    neo4j: Optional[Neo4jConfig] = None
    postgres: Optional[PostgresqlConfig] = None
    file_server: Optional[FileServerConfig] = None
