from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_DB_PORT, DEFAULT_POOL_NAME
from ..core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", DEFAULT_DB_PORT)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(db_config.get("pool_size", 0)),
        )


class DatabaseConnection:
    """Store client owned by the container and shared by every repository.

    With ``pool_size`` > 0 the client owns a private mysql-connector pool,
    created on first use and drained by ``close()``; ``close()`` on a borrowed
    connection hands it back. Otherwise a short-lived connection is opened per
    operation.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._closed = False
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def _connect_kwargs(self) -> dict:
        return dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"{DEFAULT_POOL_NAME}_{id(self):x}",
                    pool_size=int(self._config.pool_size),
                    **self._connect_kwargs(),
                )
            return self._pool

    def connect(self):
        if self._closed:
            raise StoreUnavailable("Database client is closed")

        try:
            if self._config.pool_size > 0:
                return self._get_pool().get_connection()
            return mysql.connector.connect(**self._connect_kwargs())
        except mysql.connector.Error as e:
            logger.error(
                "Database connection failed (%s:%s/%s): %s",
                self._config.host, self._config.port, self._config.database, e,
            )
            raise StoreUnavailable(f"Database unavailable: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        with self._pool_lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            # Closes the idle connections held by the pool.
            pool._remove_connections()
        logger.info("Database client closed")
