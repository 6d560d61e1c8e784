"""
PostgreSQL access over a shared psycopg2 ThreadedConnectionPool.

Values always travel as bound parameters (%s or %(name)s placeholders);
nothing is interpolated into SQL text. Each call runs in its own transaction:
committed when the statement succeeds, rolled back before the connection goes
back to the pool when it fails.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Tuple
from uuid import UUID

import psycopg2
import psycopg2.extras
import psycopg2.pool

logger = logging.getLogger(__name__)

Params = Tuple | Dict | None


def _adapt(value: Any) -> Any:
    """UUIDs go to the driver as strings, inside containers too."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return type(value)(_adapt(v) for v in value)
    if isinstance(value, dict):
        return {k: _adapt(v) for k, v in value.items()}
    return value


class PostgresClient:
    """
    One pool per database URL, shared by every client built for that URL.

    Usage:
        db = PostgresClient(get_database_url())
        rows = db.execute("SELECT id, name FROM customers ORDER BY name")
        count = db.execute_scalar("SELECT COUNT(*) FROM invoices")
    """

    _pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _pools_lock = threading.RLock()

    def __init__(self, database_url: str, min_connections: int = 2, max_connections: int = 20):
        self._database_url = database_url
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._pool()

    def _pool(self) -> psycopg2.pool.ThreadedConnectionPool:
        with self._pools_lock:
            pool = self._pools.get(self._database_url)
            if pool is None:
                pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=self._min_connections,
                    maxconn=self._max_connections,
                    dsn=self._database_url,
                    connect_timeout=30,
                )
                self._pools[self._database_url] = pool
                logger.info(f"Postgres pool created ({self._min_connections}-{self._max_connections} connections)")
            return pool

    @contextmanager
    def get_connection(self):
        """Borrow a connection; roll back if the block raises."""
        pool = self._pool()
        conn = pool.getconn()
        if conn is None:
            raise RuntimeError("Could not get connection from pool")
        try:
            yield conn
        except Exception:
            if not conn.closed:
                conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    @contextmanager
    def _transaction(self, query: str, params: Params, dict_rows: bool = True):
        """Run one statement and yield its cursor; commit after the caller reads it."""
        factory = psycopg2.extras.RealDictCursor if dict_rows else None
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=factory) as cur:
                cur.execute(query, _adapt(params))
                yield cur
            conn.commit()

    def execute(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Rows as dicts; [] for statements that return nothing."""
        with self._transaction(query, params) as cur:
            return [dict(row) for row in cur.fetchall()] if cur.description else []

    def execute_single(self, query: str, params: Params = None) -> Dict[str, Any] | None:
        rows = self.execute(query, params)
        return rows[0] if rows else None

    def execute_scalar(self, query: str, params: Params = None) -> Any:
        """First column of the first row, or None."""
        with self._transaction(query, params, dict_rows=False) as cur:
            row = cur.fetchone()
            return row[0] if row else None

    def execute_returning(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Rows produced by an INSERT/UPDATE/DELETE ... RETURNING."""
        with self._transaction(query, params) as cur:
            return [dict(row) for row in cur.fetchall()]

    def close(self) -> None:
        with self._pools_lock:
            pool = self._pools.pop(self._database_url, None)
            if pool is not None:
                pool.closeall()

    @classmethod
    def close_all_pools(cls) -> None:
        with cls._pools_lock:
            for pool in cls._pools.values():
                pool.closeall()
            cls._pools.clear()
