from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import ConstraintViolation, StoreUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One unit of work: everything executed inside commits together or rolls back.

    Driver errors are translated to domain store errors here so services never
    see mysql-connector types.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        _safe_rollback(conn)
        logger.error("Store rejected write: %s", e)
        raise ConstraintViolation(str(e.msg or e)) from e
    except mysql.connector.Error as e:
        _safe_rollback(conn)
        logger.error("Store query failed: %s", e)
        raise StoreUnavailable(str(e.msg or e)) from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        # Connection already gone.
        logger.warning("Rollback failed: %s", e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
