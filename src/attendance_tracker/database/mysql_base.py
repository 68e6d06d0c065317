from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY
from ..core.exceptions import DomainError, IntegrityViolation, UpstreamFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def translate_error(exc: mysql.connector.Error) -> DomainError:
    """Map a driver error onto the domain taxonomy."""
    if getattr(exc, "errno", None) == MYSQL_DUPLICATE_KEY:
        return IntegrityViolation(f"Duplicate attendance record: {exc.msg}")
    return UpstreamFailure(str(exc))


def _rollback_quietly(conn) -> None:
    # A dropped connection fails the rollback too; the original error is the one to surface.
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.exception("Rollback failed")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("Could not connect to the attendance store")
        raise UpstreamFailure(str(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        if getattr(exc, "errno", None) != MYSQL_DUPLICATE_KEY:
            logger.exception("Attendance store operation failed")
        raise translate_error(exc) from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
