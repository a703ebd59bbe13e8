"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Email uniqueness:
-----------------
The `users.email` column carries a UNIQUE constraint and inserts use
`ON CONFLICT (email) DO NOTHING`. When two requests race past the service's
advisory lookup, the database serializes them on the unique index: one row
is returned, the other insert returns nothing and is reported as
EmailAlreadyRegistered. No read-then-write window exists at this layer.

Field rules:
------------
`insert` re-checks its input against the domain's FIELD_RULES table, so a
caller that bypasses the service still cannot store an invalid record.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered, StoreUnavailable
from src.domain.ports import StoreStatus, User
from src.domain.validation import ensure_valid

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, contact_no, address, created_at, updated_at"


def _row_to_user(row: tuple) -> User:
    return User(
        id=str(row[0]),
        name=row[1],
        email=row[2],
        contact_no=row[3],
        address=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver and pool failures into StoreUnavailable."""
    try:
        yield
    except psycopg.Error as e:
        logger.error(f"Store operation failed: {operation} - {e}")
        raise StoreUnavailable(f"{operation} failed: {e}") from e


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def insert(self, fields: dict[str, str]) -> User:
        """
        Insert a new user, letting the database assign id and timestamps.

        Both timestamps come from the same NOW() call inside the insert
        transaction, so created_at == updated_at for a fresh record.

        Args:
            fields: Mapping with name, email, contactNo and address

        Returns:
            The stored User

        Raises:
            UserValidationError: If the fields break a field rule
            EmailAlreadyRegistered: If the email already exists
            StoreUnavailable: On any database failure
        """
        values = ensure_valid(fields)

        sql = f"""
            INSERT INTO users (name, email, contact_no, address, created_at, updated_at)
            VALUES (%s, %s, %s, %s, NOW(), NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """

        with _store_errors("insert"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (values["name"], values["email"], values["contactNo"], values["address"]),
                )
                row = cursor.fetchone()
                conn.commit()

        if row is None:
            raise EmailAlreadyRegistered(values["email"])
        return _row_to_user(row)

    def find_by_email(self, email: str) -> User | None:
        """
        Look up a user by normalized email.

        Advisory only: the UNIQUE constraint is what guarantees uniqueness.
        """
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        with _store_errors("find_by_email"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()

        return _row_to_user(row) if row is not None else None

    def list_all(self) -> list[User]:
        """Return all users ordered by creation time, newest first."""
        sql = f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at DESC"

        with _store_errors("list_all"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()

        return [_row_to_user(row) for row in rows]

    def delete_by_id(self, user_id: str) -> bool:
        """
        Delete a user by id.

        Ids that are not a well-formed UUID can never have been issued,
        so they short-circuit to False without a query.

        Returns:
            True if a row was deleted, False otherwise
        """
        try:
            key = uuid.UUID(user_id)
        except ValueError:
            return False

        with _store_errors("delete_by_id"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("DELETE FROM users WHERE id = %s", (key,))
                conn.commit()
                return cursor.rowcount == 1


def check_store(pool: ConnectionPool, timeout: float = 2.0) -> StoreStatus:
    """
    Probe database connectivity for the health check.

    Never raises for store failures; an unreachable or saturated pool is
    reported as DISCONNECTED.
    """
    try:
        with pool.connection(timeout=timeout) as conn:
            conn.execute("SELECT 1")
    except psycopg.Error as e:
        logger.warning(f"Store health check failed: {e}")
        return StoreStatus.DISCONNECTED
    return StoreStatus.CONNECTED


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
