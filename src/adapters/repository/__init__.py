"""Repository adapters - Database implementations."""

from .postgres import PostgresUserRepository, check_store, run_migrations

__all__ = ["PostgresUserRepository", "check_store", "run_migrations"]
