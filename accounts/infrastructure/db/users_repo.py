from __future__ import annotations

from typing import Any, Optional

import psycopg
from psycopg import sql

from accounts.domain.entities import User
from accounts.domain.errors import UserAlreadyExists, UserNotFound
from accounts.domain.ports.user_repository import UserRepositoryPort

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
  id                bigserial PRIMARY KEY,
  name              text NOT NULL,
  email             text NOT NULL,
  password_digest   text NOT NULL,
  remember_digest   text,
  activation_digest text,
  activated         boolean NOT NULL DEFAULT false,
  activated_at      timestamptz,
  created_at        timestamptz NOT NULL DEFAULT now(),
  updated_at        timestamptz NOT NULL DEFAULT now()
);
CREATE UNIQUE INDEX IF NOT EXISTS users_email_lower_key ON users (lower(email));
"""

_COLUMNS = (
    "id, name, email, password_digest, remember_digest, activation_digest, "
    "activated, activated_at, created_at"
)

BIGINT_MAX = 2**63 - 1


UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "password_digest",
        "remember_digest",
        "activated",
        "activated_at",
    }
)


def parse_user_id(user_id: str | None) -> int | None:
    """Row id from a cookie or path value; None when it is outside the bigserial range."""
    try:
        id_ = int(user_id)
    except (TypeError, ValueError):
        return None
    return id_ if 0 < id_ <= BIGINT_MAX else None


def _row_to_user(row: tuple) -> User:
    (
        id_,
        name,
        email,
        password_digest,
        remember_digest,
        activation_digest,
        activated,
        activated_at,
        created_at,
    ) = row
    return User(
        id=str(id_),
        name=str(name),
        email=str(email),
        password_digest=password_digest,
        remember_digest=remember_digest,
        activation_digest=activation_digest,
        activated=bool(activated),
        activated_at=activated_at,
        created_at=created_at,
    )


async def ensure_schema(conn: psycopg.AsyncConnection) -> None:
    async with conn.cursor() as cur:
        await cur.execute(SCHEMA_SQL)
    await conn.commit()


class PgUserRepository(UserRepositoryPort):
    """
    Postgres implementation of UserRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    - Email uniqueness is the unique index on lower(email); a violation is
      reported as UserAlreadyExists.
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    async def create(self, user: User) -> User:
        query = f"""
        INSERT INTO users (name, email, password_digest, activation_digest, activated)
        VALUES (%s, LOWER(TRIM(%s)), %s, %s, %s)
        RETURNING {_COLUMNS}
        """
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(
                    query,
                    (
                        user.name,
                        user.email,
                        user.password_digest,
                        user.activation_digest,
                        user.activated,
                    ),
                )
                row = await cur.fetchone()
        except psycopg.errors.UniqueViolation as e:
            raise UserAlreadyExists() from e

        if not row:
            raise RuntimeError("create returned no row")
        return _row_to_user(row)

    async def get_by_email(self, email: str) -> Optional[User]:
        query = f"SELECT {_COLUMNS} FROM users WHERE lower(email) = LOWER(TRIM(%s))"
        async with self._conn.cursor() as cur:
            await cur.execute(query, (email,))
            row = await cur.fetchone()
        return _row_to_user(row) if row else None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        id_ = parse_user_id(user_id)
        if id_ is None:
            return None
        query = f"SELECT {_COLUMNS} FROM users WHERE id = %s"
        async with self._conn.cursor() as cur:
            await cur.execute(query, (id_,))
            row = await cur.fetchone()
        return _row_to_user(row) if row else None

    async def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update columns: {sorted(unknown)}")
        if not fields:
            return
        id_ = parse_user_id(user_id)
        if id_ is None:
            raise UserNotFound()

        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in fields
        ]
        assignments.append(sql.SQL("updated_at = now()"))
        query = sql.SQL("UPDATE users SET {} WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(query, (*fields.values(), id_))
                updated = cur.rowcount
        except psycopg.errors.UniqueViolation as e:
            raise UserAlreadyExists() from e

        if updated == 0:
            raise UserNotFound()
