"""State store implementation using SQLAlchemy."""

import json
import logging

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.domain.repositories.state_store import IStateStore
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.exceptions import DatabaseError, SerializationError


logger = logging.getLogger(__name__)

APP_STATE_TABLE = "app_state"

_CREATE_TABLE_SQL = f"""
    CREATE TABLE IF NOT EXISTS {APP_STATE_TABLE} (
        state_key VARCHAR(255) PRIMARY KEY,
        state_value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


class SqlAlchemyStateStore(IStateStore):
    """``app_state`` テーブルの1行を1キーとして保存する状態ストア.

    操作ごとにセッションを開いてコミットするため、書き込みは即時に
    永続化される。テーブルがなければ初回アクセス時に作成する。
    """

    def __init__(self, database: AsyncDatabase, create_schema: bool = True):
        """Initialize state store.

        Args:
            database: 非同期データベースマネージャ
            create_schema: 初回アクセス時にテーブルを作成するか
        """
        self._database = database
        self._create_schema = create_schema
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if self._schema_ready or not self._create_schema:
            return
        try:
            async with self._database.get_session() as session:
                await session.execute(text(_CREATE_TABLE_SQL))
        except SQLAlchemyError as e:
            logger.error(f"Failed to create {APP_STATE_TABLE} table: {e}")
            raise DatabaseError(
                "Failed to prepare state table", {"error": str(e)}
            ) from e
        self._schema_ready = True

    async def get(self, key: str) -> Any | None:
        await self._ensure_schema()
        try:
            query = text(f"""
                SELECT state_value
                FROM {APP_STATE_TABLE}
                WHERE state_key = :key
            """)
            async with self._database.get_session() as session:
                result = await session.execute(query, {"key": key})
                row = result.fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading state key {key}: {e}")
            raise DatabaseError(
                "Failed to read state", {"key": key, "error": str(e)}
            ) from e

        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            raise SerializationError(
                "Stored state is not valid JSON", {"key": key, "error": str(e)}
            ) from e

    async def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                "Value is not JSON serializable", {"key": key, "error": str(e)}
            ) from e

        await self._ensure_schema()
        try:
            query = text(f"""
                INSERT INTO {APP_STATE_TABLE} (state_key, state_value, updated_at)
                VALUES (:key, :value, CURRENT_TIMESTAMP)
                ON CONFLICT (state_key) DO UPDATE SET
                    state_value = excluded.state_value,
                    updated_at = CURRENT_TIMESTAMP
            """)
            async with self._database.get_session() as session:
                await session.execute(query, {"key": key, "value": payload})
        except SQLAlchemyError as e:
            logger.error(f"Database error writing state key {key}: {e}")
            raise DatabaseError(
                "Failed to write state", {"key": key, "error": str(e)}
            ) from e

    async def delete(self, key: str) -> None:
        await self._ensure_schema()
        try:
            query = text(f"DELETE FROM {APP_STATE_TABLE} WHERE state_key = :key")
            async with self._database.get_session() as session:
                await session.execute(query, {"key": key})
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting state key {key}: {e}")
            raise DatabaseError(
                "Failed to delete state", {"key": key, "error": str(e)}
            ) from e

    async def close(self) -> None:
        await self._database.dispose()
