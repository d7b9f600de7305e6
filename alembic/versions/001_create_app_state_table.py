"""アプリケーション状態ストア用のapp_stateテーブルを作成.

Revision ID: 001
Revises:
Create Date: 2026-10-19

選挙フェーズ・候補者・名簿・クイズなどを、キーごとに1行のJSONとして保存する。
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: app_stateテーブルを作成."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS app_state (
            state_key VARCHAR(255) PRIMARY KEY,
            state_value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
    """)


def downgrade() -> None:
    """Rollback migration: app_stateテーブルを削除."""
    op.execute("DROP TABLE IF EXISTS app_state;")
