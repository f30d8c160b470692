"""create questions table

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    difficulty = sa.Enum("Easy", "Medium", "Hard", name="difficulty")
    difficulty.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "questions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        sa.Column("difficulty", difficulty, nullable=False),
        sa.Column("topics", ARRAY(sa.String(50)), nullable=False),
        sa.Column("problem_statement", sa.Text(), nullable=False),
        sa.Column("constraints", ARRAY(sa.Text()), nullable=False, server_default="{}"),
        sa.Column("examples", JSONB(), nullable=False, server_default="[]"),
        sa.Column("code_snippets", JSONB(), nullable=False, server_default="[]"),
        sa.Column("entry_point", sa.String(100), nullable=False),
        sa.Column("timeout", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("signature", JSONB(), nullable=True),
        sa.Column("test_cases", JSONB(), nullable=False, server_default="[]"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
        sa.CheckConstraint("timeout >= 1", name="ck_questions_timeout_positive"),
    )
    op.create_index("ix_questions_difficulty", "questions", ["difficulty"])
    # GIN index serves the topics @> ARRAY[...] filter
    op.create_index(
        "ix_questions_topics", "questions", ["topics"], postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("ix_questions_topics", table_name="questions")
    op.drop_index("ix_questions_difficulty", table_name="questions")
    op.drop_table("questions")
    sa.Enum(name="difficulty").drop(op.get_bind(), checkfirst=True)
