"""initial quiz schema: users, quizzes, questions, scores

Revision ID: 3f2c9d4e1a7b
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f2c9d4e1a7b"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "quizzes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_points_based", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_quizzes_id", "quizzes", ["id"])

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "quiz_id",
            sa.Integer(),
            sa.ForeignKey("quizzes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("option1", sa.String(length=255), nullable=False),
        sa.Column("option2", sa.String(length=255), nullable=False),
        sa.Column("option3", sa.String(length=255), nullable=True),
        sa.Column("option4", sa.String(length=255), nullable=True),
        sa.Column("correct_option", sa.Integer(), nullable=False),
    )
    op.create_index("ix_questions_id", "questions", ["id"])
    op.create_index("ix_questions_quiz_id", "questions", ["quiz_id"])

    # Deliberately no unique (user_id, quiz_id): score records are append-only
    op.create_table(
        "scores",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "quiz_id",
            sa.Integer(),
            sa.ForeignKey("quizzes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_scores_id", "scores", ["id"])
    op.create_index("ix_scores_user_id", "scores", ["user_id"])
    op.create_index("ix_scores_quiz_id", "scores", ["quiz_id"])
    op.create_index("ix_scores_created_at", "scores", ["created_at"])


def downgrade() -> None:
    op.drop_table("scores")
    op.drop_table("questions")
    op.drop_table("quizzes")
    op.drop_table("users")
