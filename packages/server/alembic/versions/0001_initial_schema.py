"""Initial schema: members, teams, memberships, meeting rooms, whiteboards.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    ]


def _fk(column: str, target: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        column,
        sa.Integer(),
        sa.ForeignKey(target, ondelete="CASCADE"),
        nullable=nullable,
        index=True,
    )


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)

    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("profile_image_key", sa.String(length=255), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_teams_code", "teams", ["code"], unique=True)

    op.create_table(
        "team_members",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _fk("team_id", "teams.id"),
        _fk("member_id", "members.id"),
        sa.Column(
            "role",
            sa.Enum("owner", "user", name="team_role", native_enum=False, create_constraint=True),
            nullable=False,
        ),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("team_id", "member_id", name="uq_team_members_team_member"),
    )

    op.create_table(
        "team_meeting_rooms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _fk("team_id", "teams.id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.UniqueConstraint("team_id", "name", name="uq_team_meeting_rooms_team_name"),
    )

    op.create_table(
        "whiteboards",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("whiteboard_url", sa.String(length=2048), nullable=True),
        sa.Column(
            "scope",
            sa.Enum("private", "team", "public", name="scope_type", native_enum=False, create_constraint=True),
            nullable=False,
        ),
        _fk("author_id", "members.id"),
        _fk("team_id", "teams.id", nullable=True),
        *_timestamps(),
    )


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    op.drop_table("whiteboards")
    op.drop_table("team_meeting_rooms")
    op.drop_table("team_members")
    op.drop_index("ix_teams_code", table_name="teams")
    op.drop_table("teams")
    op.drop_index("ix_members_email", table_name="members")
    op.drop_table("members")
