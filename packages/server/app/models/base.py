"""Base mixins for SQLModel tables."""

from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": _utcnow},
        sa_type=sa.DateTime(timezone=True),
    )


class IdMixin(SQLModel):
    # Integer keys double as the newest-first pagination cursor.
    id: Optional[int] = Field(default=None, primary_key=True)


def enum_column(enum_cls: type, name: str, **kwargs) -> sa.Column:
    """A VARCHAR + CHECK column restricted to the enum's values."""
    return sa.Column(
        sa.Enum(
            enum_cls,
            name=name,
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        **kwargs,
    )


def fk_column(target: str, *, nullable: bool = False) -> sa.Column:
    """Integer foreign key that is removed together with its parent row."""
    return sa.Column(
        sa.Integer,
        sa.ForeignKey(target, ondelete="CASCADE"),
        nullable=nullable,
        index=True,
    )
