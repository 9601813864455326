"""Member model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IdMixin, TimestampMixin


class Member(IdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "members"

    email: str = Field(unique=True, index=True, nullable=False)
    name: str = Field(nullable=False)
    password_hash: Optional[str] = Field(default=None)  # bcrypt
