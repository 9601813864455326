"""Team model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IdMixin, TimestampMixin


class Team(IdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "teams"

    code: str = Field(unique=True, index=True, nullable=False)
    name: str = Field(nullable=False)
    profile_image_key: Optional[str] = None
    profile_image_url: Optional[str] = None
