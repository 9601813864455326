from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TeamRole(str, Enum):
    OWNER = "owner"
    USER = "user"


class ScopeType(str, Enum):
    PRIVATE = "private"
    TEAM = "team"
    PUBLIC = "public"


class FileType(str, Enum):
    PNG = "png"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"


class PageQuery(BaseModel):
    """Cursor-anchored page request.

    ``top_id == 0`` starts from the newest row; any other value restricts the
    listing to rows with a smaller id so that rows created after the first
    page was fetched do not shift later pages.
    """
    page_index: int = Field(default=0, ge=0)
    top_id: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, ge=1, le=100)


class PageInfo(BaseModel):
    page_index: int
    page_size: int
    top_id: int
    is_last: bool


class ErrorBody(BaseModel):
    code: str
    message: str
    status: int


class ErrorResponse(BaseModel):
    error: ErrorBody
    details: Optional[dict] = None
