"""Request schemas shared by the route modules."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from saveit.validation import check_url


class UrlQuery(BaseModel):
    url: str

    @field_validator('url')
    @classmethod
    def validate_url(cls, value):
        return check_url(value)


class ChangelogVersionBody(BaseModel):
    version: str = Field(..., min_length=1)


class CreateBookmarkBody(BaseModel):
    url: str
    transcript: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator('url')
    @classmethod
    def validate_url(cls, value):
        return check_url(value)


class ListBookmarksQuery(BaseModel):
    query: Optional[str] = None
    special: Optional[str] = None
    cursor: Optional[str] = None
    limit: int = Field(20, ge=1, le=50)

    def special_filters(self):
        """Comma-separated special filters, unknown values dropped."""
        if not self.special:
            return []
        return [
            flag for flag in self.special.split(',')
            if flag in ('READ', 'UNREAD', 'STAR')
        ]


class ApiListBookmarksQuery(BaseModel):
    query: Optional[str] = None
    special: Optional[Literal['READ', 'UNREAD', 'STAR']] = None
    cursor: Optional[str] = None
    limit: int = Field(20, ge=1, le=100)


class BookmarkIdParams(BaseModel):
    bookmark_id: str = Field(..., min_length=1)


class UpdateBookmarkBody(BaseModel):
    model_config = ConfigDict(extra='forbid')

    starred: Optional[bool] = None
    read: Optional[bool] = None
