"""Photo record models returned by the store."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import BaseModel


class Photo(BaseModel):
    """A stored photo as acknowledged by the store."""

    photo_id: int = Field(..., description="Store-assigned identity")
    file_name: str = Field(..., min_length=1, description="Sanitized original file name")
    file_path: str | None = Field(None, description="Storage path relative to the store root")
    tags: list[str] = Field(default_factory=list, description="Tags assigned by the store")
    created_at: datetime | None = Field(None, description="Creation timestamp")


class UploadResponse(BaseModel):
    """Acknowledgment body for a successful upload."""

    photo: Photo


class PhotosResponse(BaseModel):
    """Gallery listing body."""

    photos: list[Photo] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Search result body."""

    query: str
    tags: list[str] = Field(default_factory=list)
    photos: list[Photo] = Field(default_factory=list)
