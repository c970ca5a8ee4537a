"""Photo gallery service: listing and tag search on the store."""

from __future__ import annotations

from collections.abc import Sequence

import pydantic

from photoctl.core.exceptions import ProtocolError, ValidationError
from photoctl.models.photo import Photo, PhotosResponse, SearchResponse

from .base import BaseService

IMAGES_PATH = "/api/images"
SEARCH_PATH = "/api/images/search"


def normalize_tags(tags: Sequence[str]) -> list[str]:
    """Split comma-separated entries, trim, and drop empty or repeated tags."""
    result: list[str] = []
    for entry in tags:
        for tag in entry.split(","):
            tag = tag.strip()
            if tag and tag not in result:
                result.append(tag)
    return result


class PhotoService(BaseService):
    """Service for reading the store's photo gallery."""

    def list(self, tags: Sequence[str] | None = None) -> list[Photo]:
        """List stored photos, optionally filtered by tags.

        Args:
            tags: Tags to filter by; comma-separated entries are split.

        Returns:
            Photos in the store's order (newest first).
        """
        params = {}
        wanted = normalize_tags(tags or [])
        if wanted:
            params["tags"] = ",".join(wanted)

        data = self._get(IMAGES_PATH, params=params or None)
        try:
            return PhotosResponse.model_validate(data).photos
        except pydantic.ValidationError as e:
            raise ProtocolError(f"Malformed photo listing: {e}") from e

    def search(self, query: str) -> SearchResponse:
        """Search photos with a free-text query the store maps to tags.

        Raises:
            ValidationError: If the query is blank.
        """
        query = query.strip()
        if not query:
            raise ValidationError("Query cannot be empty", field="query")

        data = self._post(SEARCH_PATH, json={"query": query})
        try:
            return SearchResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise ProtocolError(f"Malformed search response: {e}") from e
