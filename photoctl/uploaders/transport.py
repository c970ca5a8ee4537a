"""Upload transport for the photo store.

Sends an encoded payload as a JSON body streamed in chunks, so progress can
be reported as bytes are handed to the channel.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import httpx
import pydantic

from photoctl.core.exceptions import ProtocolError, TransportError
from photoctl.models.photo import Photo, UploadResponse
from photoctl.uploaders.constants import SEND_CHUNK_SIZE, UPLOAD_PATH
from photoctl.uploaders.encoder import EncodedPayload

if TYPE_CHECKING:
    from photoctl.core.client import StoreClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def build_request_body(payload: EncodedPayload) -> bytes:
    """Serialize a payload into the store's upload request shape."""
    body: dict[str, str] = {
        "file_name": payload.file_name,
        "image_base64": payload.data,
    }
    if payload.content_type:
        body["mime_type"] = payload.content_type
    return json.dumps(body).encode("utf-8")


def _error_message(resp: httpx.Response) -> str:
    """Extract the store's error text from a rejection body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200].strip()
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return resp.text[:200].strip()


class Transport:
    """Sends encoded payloads to the store's upload endpoint."""

    def __init__(
        self,
        client: StoreClient,
        *,
        path: str = UPLOAD_PATH,
        chunk_size: int = SEND_CHUNK_SIZE,
    ) -> None:
        self.client = client
        self.path = path
        self.chunk_size = chunk_size

    def _body_chunks(
        self,
        body: bytes,
        progress_callback: ProgressCallback | None,
    ) -> Iterator[bytes]:
        total = len(body)
        for offset in range(0, total, self.chunk_size):
            chunk = body[offset : offset + self.chunk_size]
            yield chunk
            if progress_callback:
                progress_callback(offset + len(chunk), total)

    def send(
        self,
        payload: EncodedPayload,
        progress_callback: ProgressCallback | None = None,
    ) -> Photo:
        """Upload one payload and return the stored record.

        Args:
            payload: Encoded content from the encoder.
            progress_callback: Called with (bytes_sent, total_bytes).

        Returns:
            Photo acknowledged by the store.

        Raises:
            TransportError: On a non-2xx acknowledgment or a network fault.
            ProtocolError: If a 2xx acknowledgment cannot be parsed.
        """
        body = build_request_body(payload)
        total = len(body)
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(total),
        }

        try:
            resp = self.client.stream_post(
                self.path,
                self._body_chunks(body, progress_callback),
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Upload timed out: {e}", category="network", file_path=payload.file_name
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"Connection failed: {e}", category="network", file_path=payload.file_name
            ) from e
        except httpx.StreamError as e:
            # The body generator was asked for a second pass.
            raise TransportError(
                f"Upload body could not be resent: {e}",
                category="network",
                file_path=payload.file_name,
            ) from e

        if not resp.is_success:
            message = _error_message(resp)
            detail = f"Failed to upload: HTTP {resp.status_code}"
            if message:
                detail = f"{detail} - {message}"
            raise TransportError(detail, status_code=resp.status_code, file_path=payload.file_name)

        try:
            record = UploadResponse.model_validate(resp.json()).photo
        except (ValueError, pydantic.ValidationError) as e:
            raise ProtocolError(
                f"Malformed upload acknowledgment: {e}",
                status_code=resp.status_code,
                file_path=payload.file_name,
            ) from e

        # Channels that buffer the body give no intermediate updates.
        if progress_callback:
            progress_callback(total, total)

        logger.debug("Stored %s as photo %s", payload.file_name, record.photo_id)
        return record
