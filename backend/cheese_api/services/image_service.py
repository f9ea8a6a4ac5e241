"""
Cheese Catalog Backend — Image Service
========================================

What:  Reads uploaded images into memory and builds data URIs for responses.
How:   The whole upload is read into bytes (no streaming, no disk); on the
       way out the stored bytes are base64-encoded into
       `data:<image_type>;base64,<payload>`.
Who:   Request handlers call read_upload(); CheeseService calls to_data_uri().

Storage model:
    Images live in the `cheeses.image_blob` column next to the record that
    owns them. There is no file storage and no external blob store.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any, Optional

from starlette.datastructures import UploadFile

from cheese_api.exceptions import ImageReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image after it has been read from the request."""

    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class ImageService:
    """
    Upload reading and data-URI encoding.

    Stateless; a single module-level instance is shared by the app.
    """

    def is_missing(self, upload: Any) -> bool:
        """
        True when no usable file part was sent.

        Multipart bodies may carry an empty string instead of a file when the
        client submits the form without choosing one, and a file part whose
        reported size is 0 is just as empty.
        """
        if not isinstance(upload, UploadFile):
            return True
        return upload.size == 0

    async def read_upload(self, upload: UploadFile) -> ImageUpload:
        """
        Read the full file part into memory.

        Raises:
            ImageReadError: the spooled upload could not be read.
        """
        try:
            data = await upload.read()
        except OSError as e:
            logger.error(
                "Failed to read uploaded image %s: %s",
                upload.filename,
                str(e),
                exc_info=True,
            )
            raise ImageReadError(
                context={"filename": upload.filename, "error_type": type(e).__name__}
            ) from e
        finally:
            await upload.close()

        logger.debug(
            "Read uploaded image: filename=%s, type=%s, size=%d bytes",
            upload.filename,
            upload.content_type,
            len(data),
        )
        return ImageUpload(
            filename=upload.filename,
            content_type=upload.content_type,
            data=data,
        )

    def to_data_uri(self, image_type: Optional[str], image_blob: Optional[bytes]) -> Optional[str]:
        """
        Encode stored image bytes as a data URI.

        Returns None when there is no blob. The MIME type is embedded as
        stored, even if it is None.
        """
        if image_blob is None:
            return None
        encoded = base64.b64encode(image_blob).decode("ascii")
        return f"data:{image_type};base64,{encoded}"


# ── Singleton Instance ────────────────────────────────────────────────────
image_service = ImageService()
