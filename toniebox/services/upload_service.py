"""
Chapter upload service.

Runs the three-step presigned upload: ticket request, object storage POST,
local chapter append.
"""

from pathlib import Path

import structlog

from toniebox.api.endpoints.files import request_upload_ticket, upload_to_storage
from toniebox.api.http_client import HttpClient
from toniebox.exceptions import UploadFileError
from toniebox.models.tonies import Chapter, CreativeTonie

logger = structlog.get_logger(__name__)


class UploadService:
    """Uploads audio files as new chapters of a Creative-Tonie."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def upload_chapter(self, tonie: CreativeTonie, path: str | Path, title: str) -> Chapter:
        """
        Upload an audio file and append it to the tonie's chapters.

        The chapter is only appended once object storage accepted the file.
        Nothing is persisted on the tonie itself: commit() is still required.

        Args:
            tonie: Target Creative-Tonie.
            path: Local audio file.
            title: Title of the new chapter.

        Returns:
            The appended chapter.

        Raises:
            UploadFileError: If the local file cannot be opened. No request is sent.
            APIError: If the ticket request fails.
            StorageUploadError: If object storage rejects the file.
        """
        path = Path(path)
        try:
            content = path.open("rb")
        except OSError as e:
            msg = f"Cannot open file for upload: {e.strerror or e}"
            raise UploadFileError(msg, path=str(path)) from e

        with content:
            ticket = request_upload_ticket(self._http)
            logger.debug("Uploading to object storage", file_id=ticket.file_id)
            upload_to_storage(self._http, ticket, content)

        chapter = Chapter(id=ticket.fields.key, file=ticket.file_id, title=title)
        tonie.append_chapter(chapter)
        logger.info("Chapter uploaded", tonie_id=tonie.id, chapter_id=chapter.id)
        return chapter
