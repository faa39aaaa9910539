"""File upload endpoints (upload ticket and presigned object storage POST)."""

from typing import IO

import structlog

from toniebox.api.endpoints import decode
from toniebox.api.http_client import HttpClient, sanitize_for_log
from toniebox.exceptions import StorageUploadError
from toniebox.models.tonies import UploadTicket

logger = structlog.get_logger(__name__)

FILE = "/file"


def request_upload_ticket(http: HttpClient) -> UploadTicket:
    """
    Ask the API for a single-use object storage destination.

    Returns:
        Ticket with the signed-policy fields and the server-assigned file id.
    """
    data = http.post_json(FILE, {"headers": {}})
    if isinstance(data, dict):
        logger.debug("Upload ticket received", ticket=sanitize_for_log(data))
    return decode(FILE, UploadTicket.from_dict, data)


def upload_to_storage(http: HttpClient, ticket: UploadTicket, content: IO[bytes]) -> None:
    """
    POST file content to object storage using a ticket's signed policy.

    Args:
        http: Configured HTTP client.
        ticket: Ticket from request_upload_ticket().
        content: Open binary file.

    Raises:
        StorageUploadError: If object storage answers anything but 200/204.
    """
    http.post_multipart(
        http.config.upload_url,
        ticket.fields.form_fields(),
        "file",
        (ticket.fields.key, content, "application/octet-stream"),
        error_cls=StorageUploadError,
    )
