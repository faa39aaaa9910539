import io
from unittest.mock import Mock

import pytest

from toniebox.api.endpoints.files import request_upload_ticket, upload_to_storage
from toniebox.exceptions import ResponseDecodeError, StorageUploadError
from toniebox.models.tonies import UploadTicket
from toniebox.tests.utils.payloads import FILE_ID, UPLOAD_KEY, make_upload_ticket


def test_request_upload_ticket_posts_empty_headers(mock_http: Mock) -> None:
    mock_http.post_json.return_value = make_upload_ticket()

    ticket = request_upload_ticket(mock_http)

    mock_http.post_json.assert_called_once_with("/file", {"headers": {}})
    assert ticket.file_id == FILE_ID
    assert ticket.fields.key == UPLOAD_KEY
    assert ticket.fields.x_amz_algorithm == "AWS4-HMAC-SHA256"


def test_request_upload_ticket_without_fields_raises_decode_error(mock_http: Mock) -> None:
    mock_http.post_json.return_value = {"fileId": FILE_ID, "request": {}}

    with pytest.raises(ResponseDecodeError):
        request_upload_ticket(mock_http)


def test_upload_to_storage_posts_signed_fields_in_order(mock_http: Mock) -> None:
    ticket = UploadTicket.from_dict(make_upload_ticket())
    content = io.BytesIO(b"ID3audio")

    upload_to_storage(mock_http, ticket, content)

    mock_http.post_multipart.assert_called_once()
    call = mock_http.post_multipart.call_args
    url, fields, file_field, file = call.args
    assert url == "https://bxn-toniecloud-prod-upload.s3.amazonaws.com/"
    assert [name for name, _ in fields] == [
        "key",
        "x-amz-algorithm",
        "x-amz-credential",
        "x-amz-date",
        "policy",
        "x-amz-signature",
        "x-amz-security-token",
    ]
    assert file_field == "file"
    assert file == (UPLOAD_KEY, content, "application/octet-stream")
    assert call.kwargs == {"error_cls": StorageUploadError}
