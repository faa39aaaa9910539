"""
HTTP client for the Tonie cloud API.

Holds the bearer token, injects it into requests, validates status codes and
decodes JSON responses. Requests are synchronous and never retried.
"""

from collections.abc import Collection
from typing import IO, Any, Self

import httpx
import structlog

from toniebox.config import TonieboxConfig
from toniebox.exceptions import (
    APIError,
    NotFoundError,
    ResponseDecodeError,
    ServerError,
    UnauthorizedError,
)
from toniebox.models.auth import JWTToken

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "password",
        "policy",
        "x-amz-credential",
        "x-amz-signature",
        "x-amz-security-token",
    }
)

_OK = frozenset({httpx.codes.OK})
_OK_OR_NO_CONTENT = frozenset({httpx.codes.OK, httpx.codes.NO_CONTENT})


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class HttpClient:
    """
    Synchronous HTTP client for the Tonie cloud API.

    Not thread-safe: the token is shared mutable state, callers using one
    instance from several threads must lock around it.
    """

    def __init__(
        self,
        config: TonieboxConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport
        if transport is not None and config.proxy is not None:
            logger.warning("Transport bypassed by configured proxy", proxy=config.proxy)

        self._token: JWTToken | None = None
        self._client: httpx.Client | None = None

    def __enter__(self) -> Self:
        self._ensure_client()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._config.api_url,
                timeout=self._config.timeout,
                proxy=self._config.proxy,
                transport=self._transport,
                headers={"User-Agent": self._config.user_agent},
            )
        return self._client

    def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is None:
            logger.debug("Client not open.")
            return
        self._client.close()
        self._client = None

    @property
    def config(self) -> TonieboxConfig:
        return self._config

    @property
    def token(self) -> JWTToken | None:
        """Current token, or None before login."""
        return self._token

    def set_token(self, token: JWTToken) -> None:
        """Replace the current token unconditionally."""
        self._token = token

    def clear_token(self) -> None:
        self._token = None

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is held. The token is not validated."""
        return self._token is not None

    def get_json(self, url: str) -> Any:
        """
        GET a JSON resource.

        Args:
            url: API path (e.g. "/households") or absolute URL.

        Returns:
            Decoded JSON value.

        Raises:
            APIError: If the status is not 200.
            ResponseDecodeError: If the body is not JSON.
            httpx.TransportError: If the request fails due to network issues.
        """
        response = self._send("GET", url)
        self._check_status(response, url, accepted=_OK)
        return self._decode(response, url)

    def patch_json(self, url: str, body: dict[str, Any]) -> None:
        """
        PATCH a JSON body. The response body is not decoded.

        Raises:
            APIError: If the status is neither 200 nor 204.
        """
        response = self._send("PATCH", url, json=body)
        self._check_status(response, url, accepted=_OK_OR_NO_CONTENT)

    def post_json(self, url: str, body: dict[str, Any]) -> Any:
        """
        POST a JSON body and decode the JSON response.

        Raises:
            APIError: If the status is not 200.
            ResponseDecodeError: If the body is not JSON.
        """
        response = self._send("POST", url, json=body)
        self._check_status(response, url, accepted=_OK)
        return self._decode(response, url)

    def post_form(
        self,
        url: str,
        data: dict[str, str],
        *,
        error_cls: type[APIError] | None = None,
    ) -> Any:
        """
        POST a form-encoded body without authentication and decode the JSON response.

        Args:
            url: Absolute URL.
            data: Form fields.
            error_cls: Exception raised on a non-200 status instead of the default mapping.
        """
        response = self._send("POST", url, data=data, authenticated=False)
        self._check_status(response, url, accepted=_OK, error_cls=error_cls)
        return self._decode(response, url)

    def post_multipart(
        self,
        url: str,
        fields: list[tuple[str, str]],
        file_field: str,
        file: tuple[str, IO[bytes], str],
        *,
        error_cls: type[APIError] | None = None,
    ) -> None:
        """
        POST a multipart form without authentication (presigned object storage).

        Form fields are sent in the given order, followed by the file part.

        Security:
            The bearer token is never sent here: the signed policy in ``fields``
            is the only credential object storage receives.

        Raises:
            APIError: If the status is neither 200 nor 204.
        """
        response = self._send(
            "POST",
            url,
            data=dict(fields),
            files={file_field: file},
            authenticated=False,
        )
        self._check_status(response, url, accepted=_OK_OR_NO_CONTENT, error_cls=error_cls)

    def delete(self, url: str) -> None:
        """
        DELETE a resource. Bearer token attached only if present.

        Raises:
            APIError: If the status is neither 200 nor 204.
        """
        response = self._send("DELETE", url)
        self._check_status(response, url, accepted=_OK_OR_NO_CONTENT)

    def _send(
        self,
        method: str,
        url: str,
        *,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        token = self._token
        headers = {}
        if authenticated and token is not None:
            headers["Authorization"] = f"Bearer {token.access_token}"

        client = self._ensure_client()
        response = client.request(method, url, headers=headers, **kwargs)
        logger.debug("Request completed", method=method, url=url, status=response.status_code)
        return response

    @staticmethod
    def _check_status(
        response: httpx.Response,
        endpoint: str,
        *,
        accepted: Collection[int],
        error_cls: type[APIError] | None = None,
    ) -> None:
        if response.status_code in accepted:
            return

        status = response.status_code
        body = response.text
        logger.warning("Request failed", url=endpoint, status=status)

        if error_cls is None:
            if status in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
                error_cls = UnauthorizedError
            elif status == httpx.codes.NOT_FOUND:
                error_cls = NotFoundError
            elif status >= httpx.codes.INTERNAL_SERVER_ERROR:
                error_cls = ServerError
            else:
                error_cls = APIError

        msg = f"request failed with status {status}: {body}"
        raise error_cls(msg, status_code=status, body=body, endpoint=endpoint)

    @staticmethod
    def _decode(response: httpx.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            msg = "Invalid JSON response from API"
            raise ResponseDecodeError(msg, endpoint=endpoint) from e

