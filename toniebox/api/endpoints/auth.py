"""Authentication-related API endpoints."""

import structlog

from toniebox.api.endpoints import decode
from toniebox.api.http_client import HttpClient
from toniebox.exceptions import LoginError
from toniebox.models.auth import JWTToken

logger = structlog.get_logger(__name__)

SESSIONS = "/sessions"


def request_token(http: HttpClient, username: str, password: str) -> JWTToken:
    """
    Exchange credentials for a token with the OAuth password grant.

    Args:
        http: Configured HTTP client.
        username: Account email address.
        password: Account password.

    Returns:
        Token decoded from the identity provider response.

    Raises:
        LoginError: If the identity provider does not answer 200.
        ResponseDecodeError: If the response carries no access token.
    """
    config = http.config
    data = http.post_form(
        config.token_url,
        {
            "grant_type": config.grant_type,
            "client_id": config.client_id,
            "scope": config.scope,
            "username": username,
            "password": password,
        },
        error_cls=LoginError,
    )
    return decode(config.token_url, JWTToken.from_dict, data)


def delete_session(http: HttpClient) -> None:
    """Terminate the session on the server."""
    http.delete(SESSIONS)
