"""
Authentication service for the Tonie cloud.

Handles the OAuth password grant and session teardown.
"""

import structlog

from toniebox.api.endpoints.auth import delete_session, request_token
from toniebox.api.http_client import HttpClient
from toniebox.exceptions import InvalidCredentialsError
from toniebox.models.auth import JWTToken

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Handles Tonie cloud authentication.

    The token lives exclusively in HttpClient. It is set once per login and
    never refreshed: an expired token surfaces as an UnauthorizedError on the
    next request and the caller has to log in again.
    """

    def __init__(self, http_client: HttpClient) -> None:
        """
        Args:
            http_client: HTTP client for API requests.
        """
        self._http = http_client

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is held."""
        return self._http.is_authenticated

    @property
    def token(self) -> JWTToken | None:
        return self._http.token

    def set_token(self, token: JWTToken) -> None:
        """Use a token obtained by an earlier login, skipping the password grant."""
        self._http.set_token(token)

    def login(self, username: str, password: str) -> JWTToken:
        """
        Log in with account credentials.

        On failure the previously held token (if any) is left untouched.

        Args:
            username: Account email address.
            password: Account password.

        Returns:
            The token now used for authenticated requests.

        Raises:
            InvalidCredentialsError: If username or password is empty.
            LoginError: If the identity provider rejects the credentials.
        """
        if (len(username) == 0) or (len(password) == 0):
            msg = "Username and password required"
            raise InvalidCredentialsError(msg)

        logger.info("Starting authentication")
        token = request_token(self._http, username, password)
        self._http.set_token(token)
        logger.info("Authentication successful", token_type=token.token_type or None)
        return token

    def disconnect(self) -> None:
        """
        Terminate the session on the server and drop the token.

        The request is sent even without a token. The token is only dropped
        once the server confirmed the logout.
        """
        logger.info("Logging out")
        delete_session(self._http)
        self._http.clear_token()
